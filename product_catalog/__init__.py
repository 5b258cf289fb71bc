"""Product Catalog service.

REST API over a relational catalog of products and categories.
"""
