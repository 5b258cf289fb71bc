"""Tests for category API endpoints."""

from fastapi.testclient import TestClient


class TestListCategories:
    """Tests for GET /api/categories."""

    def test_lists_active_categories_by_name(self, client: TestClient, catalog_data: dict[str, int]) -> None:
        """Inactive categories are hidden, the rest ordered by name."""
        response = client.get("/api/categories")
        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert names == ["Clothing", "Electronics", "Kitchen"]

    def test_empty(self, client: TestClient) -> None:
        """No categories gives an empty list."""
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == []


class TestGetCategory:
    """Tests for GET /api/categories/{id}."""

    def test_get_category(self, client: TestClient, catalog_data: dict[str, int]) -> None:
        """Should return category details."""
        category_id = catalog_data["Electronics"]
        response = client.get(f"/api/categories/{category_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == category_id
        assert data["name"] == "Electronics"
        assert data["description"] == "Electronics items"
        assert data["is_active"] is True

    def test_get_missing_category(self, client: TestClient, catalog_data: dict[str, int]) -> None:
        """Unknown ID is a 404 problem document."""
        response = client.get("/api/categories/99999")
        assert response.status_code == 404
        data = response.json()
        assert data["title"] == "Category not found"
        assert "99999" in data["detail"]


class TestCreateCategory:
    """Tests for POST /api/categories."""

    def test_create_category(self, client: TestClient) -> None:
        """Should create an active category."""
        response = client.post(
            "/api/categories",
            json={"name": "Toys", "description": "Games and toys"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Toys"
        assert data["description"] == "Games and toys"
        assert data["is_active"] is True
        assert response.headers["Location"] == f"/api/categories/{data['id']}"

        listed = client.get("/api/categories").json()
        assert [c["name"] for c in listed] == ["Toys"]

    def test_new_category_accepts_products(self, client: TestClient) -> None:
        """Products can be created in a freshly created category."""
        category = client.post("/api/categories", json={"name": "Garden"}).json()
        response = client.post(
            "/api/products",
            json={
                "name": "Rake",
                "price": 15.5,
                "category_id": category["id"],
                "stock_quantity": 4,
            },
        )
        assert response.status_code == 201
        assert response.json()["category_name"] == "Garden"

    def test_blank_name_rejected(self, client: TestClient) -> None:
        """Whitespace-only names are rejected."""
        response = client.post("/api/categories", json={"name": "   "})
        assert response.status_code == 400
        assert "name" in response.json()["errors"]

    def test_long_fields_rejected(self, client: TestClient) -> None:
        """Name over 100 and description over 500 characters are rejected."""
        response = client.post(
            "/api/categories",
            json={"name": "x" * 101, "description": "y" * 501},
        )
        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"name", "description"}
