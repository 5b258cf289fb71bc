"""Run the API with uvicorn: ``python -m product_catalog``."""

import uvicorn

from product_catalog.infrastructure.config import settings


def main() -> None:
    """Serve the application."""
    uvicorn.run(
        "product_catalog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
