"""Entry point for uvicorn/gunicorn: ``uvicorn realty_api.app_factory:app``."""
from realty_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
