"""ASGI entry point: uvicorn zavy.app_factory:app"""
from zavy.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
