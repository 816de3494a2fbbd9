"""Zavy pet-supplies storefront: catalog pages plus credential signup/login."""

__version__ = "0.1.0"
