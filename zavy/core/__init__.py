"""
Core utilities shared across the Zavy storefront.

This package hosts configuration, logging setup, password hashing and the
cross-cutting request guards (CSRF, rate limit). Routers and services depend
on these primitives instead of reading os.environ or hashing on their own.
"""
