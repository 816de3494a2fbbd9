"""
High-level use cases for the Zavy storefront.

Routers call these services instead of touching SQLAlchemy sessions or
hashing passwords themselves.
"""
