"""
FastAPI routers grouped by concern (JSON api, catalog, auth forms, pages).

Each module exposes an APIRouter included by zavy.app.
"""
