import hashlib
import logging
import os
import pathlib
import shutil

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from zavy.core.config import get_settings
from zavy.core.logging import configure_logging
from zavy.routers import api as api_router
from zavy.routers import auth as auth_router
from zavy.routers import catalog as catalog_router
from zavy.routers import pages as pages_router

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https://res.cloudinary.com https://placehold.co https://images.unsplash.com; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self' 'unsafe-inline'; "
            "connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class CachedStaticFiles(StaticFiles):
    def set_headers(self, scope, resp, path, stat_result):
        # Cache forte para assets versionados por fingerprint
        resp.headers["Cache-Control"] = "public, max-age=31536000, immutable"


BASE = os.path.dirname(__file__)
WEB = os.path.abspath(os.path.join(BASE, "..", "web"))
TEMPLATES = os.path.abspath(os.path.join(BASE, "..", "templates"))


def _fingerprint_asset(rel_path: str) -> str:
    """
    Gera copia com hash curto no nome: "store.css" -> "store.<hash8>.css".
    Retorna o nome do arquivo versionado (sem /static).
    """
    src = pathlib.Path(WEB) / rel_path
    if not src.exists():
        return rel_path.replace("\\", "/")
    h = hashlib.sha1(src.read_bytes()).hexdigest()[:8]
    dst = src.with_name(f"{src.stem}.{h}{src.suffix}")
    if not dst.exists():
        shutil.copy2(src, dst)
    return dst.name


def build_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=TEMPLATES)


def create_app() -> FastAPI:
    """Factory compativel com uvicorn/gunicorn (uvicorn zavy.app:create_app --factory)."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(title="Zavy Storefront")
    app.mount("/static", CachedStaticFiles(directory=WEB, check_dir=False), name="static")

    templates = build_templates()
    try:
        css_href = f"/static/{_fingerprint_asset('store.css')}"
    except OSError:
        css_href = "/static/store.css"
    templates.env.globals["css_href"] = css_href
    app.state.templates = templates

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:8000", "http://127.0.0.1:8000", "http://localhost:3000"})
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    @app.get("/favicon.ico")
    def favicon():
        ico_path = os.path.join(WEB, "favicon.ico")
        if os.path.exists(ico_path):
            return FileResponse(ico_path, media_type="image/x-icon")
        return Response(status_code=204)

    app.include_router(api_router.router)
    app.include_router(catalog_router.router)
    app.include_router(auth_router.router)
    app.include_router(pages_router.router)

    logger.info("Zavy storefront ready (env=%s)", settings.app_env)
    return app
