from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from zavy.core import csrf
from zavy.core.utils import absolute_url
from zavy.domain.banners import AUTOPLAY_DELAY_MS, BANNER_HEIGHT_PX, DEFAULT_SLIDES
from zavy.domain.enums import Gender, business_definition_choices
from zavy.services.catalog_service import CatalogService
from zavy.services.session_service import current_user

router = APIRouter(prefix="", tags=["pages"])
catalog_service = CatalogService()

SITE_NAME = "Zavy"
SIGNUP_TABS = ("pf", "pj")


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates nao configurados")


def render(request: Request, template: str, context: dict | None = None, *, status_code: int = 200):
    """Renderiza um template com o contexto comum (usuario, categorias do menu, CSRF)."""
    token = csrf.ensure_csrf_token(request)
    base_context = {
        "site_name": SITE_NAME,
        "user": current_user(request),
        "nav_categories": catalog_service.list_categories(),
        "csrf_token": token,
        "canonical_url": absolute_url(request.url.path),
    }
    base_context.update(context or {})
    response = _templates(request).TemplateResponse(request, template, base_context, status_code=status_code)
    csrf.set_csrf_cookie(response, token)
    return response


def signup_context(tab: str = "pf", *, values: dict | None = None, errors: dict | None = None, error: str = "") -> dict:
    return {
        "title": f"Criar conta - {SITE_NAME}",
        "tab": tab if tab in SIGNUP_TABS else "pf",
        "values": values or {},
        "errors": errors or {},
        "error": error,
        "genders": [(g.value, g.value) for g in Gender],
        "definitions": business_definition_choices(),
    }


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return render(
        request,
        "home.html",
        {
            "title": SITE_NAME,
            "description": "An ecommerce store",
            "slides": DEFAULT_SLIDES,
            "banner_height": BANNER_HEIGHT_PX,
            "autoplay_delay": AUTOPLAY_DELAY_MS,
            "products": catalog_service.sellable_products(),
        },
    )


@router.get("/search", response_class=HTMLResponse)
def search(request: Request, q: str = "", category: int | None = None):
    query = (q or "").strip()
    return render(
        request,
        "search.html",
        {
            "title": f"Resultados da pesquisa: {query}",
            "description": f"Resultados da pesquisa para {query}",
            "query": query,
            "products": catalog_service.sellable_products(category_id=category, search_term=query),
        },
    )


@router.get("/signup", response_class=HTMLResponse)
def signup(request: Request, tab: str = "pf"):
    if current_user(request):
        return RedirectResponse("/", status_code=303)
    return render(request, "signup.html", signup_context(tab))


@router.get("/login", response_class=HTMLResponse)
def login(request: Request, error: str = ""):
    if current_user(request):
        return RedirectResponse("/", status_code=303)
    return render(request, "login.html", {"title": f"Entrar - {SITE_NAME}", "error": error, "username": ""})


# Silencia requisições de debug do Chrome (evita 404 ruidoso em logs)
@router.get("/.well-known/appspecific/com.chrome.devtools.json")
def chrome_devtools_wellknown():
    return PlainTextResponse("", status_code=204)
