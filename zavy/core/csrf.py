"""
Protecao CSRF dos formularios HTML (cadastro, login, logout).

Double-submit: o token vai num cookie legivel e num campo oculto do formulario;
os dois precisam coincidir. Quando o navegador envia Origin/Referer, a origem
(esquema + host) precisa ser a da propria requisicao ou a de PUBLIC_BASE_URL.
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional, Tuple
from urllib import parse as urlparse

from fastapi import HTTPException, Request, Response

from zavy.core.config import get_settings

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "x-csrf-token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_COOKIE_MAX_AGE = 7 * 24 * 60 * 60
MIN_TOKEN_LENGTH = 16

Origin = Tuple[str, str]


def ensure_csrf_token(request: Request) -> str:
    """Reaproveita o token do cookie; gera um novo se ausente ou curto demais."""
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token or len(token) < MIN_TOKEN_LENGTH:
        token = secrets.token_urlsafe(32)
    return token


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        max_age=CSRF_COOKIE_MAX_AGE,
        httponly=False,
        secure=get_settings().app_env == "prod",
        samesite="lax",
        path="/",
    )


def _origin_of(url: str) -> Optional[Origin]:
    try:
        parsed = urlparse.urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.hostname:
        return None
    return parsed.scheme.lower(), parsed.hostname.lower()


def _trusted_origins(request: Request) -> set[Origin]:
    host = (request.headers.get("host") or "").split(":", 1)[0].lower()
    trusted = {(request.url.scheme.lower(), host)}
    public = _origin_of(get_settings().public_base_url)
    if public:
        trusted.add(public)
    return trusted


def _validate_origin(request: Request) -> None:
    source = request.headers.get("origin") or request.headers.get("referer") or ""
    if not source:
        return
    origin = _origin_of(source)
    if origin is None or origin not in _trusted_origins(request):
        logger.warning("csrf: rejected origin %r for %s", source, request.url.path)
        raise HTTPException(403, "Origem inválida.")


def validate_csrf(request: Request, supplied_token: str | None) -> None:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    token = (supplied_token or "").strip() or (request.headers.get(CSRF_HEADER_NAME) or "").strip()
    if not cookie_token or not token:
        raise HTTPException(403, "Token CSRF ausente.")
    if not secrets.compare_digest(cookie_token, token):
        raise HTTPException(403, "Token CSRF inválido.")
    _validate_origin(request)
