from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from zavy.core import csrf
from zavy.core.rate_limiter import rate_limit_account, rate_limit_ip
from zavy.routers.pages import SITE_NAME, render, signup_context
from zavy.services.auth_service import (
    AccountExistsError,
    AuthError,
    AuthService,
    LoginPayload,
)
from zavy.services.session_service import (
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    set_session_cookie,
)
from zavy.services.signup_form import (
    CompanySignupForm,
    PersonSignupForm,
    form_errors,
    masked_values,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
auth_service = AuthService()

SIGNUP_FAILED = "Erro ao criar conta. Verifique os dados."
ACCOUNT_EXISTS = "Já existe uma conta com este e-mail."
INVALID_CREDENTIALS = "Credenciais inválidas"
LOGIN_ATTEMPTS_PER_ACCOUNT = 10


async def form_fields(request: Request) -> dict:
    """Campos texto do formulario enviado (arquivos sao ignorados)."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _signed_in_redirect(user_id: str) -> RedirectResponse:
    token = auth_service.start_session(user_id)
    response = RedirectResponse("/", status_code=303)
    set_session_cookie(response, token)
    return response


def _signup(request: Request, tab: str, form_cls, data: dict):
    rate_limit_ip(request, "auth:signup", limit=5, window_seconds=300)
    csrf.validate_csrf(request, data.pop(csrf.CSRF_FORM_FIELD, ""))
    values = masked_values(data)
    try:
        form = form_cls.model_validate(data)
    except ValidationError as exc:
        errors = form_errors(exc)
        logger.info("auth/signup/%s invalid fields: %s", tab, sorted(errors))
        return render(request, "signup.html", signup_context(tab, values=values, errors=errors), status_code=400)
    try:
        payload = form.to_signup_payload()
    except ValidationError as exc:
        logger.warning("auth/signup/%s payload rejected: %s", tab, [e["msg"] for e in exc.errors()])
        return render(request, "signup.html", signup_context(tab, values=values, error=SIGNUP_FAILED), status_code=400)
    try:
        summary = auth_service.signup(payload)
    except AccountExistsError:
        return render(request, "signup.html", signup_context(tab, values=values, error=ACCOUNT_EXISTS), status_code=409)
    except AuthError:
        return render(request, "signup.html", signup_context(tab, values=values, error=SIGNUP_FAILED), status_code=500)
    return _signed_in_redirect(summary.id)


@router.post("/signup/pf")
def signup_person(request: Request, data: dict = Depends(form_fields)):
    return _signup(request, "pf", PersonSignupForm, data)


@router.post("/signup/pj")
def signup_company(request: Request, data: dict = Depends(form_fields)):
    return _signup(request, "pj", CompanySignupForm, data)


@router.post("/login")
def do_login(request: Request, username: str = Form(""), password: str = Form(""), csrf_token: str = Form("")):
    rate_limit_ip(request, "auth:login", limit=5, window_seconds=60)
    csrf.validate_csrf(request, csrf_token)
    rate_limit_account("auth:login", username, limit=LOGIN_ATTEMPTS_PER_ACCOUNT, window_seconds=900)
    context = {"title": f"Entrar - {SITE_NAME}", "username": username}
    try:
        summary = auth_service.login(LoginPayload(username=username.strip(), password=password))
    except (ValidationError, AuthError):
        return render(request, "login.html", {**context, "error": INVALID_CREDENTIALS}, status_code=401)
    return _signed_in_redirect(summary.id)


@router.post("/logout")
def logout(request: Request, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    auth_service.logout(request.cookies.get(SESSION_COOKIE_NAME))
    response = RedirectResponse("/", status_code=303)
    clear_session_cookie(response)
    return response
