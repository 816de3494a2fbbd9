from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from zavy.core.utils import sanitized
from zavy.services.auth_service import (
    AccountExistsError,
    AuthError,
    AuthService,
    InvalidCredentialsError,
    LoginPayload,
    SignupPayload,
    UserNotFoundError,
)
from zavy.services.cep_service import CepLookupService
from zavy.services.session_service import current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])
auth_service = AuthService()
cep_service = CepLookupService()


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


async def json_body(request: Request) -> Any:
    """Corpo JSON da requisicao; JSON malformado vira None e cai na validacao (400)."""
    try:
        return await request.json()
    except ValueError:
        logger.warning("%s: malformed JSON body", request.url.path)
        return None


@router.post("/signup")
def signup(body: Any = Depends(json_body)):
    logger.info("api/signup body (sanitized): %s", sanitized(body, ("username", "name", "personType")))
    try:
        payload = SignupPayload.model_validate(body)
    except ValidationError as exc:
        logger.warning("api/signup validation failed: %s", [e["msg"] for e in exc.errors()])
        return _message(400, "Something wrong with your input")
    try:
        summary = auth_service.signup(payload)
    except AccountExistsError:
        return _message(409, "This username already exists")
    except AuthError:
        return _message(500, "Something went wrong")
    except Exception:
        logger.exception("api/signup unexpected error")
        return _message(500, "An Error Occured")
    return summary.model_dump()


@router.post("/login")
def login(body: Any = Depends(json_body)):
    logger.info("api/login body (sanitized): %s", sanitized(body, ("username",)))
    try:
        payload = LoginPayload.model_validate(body)
    except ValidationError as exc:
        logger.warning("api/login validation failed: %s", [e["msg"] for e in exc.errors()])
        return _message(400, "Something wrong with your input")
    try:
        summary = auth_service.login(payload)
    except InvalidCredentialsError:
        return _message(409, "Invalid Credentials")
    except UserNotFoundError:
        return _message(500, "No Such User")
    except Exception:
        logger.exception("api/login unexpected error")
        return _message(500, "An Error Occured")
    return {"name": summary.name, "username": summary.username, "id": summary.id}


@router.get("/session")
def session_user(request: Request):
    user = current_user(request)
    if not user:
        return None
    return {"id": user.id, "name": user.name, "username": user.username or user.email, "email": user.email}


@router.get("/cep/{cep}")
def cep_lookup(cep: str):
    address = cep_service.lookup(cep)
    if not address:
        raise HTTPException(404, "CEP não encontrado")
    return address.as_dict()
