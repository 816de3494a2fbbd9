"""
Credential issuance use cases: signup (hash + user + credentials account) and login.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError

from zavy.core.security import hash_password, needs_rehash, verify_password
from zavy.domain.documents import birth_date_to_iso
from zavy.domain.enums import BusinessDefinition, PersonType
from zavy.repositories.sql_repository import SQLRepository
from zavy.services.session_service import delete_session, issue_session

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
DEFAULT_CITY = "Cidade"
DEFAULT_REGION = "Estado"
DEFAULT_COUNTRY = "Brasil"


class AuthError(Exception):
    """Base class for authentication-related exceptions."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class RegistrationError(AuthError):
    pass


class AccountExistsError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass


class UserNotFoundError(AuthError):
    pass


# Campos texto livre: string vazia equivale a campo ausente. Enums e booleanos nao.
_FREE_TEXT_FIELDS = (
    "cpf",
    "cnpj",
    "birth_date",
    "gender",
    "phone",
    "whatsapp",
    "company_name",
    "trade_name",
    "state_registration",
    "alternate_phone",
    "address_label",
    "address_line1",
    "address_line2",
    "street_number",
    "district",
    "city",
    "postal_code",
    "region",
    "country",
)


class SignupPayload(BaseModel):
    """Corpo JSON do cadastro; aceita as chaves camelCase do formulario web."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1, max_length=50)
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8, max_length=64)
    person_type: Optional[PersonType] = None
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    company_name: Optional[str] = None
    trade_name: Optional[str] = None
    state_registration: Optional[str] = None
    state_registration_isento: Optional[StrictBool] = None
    alternate_phone: Optional[str] = None
    pf_definition: Optional[BusinessDefinition] = None
    pj_definition: Optional[BusinessDefinition] = None
    marketing_opt_in: Optional[StrictBool] = None
    address_label: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    street_number: Optional[str] = Field(default=None, alias="StreetNumber")
    district: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    @field_validator(*_FREE_TEXT_FIELDS, mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("birth_date", mode="before")
    @classmethod
    def _accept_br_date(cls, value):
        if isinstance(value, str):
            return birth_date_to_iso(value.strip())
        return value

    @model_validator(mode="after")
    def _document_for_person_type(self):
        if self.person_type == PersonType.PF and not self.cpf:
            raise ValueError("Informe CPF para PF ou CNPJ para PJ")
        if self.person_type == PersonType.PJ and not self.cnpj:
            raise ValueError("Informe CPF para PF ou CNPJ para PJ")
        return self


class LoginPayload(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=64)


class UserSummary(BaseModel):
    id: str
    name: str
    username: str


@dataclass
class AuthService:
    """Handles signup, login and session issuance for credential users."""

    def __post_init__(self):
        self.repository = SQLRepository()

    # -------------------------------------- helpers --------------------------------------
    def _user_fields(self, payload: SignupPayload, password_hash: str) -> dict:
        return {
            "name": payload.name,
            "username": payload.username,
            "email": payload.username,
            "password": password_hash,
            "person_type": payload.person_type,
            "cpf": payload.cpf,
            "cnpj": payload.cnpj,
            "birth_date": payload.birth_date,
            "gender": payload.gender,
            "phone": payload.phone,
            "whatsapp": payload.whatsapp,
            "alternate_phone": payload.alternate_phone,
            "company_name": payload.company_name,
            "trade_name": payload.trade_name,
            "state_registration": payload.state_registration,
            "state_registration_isento": payload.state_registration_isento,
            "pf_definition": payload.pf_definition,
            "pj_definition": payload.pj_definition,
            "marketing_opt_in": bool(payload.marketing_opt_in),
        }

    def _initial_address(self, payload: SignupPayload) -> dict | None:
        if not payload.address_line1:
            return None
        return {
            "label": payload.address_label,
            "address_line1": payload.address_line1,
            "address_line2": payload.address_line2,
            "street_number": payload.street_number,
            "district": payload.district,
            "city": payload.city or DEFAULT_CITY,
            "postal_code": payload.postal_code,
            "region": payload.region or DEFAULT_REGION,
            "country": payload.country or DEFAULT_COUNTRY,
        }

    def _credentials_account(self) -> dict:
        return {
            "provider": CREDENTIALS_PROVIDER,
            "type": CREDENTIALS_PROVIDER,
            "provider_account_id": str(uuid.uuid4()),
        }

    # -------------------------------------- cadastro --------------------------------------
    def signup(self, payload: SignupPayload) -> UserSummary:
        username = payload.username
        if self.repository.find_user_by_identity(username):
            logger.warning("signup: username already exists: %s", username)
            raise AccountExistsError("This username already exists")

        password_hash = hash_password(payload.password)
        try:
            user = self.repository.create_user(
                self._user_fields(payload, password_hash),
                self._initial_address(payload),
                self._credentials_account(),
            )
        except IntegrityError as exc:
            # Cadastro concorrente com o mesmo identificador.
            logger.warning("signup: integrity error for %s: %s", username, exc.orig)
            raise AccountExistsError("This username already exists") from exc
        logger.info("signup: user and credentials account created id=%s username=%s", user.id, user.username)

        shown_username = user.username or user.email
        if not (user.name and shown_username):
            logger.error("signup: user %s created but name/username missing", user.id)
            raise RegistrationError("Something went wrong")
        return UserSummary(id=user.id, name=user.name, username=shown_username)

    # -------------------------------------- login --------------------------------------
    def login(self, payload: LoginPayload) -> UserSummary:
        user = self.repository.get_user_by_username(payload.username)
        logger.info("login: user lookup %s", "FOUND" if user else "NOT_FOUND")
        if user and user.password:
            if not verify_password(payload.password, user.password):
                logger.warning("login: invalid credentials for username: %s", payload.username)
                raise InvalidCredentialsError("Invalid Credentials")
            if needs_rehash(user.password):
                self.repository.update_user_password(user.id, hash_password(payload.password))
            if user.name and user.username:
                logger.info("login: success id=%s", user.id)
                return UserSummary(id=user.id, name=user.name, username=user.username)
        logger.warning("login: no such user for username: %s", payload.username)
        raise UserNotFoundError("No Such User")

    # -------------------------------------- sessoes --------------------------------------
    def start_session(self, user_id: str) -> str:
        return issue_session(user_id)

    def logout(self, session_token: Optional[str]) -> None:
        if not session_token:
            return
        delete_session(session_token)
