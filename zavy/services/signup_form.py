"""
Validacao server-side dos formularios de cadastro (abas Pessoa Fisica / Pessoa Juridica).

Os formularios chegam como campos de texto; cada regra devolve a mensagem exibida
ao lado do campo. Apos validados, sao convertidos em SignupPayload para o AuthService.
"""
from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from zavy.domain.documents import (
    birth_date_to_iso,
    format_birth_date,
    format_cep,
    format_cnpj,
    format_cpf,
    format_phone_br,
    is_birth_date_br,
    is_valid_cep,
    is_valid_cnpj,
    is_valid_cpf,
)
from zavy.domain.enums import BusinessDefinition, Gender, PersonType
from zavy.services.auth_service import DEFAULT_COUNTRY, SignupPayload

REQUIRED_MESSAGES = {
    "name": "Nome completo é obrigatório",
    "contact_name": "Nome completo é obrigatório",
    "company_name": "Razão social é obrigatória",
    "trade_name": "Nome fantasia é obrigatório",
    "email": "Informe o e-mail",
    "confirm_email": "Confirme o e-mail",
    "birth_date": "Data de nascimento é obrigatória",
    "phone": "Telefone é obrigatório",
    "whatsapp": "WhatsApp é obrigatório",
    "address_label": "Nome identificador é obrigatório",
    "postal_code": "CEP é obrigatório",
    "region": "Estado é obrigatório",
    "district": "Bairro é obrigatório",
    "city": "Cidade é obrigatória",
    "address_line1": "Endereço é obrigatório",
    "street_number": "Número é obrigatório",
}

_MASKS = {
    "cpf": format_cpf,
    "cnpj": format_cnpj,
    "postal_code": format_cep,
    "birth_date": format_birth_date,
    "phone": format_phone_br,
    "whatsapp": format_phone_br,
    "alternate_phone": format_phone_br,
}
_GENDERS = {g.value for g in Gender}
_DEFINITIONS = {d.value for d in BusinessDefinition}


def _required(value: str, field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(REQUIRED_MESSAGES[field_name])
    return value


def _confirmed(value: str, info: ValidationInfo, other: str, message: str) -> str:
    if other in info.data and value != info.data[other]:
        raise ValueError(message)
    return value


class _SignupForm(BaseModel):
    """Campos e regras comuns as duas abas (credenciais, contato e endereco)."""

    model_config = ConfigDict(extra="ignore", validate_default=True)

    strict_cep: ClassVar[bool] = False
    definition_message: ClassVar[str] = ""

    email: str = ""
    confirm_email: str = ""
    password: str = ""
    confirm_password: str = ""
    birth_date: str = ""
    gender: str = ""
    phone: str = ""
    whatsapp: str = ""
    alternate_phone: str = ""
    marketing_opt_in: bool = False
    address_label: str = ""
    postal_code: str = ""
    region: str = ""
    district: str = ""
    city: str = ""
    address_line1: str = ""
    street_number: str = ""
    address_line2: str = ""

    @field_validator("email", "address_label", "region", "district", "city", "address_line1", "street_number")
    @classmethod
    def check_required(cls, value: str, info: ValidationInfo) -> str:
        return _required(value, info.field_name)

    @field_validator("confirm_email")
    @classmethod
    def check_confirm_email(cls, value: str, info: ValidationInfo) -> str:
        value = _required(value, info.field_name)
        return _confirmed(value, info, "email", "E-mails não coincidem")

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value or "") < 8:
            raise ValueError("Mínimo de 8 caracteres")
        return value

    @field_validator("confirm_password")
    @classmethod
    def check_confirm_password(cls, value: str, info: ValidationInfo) -> str:
        return _confirmed(value, info, "password", "Senhas não coincidem")

    @field_validator("birth_date")
    @classmethod
    def check_birth_date(cls, value: str, info: ValidationInfo) -> str:
        value = _required(value, info.field_name)
        if not is_birth_date_br(value):
            raise ValueError("Use o formato dd/mm/aaaa")
        try:
            datetime.strptime(value, "%d/%m/%Y")
        except ValueError:
            raise ValueError("Data de nascimento inválida") from None
        return value

    @field_validator("gender")
    @classmethod
    def check_gender(cls, value: str) -> str:
        if value not in _GENDERS:
            raise ValueError("Selecione o gênero")
        return value

    @field_validator("postal_code")
    @classmethod
    def check_postal_code(cls, value: str, info: ValidationInfo) -> str:
        value = _required(value, info.field_name)
        if cls.strict_cep and not is_valid_cep(value):
            raise ValueError("CEP inválido")
        return value

    @classmethod
    def _check_definition(cls, value: str) -> str:
        if value not in _DEFINITIONS:
            raise ValueError(cls.definition_message)
        return value

    def address_payload(self) -> dict:
        return {
            "address_label": self.address_label,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2.strip() or None,
            "street_number": self.street_number,
            "district": self.district,
            "city": self.city,
            "postal_code": self.postal_code,
            "region": self.region,
            "country": DEFAULT_COUNTRY,
        }


class PersonSignupForm(_SignupForm):
    """Aba CPF (pessoa fisica)."""

    strict_cep: ClassVar[bool] = True
    definition_message: ClassVar[str] = "Selecione o que te define melhor"

    name: str = ""
    cpf: str = ""
    pf_definition: str = ""

    @field_validator("name", "phone")
    @classmethod
    def check_person_required(cls, value: str, info: ValidationInfo) -> str:
        return _required(value, info.field_name)

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value: str) -> str:
        value = (value or "").strip()
        if len(value) < 11 or not is_valid_cpf(value):
            raise ValueError("CPF inválido")
        return value

    @field_validator("pf_definition")
    @classmethod
    def check_pf_definition(cls, value: str) -> str:
        return cls._check_definition(value)

    def to_signup_payload(self) -> SignupPayload:
        return SignupPayload(
            name=self.name,
            username=self.email,
            password=self.password,
            person_type=PersonType.PF,
            cpf=self.cpf,
            birth_date=birth_date_to_iso(self.birth_date),
            gender=self.gender,
            phone=self.phone,
            whatsapp=self.whatsapp or None,
            alternate_phone=self.alternate_phone or None,
            pf_definition=self.pf_definition,
            marketing_opt_in=self.marketing_opt_in,
            **self.address_payload(),
        )


class CompanySignupForm(_SignupForm):
    """Aba CNPJ (pessoa juridica)."""

    definition_message: ClassVar[str] = "Selecione o que define sua empresa"

    company_name: str = ""
    trade_name: str = ""
    contact_name: str = ""
    cnpj: str = ""
    # isento vem antes para que a regra da IE possa consulta-lo
    state_registration_isento: bool = False
    state_registration: str = ""
    pj_definition: str = ""

    @field_validator("company_name", "trade_name", "contact_name", "whatsapp")
    @classmethod
    def check_company_required(cls, value: str, info: ValidationInfo) -> str:
        return _required(value, info.field_name)

    @field_validator("cnpj")
    @classmethod
    def check_cnpj(cls, value: str) -> str:
        value = (value or "").strip()
        if len(value) < 14 or not is_valid_cnpj(value):
            raise ValueError("CNPJ inválido")
        return value

    @field_validator("state_registration")
    @classmethod
    def check_state_registration(cls, value: str, info: ValidationInfo) -> str:
        value = (value or "").strip()
        if not value and not info.data.get("state_registration_isento"):
            raise ValueError("Inscrição estadual é obrigatória (ou marque Isento)")
        return value

    @field_validator("pj_definition")
    @classmethod
    def check_pj_definition(cls, value: str) -> str:
        return cls._check_definition(value)

    def to_signup_payload(self) -> SignupPayload:
        return SignupPayload(
            name=self.contact_name,
            username=self.email,
            password=self.password,
            person_type=PersonType.PJ,
            cnpj=self.cnpj,
            company_name=self.company_name,
            trade_name=self.trade_name,
            birth_date=birth_date_to_iso(self.birth_date),
            gender=self.gender,
            state_registration=self.state_registration.strip() or None,
            state_registration_isento=self.state_registration_isento,
            phone=self.phone or None,
            whatsapp=self.whatsapp,
            alternate_phone=self.alternate_phone or None,
            pj_definition=self.pj_definition,
            marketing_opt_in=self.marketing_opt_in,
            **self.address_payload(),
        )


def form_errors(exc: ValidationError) -> dict[str, str]:
    """Primeira mensagem de erro por campo, no formato exibido pelo template."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__all__"
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else err.get("msg", "")
        errors.setdefault(field, message)
    return errors


def masked_values(data: dict) -> dict:
    """Reaplica as mascaras de documento/telefone para reexibir o formulario."""
    masked = {}
    for key, value in (data or {}).items():
        if key in ("password", "confirm_password"):
            continue
        mask = _MASKS.get(key)
        masked[key] = mask(value) if mask and isinstance(value, str) and value else value
    return masked
