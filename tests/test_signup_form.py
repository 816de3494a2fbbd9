from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from zavy.domain.enums import PersonType
from zavy.services.signup_form import (
    CompanySignupForm,
    PersonSignupForm,
    form_errors,
    masked_values,
)


def _errors(form_cls, data: dict) -> dict:
    with pytest.raises(ValidationError) as exc:
        form_cls.model_validate(data)
    return form_errors(exc.value)


def test_person_form_builds_signup_payload(person_form):
    form = PersonSignupForm.model_validate(person_form)
    payload = form.to_signup_payload()

    assert payload.person_type is PersonType.PF
    assert payload.username == "maria@example.com"
    assert payload.birth_date == date(1990, 5, 10)
    assert payload.street_number == "1000"
    assert payload.district == "Bela Vista"
    assert payload.country == "Brasil"
    assert payload.address_line2 is None


def test_empty_person_form_reports_each_field():
    errors = _errors(PersonSignupForm, {})
    assert errors["name"] == "Nome completo é obrigatório"
    assert errors["email"] == "Informe o e-mail"
    assert errors["confirm_email"] == "Confirme o e-mail"
    assert errors["password"] == "Mínimo de 8 caracteres"
    assert errors["cpf"] == "CPF inválido"
    assert errors["birth_date"] == "Data de nascimento é obrigatória"
    assert errors["gender"] == "Selecione o gênero"
    assert errors["phone"] == "Telefone é obrigatório"
    assert errors["pf_definition"] == "Selecione o que te define melhor"
    assert errors["postal_code"] == "CEP é obrigatório"
    assert errors["street_number"] == "Número é obrigatório"
    # sem senha valida nao ha o que confirmar
    assert "confirm_password" not in errors


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("cpf", "123.456.789-00", "CPF inválido"),
        ("confirm_email", "outra@example.com", "E-mails não coincidem"),
        ("confirm_password", "segredo999", "Senhas não coincidem"),
        ("birth_date", "1990-05-10", "Use o formato dd/mm/aaaa"),
        ("birth_date", "31/02/2000", "Data de nascimento inválida"),
        ("birth_date", "10/13/1990", "Data de nascimento inválida"),
        ("postal_code", "0131", "CEP inválido"),
        ("gender", "Outro", "Selecione o gênero"),
    ],
)
def test_person_form_field_rules(person_form, field, value, message):
    person_form[field] = value
    assert _errors(PersonSignupForm, person_form) == {field: message}


def test_company_form_builds_signup_payload(company_form):
    form = CompanySignupForm.model_validate(company_form)
    payload = form.to_signup_payload()

    assert payload.person_type is PersonType.PJ
    assert payload.name == "João Souza"
    assert payload.cnpj == "11.222.333/0001-81"
    assert payload.trade_name == "Pet Feliz"
    assert payload.birth_date == date(1980, 2, 1)
    assert payload.state_registration_isento is False
    assert payload.phone is None


def test_company_form_state_registration_or_isento(company_form):
    company_form["state_registration"] = ""
    errors = _errors(CompanySignupForm, company_form)
    assert errors == {"state_registration": "Inscrição estadual é obrigatória (ou marque Isento)"}

    company_form["state_registration_isento"] = "on"
    form = CompanySignupForm.model_validate(company_form)
    assert form.state_registration_isento is True
    assert form.to_signup_payload().state_registration is None


def test_company_form_rules(company_form):
    company_form.update(cnpj="11.222.333/0001-80", whatsapp="", pj_definition="", postal_code="0131")
    errors = _errors(CompanySignupForm, company_form)
    assert errors == {
        "cnpj": "CNPJ inválido",
        "whatsapp": "WhatsApp é obrigatório",
        "pj_definition": "Selecione o que define sua empresa",
    }


def test_masked_values_reformats_and_drops_passwords():
    values = masked_values(
        {"cpf": "52998224725", "phone": "11987654321", "postal_code": "", "password": "x", "confirm_password": "x", "city": "Recife"}
    )
    assert values == {"cpf": "529.982.247-25", "phone": "(11) 98765-4321", "postal_code": "", "city": "Recife"}
