from __future__ import annotations

from datetime import date

import pytest
from argon2 import PasswordHasher
from pydantic import ValidationError

from zavy.core.security import needs_rehash, verify_password
from zavy.domain.enums import BusinessDefinition, PersonType
from zavy.repositories.sql_repository import SQLRepository
from zavy.services.auth_service import (
    AccountExistsError,
    AuthService,
    InvalidCredentialsError,
    LoginPayload,
    SignupPayload,
    UserNotFoundError,
)
from zavy.services.session_service import user_for_token


def _payload(**overrides) -> SignupPayload:
    data = {
        "name": "Maria Silva",
        "username": "maria@example.com",
        "password": "segredo123",
        "personType": "PF",
        "cpf": "529.982.247-25",
    }
    data.update(overrides)
    return SignupPayload.model_validate(data)


def test_payload_accepts_camel_case_and_br_birth_date():
    payload = SignupPayload.model_validate(
        {
            "name": "Maria",
            "username": "maria@example.com",
            "password": "segredo123",
            "personType": "PF",
            "cpf": "529.982.247-25",
            "birthDate": "10/05/1990",
            "pfDefinition": "CONSUMIDOR_FINAL",
            "addressLine1": "Av. Paulista",
            "StreetNumber": "1000",
            "postalCode": "01310-100",
            "phone": "   ",
        }
    )
    assert payload.person_type is PersonType.PF
    assert payload.birth_date == date(1990, 5, 10)
    assert payload.pf_definition is BusinessDefinition.CONSUMIDOR_FINAL
    assert payload.street_number == "1000"
    assert payload.postal_code == "01310-100"
    assert payload.phone is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"password": "curta"},
        {"password": "x" * 65},
        {"name": ""},
        {"name": "n" * 51},
        {"cpf": None},
        {"personType": "PJ"},
        {"personType": ""},
        {"pjDefinition": ""},
        {"stateRegistrationIsento": "yes"},
        {"marketingOptIn": 1},
    ],
)
def test_payload_rejects_invalid_input(overrides):
    with pytest.raises(ValidationError):
        _payload(**overrides)


def test_signup_creates_user_buyer_address_and_account(db_env):
    svc = AuthService()
    summary = svc.signup(_payload(addressLine1="Rua das Flores", district="Centro", StreetNumber="12"))

    assert summary.name == "Maria Silva"
    assert summary.username == "maria@example.com"

    repo = SQLRepository()
    user = repo.get_user(summary.id)
    assert user.email == "maria@example.com"
    assert user.password != "segredo123"
    assert verify_password("segredo123", user.password)

    accounts = repo.get_accounts_for_user(summary.id)
    assert len(accounts) == 1
    assert accounts[0].provider == "credentials"

    address = repo.get_default_address(summary.id)
    assert address.address_line1 == "Rua das Flores"
    assert address.district == "Centro"
    # cidade/estado ausentes recebem os valores padrao
    assert (address.city, address.region, address.country) == ("Cidade", "Estado", "Brasil")


def test_signup_without_address_line_skips_address(db_env):
    svc = AuthService()
    summary = svc.signup(_payload(postalCode="01310-100"))
    repo = SQLRepository()
    assert repo.get_buyer_for_user(summary.id) is not None
    assert repo.get_addresses_for_user(summary.id) == []


def test_signup_duplicate_username_raises(db_env):
    svc = AuthService()
    svc.signup(_payload())
    with pytest.raises(AccountExistsError) as exc:
        svc.signup(_payload(name="Outra Maria"))
    assert exc.value.message == "This username already exists"


def test_login_success_and_failures(db_env):
    svc = AuthService()
    created = svc.signup(_payload())

    summary = svc.login(LoginPayload(username="maria@example.com", password="segredo123"))
    assert summary.id == created.id

    with pytest.raises(InvalidCredentialsError):
        svc.login(LoginPayload(username="maria@example.com", password="errada123"))
    with pytest.raises(UserNotFoundError):
        svc.login(LoginPayload(username="ninguem@example.com", password="segredo123"))


def test_login_rehashes_outdated_hash(db_env):
    repo = SQLRepository()
    weak_hash = PasswordHasher(time_cost=1, memory_cost=8192).hash("segredo123")
    user = repo.create_user({"name": "Legacy", "username": "legacy", "email": "legacy@example.com", "password": weak_hash})
    assert needs_rehash(weak_hash)

    AuthService().login(LoginPayload(username="legacy", password="segredo123"))

    stored = repo.get_user(user.id).password
    assert stored != weak_hash
    assert not needs_rehash(stored)
    assert verify_password("segredo123", stored)


def test_sessions_start_and_logout(db_env):
    svc = AuthService()
    summary = svc.signup(_payload())
    token = svc.start_session(summary.id)
    assert user_for_token(token).id == summary.id

    svc.logout(token)
    assert user_for_token(token) is None
    svc.logout(None)


def test_signup_is_atomic_when_account_insert_fails(db_env, monkeypatch):
    svc = AuthService()
    broken = {"provider": "credentials", "type": "credentials", "provider_account_id": None}
    monkeypatch.setattr(svc, "_credentials_account", lambda: broken)

    with pytest.raises(AccountExistsError):
        svc.signup(_payload(addressLine1="Rua das Flores"))

    repo = SQLRepository()
    assert repo.find_user_by_identity("maria@example.com") is None

    summary = AuthService().signup(_payload())
    assert len(repo.get_accounts_for_user(summary.id)) == 1


def test_signup_race_maps_integrity_error(db_env, monkeypatch):
    svc = AuthService()
    svc.signup(_payload())
    monkeypatch.setattr(svc.repository, "find_user_by_identity", lambda identity: None)

    with pytest.raises(AccountExistsError) as exc:
        svc.signup(_payload(name="Outra Maria"))
    assert exc.value.message == "This username already exists"
