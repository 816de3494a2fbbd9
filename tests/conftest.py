from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote zavy seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zavy.core import config as core_config  # noqa: E402
from zavy.core.rate_limiter import reset_limits  # noqa: E402
from zavy.db import models  # noqa: E402
from zavy.db import session as db_session  # noqa: E402

VALID_CPF = "529.982.247-25"
VALID_CNPJ = "11.222.333/0001-81"


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Configura um SQLite temporário e reseta caches de settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("APP_ENV", "test")
    _clear_caches()
    reset_limits()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _clear_caches()


@pytest.fixture()
def client(db_env):
    from fastapi.testclient import TestClient

    from zavy.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def person_form() -> dict:
    return {
        "name": "Maria Silva",
        "email": "maria@example.com",
        "confirm_email": "maria@example.com",
        "password": "segredo123",
        "confirm_password": "segredo123",
        "cpf": VALID_CPF,
        "birth_date": "10/05/1990",
        "gender": "Feminino",
        "phone": "(11) 98765-4321",
        "pf_definition": "CONSUMIDOR_FINAL",
        "address_label": "Casa",
        "postal_code": "01310-100",
        "region": "SP",
        "district": "Bela Vista",
        "city": "São Paulo",
        "address_line1": "Avenida Paulista",
        "street_number": "1000",
    }


@pytest.fixture()
def company_form() -> dict:
    return {
        "company_name": "Pet Shop Feliz Ltda",
        "trade_name": "Pet Feliz",
        "contact_name": "João Souza",
        "birth_date": "01/02/1980",
        "gender": "Masculino",
        "email": "contato@petfeliz.com.br",
        "confirm_email": "contato@petfeliz.com.br",
        "password": "segredo123",
        "confirm_password": "segredo123",
        "cnpj": VALID_CNPJ,
        "state_registration": "123.456.789.110",
        "whatsapp": "(11) 91234-5678",
        "pj_definition": "PETSHOP",
        "address_label": "Loja",
        "postal_code": "01310-100",
        "region": "SP",
        "district": "Bela Vista",
        "city": "São Paulo",
        "address_line1": "Rua Augusta",
        "street_number": "500",
    }
