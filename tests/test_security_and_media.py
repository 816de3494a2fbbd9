from __future__ import annotations

from datetime import datetime, timedelta, timezone

from zavy.core.security import hash_password, needs_rehash, verify_password
from zavy.core.utils import absolute_url, sanitized
from zavy.db.models import UserSession
from zavy.db.session import get_session
from zavy.domain.media import cloudinary_url, price_label
from zavy.repositories.sql_repository import SQLRepository
from zavy.services.catalog_service import CatalogService
from zavy.services.session_service import issue_session, user_for_token


def test_hash_and_verify_password():
    stored = hash_password("segredo123")
    assert stored.startswith("$argon2id$")
    assert stored != hash_password("segredo123")
    assert verify_password("segredo123", stored)
    assert not verify_password("segredo124", stored)
    assert not verify_password("segredo123", None)
    assert not verify_password("segredo123", "plain-text")
    assert not verify_password("segredo123", "$argon2id$broken")
    assert not needs_rehash(stored)


def test_cloudinary_url():
    meta = "1690000000/zavy/racao"
    assert (
        cloudinary_url(meta, cloud_name="demo", transformations="f_auto,q_auto")
        == "https://res.cloudinary.com/demo/image/upload/f_auto,q_auto/v1690000000/zavy/racao.jpg"
    )
    assert (
        cloudinary_url(meta, cloud_name="demo", fmt="png", use_version=False)
        == "https://res.cloudinary.com/demo/image/upload/zavy/racao.png"
    )


def test_price_label():
    assert price_label(5) == "R$ 0,05"
    assert price_label(12990) == "R$ 129,90"
    assert price_label(123456789) == "R$ 1.234.567,89"
    assert price_label(None) == "R$ 0,00"


def test_absolute_url_and_sanitized():
    assert absolute_url("/search", base="https://zavy.example/") == "https://zavy.example/search"
    assert absolute_url("login", base="https://zavy.example") == "https://zavy.example/login"
    assert sanitized({"username": "maria", "password": "x"}, ("username",)) == {"username": "maria"}
    assert sanitized(None, ("username",)) == {"username": None}


def test_expired_session_is_removed(db_env):
    repo = SQLRepository()
    user = repo.create_user({"name": "Ana", "username": "ana", "email": "ana@example.com"})
    live = issue_session(user.id)
    assert user_for_token(live).id == user.id

    with get_session() as session:
        session.add(
            UserSession(token="old-token", user_id=user.id, expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        )
        session.commit()

    assert user_for_token("old-token") is None
    with get_session() as session:
        assert session.get(UserSession, "old-token") is None
    assert user_for_token(None) is None


def test_catalog_service_cards(db_env):
    repo = SQLRepository()
    category = repo.create_category("Gatos")
    repo.create_product(title="Arranhador", price_in_cents=24900, image="1690000001/zavy/arranhador", category_id=category.id)

    svc = CatalogService()
    assert [(c.id, c.name) for c in svc.list_categories()] == [(category.id, "Gatos")]
    assert svc.get_category(category.id).name == "Gatos"
    assert svc.get_category(category.id + 1) is None

    [card] = svc.sellable_products()
    assert card.price == "R$ 249,00"
    assert card.description == ""
    assert card.image_url == "https://res.cloudinary.com/demo/image/upload/f_auto,q_auto/v1690000001/zavy/arranhador.jpg"
