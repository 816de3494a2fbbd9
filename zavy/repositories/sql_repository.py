"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select, update

from zavy.db.models import (
    Account,
    Address,
    Buyer,
    Category,
    Product,
    User,
)
from zavy.db.session import get_session


def _escape_like(term: str) -> str:
    """Busca literal: % e _ digitados pelo usuario nao sao curingas."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.username == username)
            return session.execute(stmt).scalar_one_or_none()

    def find_user_by_identity(self, identity: str) -> Optional[User]:
        """Usuario cujo username OU e-mail coincide com o identificador informado."""
        with get_session() as session:
            stmt = select(User).where(or_(User.username == identity, User.email == identity)).limit(1)
            return session.execute(stmt).scalars().first()

    def create_user(self, fields: dict, address: dict | None = None, account: dict | None = None) -> User:
        """
        Cria usuario + perfil de comprador, endereco padrao e conta de login (opcionais)
        numa unica transacao: se qualquer insert falhar, nada fica gravado.
        """
        now = datetime.now(timezone.utc)
        with get_session() as session:
            user = User(**fields, created_at=now, updated_at=now)
            buyer = Buyer(created_at=now)
            if address:
                buyer.addresses.append(Address(is_default=True, **address))
            user.buyer = buyer
            if account:
                user.accounts.append(Account(created_at=now, **account))
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update_user_password(self, user_id: str, password_hash: str) -> None:
        with get_session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(password=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    # -------------------------- accounts --------------------------
    def get_accounts_for_user(self, user_id: str) -> list[Account]:
        with get_session() as session:
            stmt = select(Account).where(Account.user_id == user_id)
            return session.execute(stmt).scalars().all()

    # -------------------------- buyers / addresses --------------------------
    def get_buyer_for_user(self, user_id: str) -> Optional[Buyer]:
        with get_session() as session:
            stmt = select(Buyer).where(Buyer.user_id == user_id)
            return session.execute(stmt).scalar_one_or_none()

    def get_addresses_for_user(self, user_id: str) -> list[Address]:
        with get_session() as session:
            stmt = (
                select(Address)
                .join(Buyer, Address.buyer_id == Buyer.id)
                .where(Buyer.user_id == user_id)
                .order_by(Address.is_default.desc())
            )
            return session.execute(stmt).scalars().all()

    def get_default_address(self, user_id: str) -> Optional[Address]:
        for address in self.get_addresses_for_user(user_id):
            if address.is_default:
                return address
        return None

    # -------------------------- catalog --------------------------
    def list_categories(self) -> list[Category]:
        with get_session() as session:
            return session.execute(select(Category).order_by(Category.id)).scalars().all()

    def get_category(self, category_id: int) -> Optional[Category]:
        with get_session() as session:
            return session.get(Category, category_id)

    def create_category(self, name: str) -> Category:
        with get_session() as session:
            entity = Category(name=name)
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def create_product(
        self,
        *,
        title: str,
        price_in_cents: int,
        image: str,
        description: str | None = None,
        category_id: int | None = None,
        sellable: bool = True,
    ) -> Product:
        entity = Product(
            title=title,
            description=description,
            price_in_cents=price_in_cents,
            image=image,
            category_id=category_id,
            sellable=sellable,
            created_at=datetime.now(timezone.utc),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def list_sellable_products(self, category_id: int | None = None, search_term: str | None = None) -> list[Product]:
        stmt = select(Product).where(Product.sellable.is_(True))
        if category_id:
            stmt = stmt.where(Product.category_id == category_id)
        term = (search_term or "").strip()
        if term:
            pattern = f"%{_escape_like(term)}%"
            stmt = stmt.where(
                or_(Product.title.ilike(pattern, escape="\\"), Product.description.ilike(pattern, escape="\\"))
            )
        with get_session() as session:
            return session.execute(stmt.order_by(Product.id)).scalars().all()
