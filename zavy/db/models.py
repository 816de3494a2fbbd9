"""SQLAlchemy models for users, credentials, buyers and the product catalog."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from zavy.domain.enums import BusinessDefinition, PersonType

from .session import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), nullable=True)
    username = Column(String(100), unique=True, nullable=True)
    email = Column(String(255), unique=True, nullable=True)
    password = Column(Text, nullable=True)
    person_type = Column(Enum(PersonType, name="person_type"), nullable=True)
    cpf = Column(String(20), nullable=True)
    cnpj = Column(String(20), nullable=True)
    birth_date = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)
    phone = Column(String(20), nullable=True)
    whatsapp = Column(String(20), nullable=True)
    alternate_phone = Column(String(20), nullable=True)
    company_name = Column(String(255), nullable=True)
    trade_name = Column(String(255), nullable=True)
    state_registration = Column(String(30), nullable=True)
    state_registration_isento = Column(Boolean, nullable=True)
    pf_definition = Column(Enum(BusinessDefinition, name="pf_definition"), nullable=True)
    pj_definition = Column(Enum(BusinessDefinition, name="pj_definition"), nullable=True)
    marketing_opt_in = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    accounts = relationship("Account", back_populates="user", cascade="all,delete-orphan")
    buyer = relationship("Buyer", uselist=False, back_populates="user", cascade="all,delete-orphan")
    sessions = relationship("UserSession", back_populates="user", cascade="all,delete-orphan")


class Account(Base):
    """Vinculo de login (credentials ou provedor externo) de um usuario."""

    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("provider", "provider_account_id", name="uq_accounts_provider"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(32), nullable=False)
    provider = Column(String(64), nullable=False)
    provider_account_id = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="accounts")


class Buyer(Base):
    __tablename__ = "buyers"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="buyer")
    addresses = relationship("Address", back_populates="buyer", cascade="all,delete-orphan")


class Address(Base):
    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=_uuid)
    buyer_id = Column(String(36), ForeignKey("buyers.id", ondelete="CASCADE"), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    label = Column(String(100), nullable=True)
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255), nullable=True)
    street_number = Column(String(20), nullable=True)
    district = Column(String(100), nullable=True)
    city = Column(String(100), nullable=False)
    postal_code = Column(String(10), nullable=True)
    region = Column(String(50), nullable=False)
    country = Column(String(50), nullable=False, default="Brasil")

    buyer = relationship("Buyer", back_populates="addresses")


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sessions")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)

    products = relationship("Product", back_populates="category")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price_in_cents = Column(Integer, nullable=False)
    image = Column(String(255), nullable=False)
    sellable = Column(Boolean, default=True, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    category = relationship("Category", back_populates="products")
