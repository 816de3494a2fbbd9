#!/usr/bin/env python3
"""
Popular categorias e produtos de demonstracao para a vitrine.

Uso:
  python scripts/seed_catalog.py [--create-tables] [--category Cachorros --category Gatos]
"""
from __future__ import annotations

import argparse
import logging
import sys

from zavy.core.logging import configure_logging
from zavy.db.create_tables import create_all
from zavy.repositories.sql_repository import SQLRepository

logger = logging.getLogger("zavy.scripts.seed_catalog")

DEFAULT_CATEGORIES = ("Cachorros", "Gatos", "Pássaros", "Higiene")
DEMO_PRODUCTS = (
    ("Ração Premium Cães Adultos 15kg", "Sabor frango e arroz", 18990, "1690000000/zavy/racao-caes", "Cachorros"),
    ("Arranhador Torre para Gatos", "Com três andares e toca", 24900, "1690000001/zavy/arranhador", "Gatos"),
    ("Alpiste Selecionado 500g", "", 1290, "1690000002/zavy/alpiste", "Pássaros"),
    ("Shampoo Neutro Pet 500ml", "Para banho e tosa", 3490, "1690000003/zavy/shampoo", "Higiene"),
)


def main() -> None:
    ap = argparse.ArgumentParser(description="Popular catalogo de demonstracao")
    ap.add_argument("--create-tables", action="store_true", help="Cria as tabelas antes de popular")
    ap.add_argument("--category", action="append", help="Categoria extra (pode repetir)")
    args = ap.parse_args()

    configure_logging()
    if args.create_tables:
        create_all()

    repo = SQLRepository()
    existing = {c.name: c for c in repo.list_categories()}
    for name in DEFAULT_CATEGORIES + tuple(args.category or ()):
        name = name.strip()
        if name and name not in existing:
            existing[name] = repo.create_category(name)
            logger.info("categoria criada: %s", name)

    if repo.list_sellable_products():
        logger.info("produtos ja cadastrados; nada a fazer")
        return
    for title, description, price, image, category in DEMO_PRODUCTS:
        repo.create_product(
            title=title,
            description=description or None,
            price_in_cents=price,
            image=image,
            category_id=existing[category].id,
        )
        logger.info("produto criado: %s", title)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
