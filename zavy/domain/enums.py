"""Enumerations shared by the ORM models, payloads and the signup templates."""
from __future__ import annotations

import enum


class PersonType(str, enum.Enum):
    PF = "PF"
    PJ = "PJ"


class Gender(str, enum.Enum):
    MASCULINO = "Masculino"
    FEMININO = "Feminino"


class BusinessDefinition(str, enum.Enum):
    """O que melhor define o cliente (pergunta do cadastro)."""

    PETSHOP = "PETSHOP"
    BANHO_TOSA = "BANHO_TOSA"
    CLINICA_VETERINARIA = "CLINICA_VETERINARIA"
    PENSANDO_NEGOCIO = "PENSANDO_NEGOCIO"
    VENDAS_ONLINE = "VENDAS_ONLINE"
    OUTRO_RAMO = "OUTRO_RAMO"
    CONSUMIDOR_FINAL = "CONSUMIDOR_FINAL"
    VENDEDOR_REPRESENTANTE = "VENDEDOR_REPRESENTANTE"
    DROPSHIPPING = "DROPSHIPPING"


BUSINESS_DEFINITION_LABELS = {
    BusinessDefinition.PETSHOP: "Pet shop",
    BusinessDefinition.BANHO_TOSA: "Banho e tosa",
    BusinessDefinition.CLINICA_VETERINARIA: "Clínica veterinária",
    BusinessDefinition.PENSANDO_NEGOCIO: "Pensando em abrir um negócio",
    BusinessDefinition.VENDAS_ONLINE: "Vendas online",
    BusinessDefinition.OUTRO_RAMO: "Outro ramo",
    BusinessDefinition.CONSUMIDOR_FINAL: "Consumidor final",
    BusinessDefinition.VENDEDOR_REPRESENTANTE: "Vendedor / representante",
    BusinessDefinition.DROPSHIPPING: "Dropshipping",
}


def business_definition_choices() -> list[tuple[str, str]]:
    return [(item.value, BUSINESS_DEFINITION_LABELS[item]) for item in BusinessDefinition]
