"""
Mascaras e validadores de documentos brasileiros (CPF, CNPJ, CEP, telefone, data).

Todas as mascaras sao progressivas: aceitam entrada parcial e formatam apenas os
digitos ja digitados, descartando o excesso.
"""
from __future__ import annotations

import re

NON_DIGITS = re.compile(r"\D")
CEP_PATTERN = re.compile(r"\d{5}-?\d{3}")
BIRTH_DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})")

CNPJ_FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def only_digits(value: str | None) -> str:
    return NON_DIGITS.sub("", value or "")


def format_cpf(value: str | None) -> str:
    d = only_digits(value)[:11]
    out = ".".join(part for part in (d[0:3], d[3:6], d[6:9]) if part)
    if d[9:11]:
        out += f"-{d[9:11]}"
    return out


def format_cnpj(value: str | None) -> str:
    d = only_digits(value)[:14]
    out = ".".join(part for part in (d[0:2], d[2:5], d[5:8]) if part)
    if d[8:12]:
        out += f"/{d[8:12]}"
    if d[12:14]:
        out += f"-{d[12:14]}"
    return out


def format_cep(value: str | None) -> str:
    d = only_digits(value)[:8]
    if len(d) <= 5:
        return d
    return f"{d[:5]}-{d[5:]}"


def format_phone_br(value: str | None) -> str:
    d = only_digits(value)[:11]
    if len(d) <= 2:
        return f"({d}"
    if len(d) <= 6:
        return f"({d[:2]}) {d[2:]}"
    if len(d) <= 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return f"({d[:2]}) {d[2:7]}-{d[7:]}"


def format_birth_date(value: str | None) -> str:
    d = only_digits(value)[:8]
    if len(d) <= 2:
        return d
    if len(d) <= 4:
        return f"{d[:2]}/{d[2:]}"
    return f"{d[:2]}/{d[2:4]}/{d[4:]}"


def _check_digit(total: int) -> int:
    rest = 11 - (total % 11)
    return 0 if rest in (10, 11) else rest


def is_valid_cpf(value: str | None) -> bool:
    """Valida tamanho, sequencias repetidas e os dois digitos verificadores."""
    cpf = only_digits(value)
    if len(cpf) != 11 or len(set(cpf)) == 1:
        return False
    digits = [int(c) for c in cpf]
    first = _check_digit(sum(d * (10 - i) for i, d in enumerate(digits[:9])))
    if first != digits[9]:
        return False
    second = _check_digit(sum(d * (11 - i) for i, d in enumerate(digits[:10])))
    return second == digits[10]


def is_valid_cnpj(value: str | None) -> bool:
    cnpj = only_digits(value)
    if len(cnpj) != 14 or len(set(cnpj)) == 1:
        return False
    digits = [int(c) for c in cnpj]
    # Para CNPJ o resto < 2 vira 0, o que equivale a regra 10/11 -> 0 do CPF.
    first = _check_digit(sum(d * w for d, w in zip(digits[:12], CNPJ_FIRST_WEIGHTS)))
    if first != digits[12]:
        return False
    second = _check_digit(sum(d * w for d, w in zip(digits[:13], CNPJ_SECOND_WEIGHTS)))
    return second == digits[13]


def is_valid_cep(value: str | None) -> bool:
    return bool(CEP_PATTERN.fullmatch(value or ""))


def is_birth_date_br(value: str | None) -> bool:
    return bool(BIRTH_DATE_PATTERN.fullmatch(value or ""))


def birth_date_to_iso(value: str) -> str:
    """dd/mm/aaaa -> aaaa-mm-dd; qualquer outro formato volta inalterado."""
    match = BIRTH_DATE_PATTERN.fullmatch(value or "")
    if not match:
        return value
    day, month, year = match.groups()
    return f"{year}-{month}-{day}"
