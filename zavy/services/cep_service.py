"""Consulta de endereco por CEP (ViaCEP) usada para preencher o formulario de cadastro."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import httpx

from zavy.core.config import get_settings
from zavy.domain.documents import format_cep, only_digits

logger = logging.getLogger(__name__)


@dataclass
class CepAddress:
    postal_code: str
    address_line1: str
    address_line2: str
    district: str
    city: str
    region: str
    ibge: str = ""
    ddd: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


class CepLookupService:
    """Thin client over the ViaCEP JSON API; every failure maps to None."""

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        settings = get_settings()
        self.base_url = settings.viacep_base_url
        self.timeout = settings.viacep_timeout_seconds
        self._client = client

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url, timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(url)

    def lookup(self, cep: str) -> Optional[CepAddress]:
        digits = only_digits(cep)
        if len(digits) != 8:
            return None
        url = f"{self.base_url}/{digits}/json/"
        try:
            response = self._get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("viacep lookup failed for %s: %s", digits, exc)
            return None
        if not isinstance(data, dict) or data.get("erro"):
            return None
        return CepAddress(
            postal_code=format_cep(data.get("cep") or digits),
            address_line1=data.get("logradouro") or "",
            address_line2=data.get("complemento") or "",
            district=data.get("bairro") or "",
            city=data.get("localidade") or "",
            region=data.get("uf") or "",
            ibge=data.get("ibge") or "",
            ddd=data.get("ddd") or "",
        )
