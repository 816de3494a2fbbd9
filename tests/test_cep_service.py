from __future__ import annotations

import httpx
import pytest

from zavy.services.cep_service import CepLookupService

VIACEP_OK = {
    "cep": "01310-100",
    "logradouro": "Avenida Paulista",
    "complemento": "de 612 a 1510 - lado par",
    "bairro": "Bela Vista",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "ddd": "11",
}


def _service(handler) -> CepLookupService:
    return CepLookupService(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_lookup_maps_viacep_fields():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json=VIACEP_OK)

    address = _service(handler).lookup("01310-100")

    assert seen == ["/ws/01310100/json/"]
    assert address.as_dict() == {
        "postal_code": "01310-100",
        "address_line1": "Avenida Paulista",
        "address_line2": "de 612 a 1510 - lado par",
        "district": "Bela Vista",
        "city": "São Paulo",
        "region": "SP",
        "ibge": "3550308",
        "ddd": "11",
    }


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(200, json={"erro": True}),
        lambda request: httpx.Response(500),
        lambda request: httpx.Response(200, text="<html>"),
    ],
)
def test_lookup_failures_return_none(handler):
    assert _service(handler).lookup("01310100") is None


def test_lookup_network_error_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert _service(handler).lookup("01310100") is None


def test_lookup_skips_request_for_incomplete_cep():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - nao deve ser chamado
        raise AssertionError("unexpected request")

    assert _service(handler).lookup("0131") is None
