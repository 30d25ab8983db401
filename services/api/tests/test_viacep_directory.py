from __future__ import annotations

import io
import json
import urllib.error
import urllib.request

import pytest
from services.api.app.services.postal_base import (
    PostalCodeNotFoundError,
    PostalLookupNetworkError,
)
from services.api.app.services.postal_viacep import ViaCepDirectory


class _FakeResponse:
    def __init__(self, body: str) -> None:
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def _directory() -> ViaCepDirectory:
    return ViaCepDirectory(base_url="https://viacep.example/", timeout_s=3)


def _serve(monkeypatch: pytest.MonkeyPatch, body: str, seen: list[tuple[str, float]]) -> None:
    def fake_urlopen(req: urllib.request.Request, timeout: float) -> _FakeResponse:
        seen.append((req.full_url, timeout))
        return _FakeResponse(body)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)


def test_lookup_maps_viacep_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, float]] = []
    body = json.dumps(
        {
            "cep": "01310-100",
            "logradouro": "Avenida Paulista",
            "bairro": "Bela Vista",
            "localidade": "São Paulo",
            "uf": "SP",
        }
    )
    _serve(monkeypatch, body, seen)

    record = _directory().lookup("01310100")

    assert seen == [("https://viacep.example/ws/01310100/json/", 3)]
    assert record.street == "Avenida Paulista"
    assert record.neighborhood == "Bela Vista"
    assert record.city == "São Paulo"
    assert record.state == "SP"


@pytest.mark.parametrize("body", ['{"erro": true}', '{"erro": "true"}', "", "[]"])
def test_lookup_not_found_responses(monkeypatch: pytest.MonkeyPatch, body: str) -> None:
    _serve(monkeypatch, body, [])

    with pytest.raises(PostalCodeNotFoundError):
        _directory().lookup("99999999")


def test_lookup_malformed_body_is_network_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    _serve(monkeypatch, "<html>bad gateway</html>", [])

    with pytest.raises(PostalLookupNetworkError, match="Could not look up"):
        _directory().lookup("01310100")


def test_lookup_transport_error_is_network_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(req: urllib.request.Request, timeout: float) -> _FakeResponse:
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(PostalLookupNetworkError) as exc_info:
        _directory().lookup("01310100")

    assert "connection refused" in exc_info.value.reason


def test_lookup_timeout_is_network_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(req: urllib.request.Request, timeout: float) -> _FakeResponse:
        raise TimeoutError("timed out")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(PostalLookupNetworkError):
        _directory().lookup("01310100")


@pytest.mark.parametrize(
    ("code", "expected"),
    [(400, PostalCodeNotFoundError), (503, PostalLookupNetworkError)],
)
def test_lookup_http_errors(
    monkeypatch: pytest.MonkeyPatch, code: int, expected: type[Exception]
) -> None:
    def fake_urlopen(req: urllib.request.Request, timeout: float) -> _FakeResponse:
        raise urllib.error.HTTPError(req.full_url, code, "err", {}, io.BytesIO(b""))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(expected):
        _directory().lookup("01310100")


def test_from_env_reads_base_url_and_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, float]] = []
    monkeypatch.setenv("CHECKOUT_VIACEP_BASE_URL", "http://localhost:9999")
    monkeypatch.setenv("CHECKOUT_VIACEP_TIMEOUT_S", "1.5")
    _serve(monkeypatch, '{"erro": true}', seen)

    with pytest.raises(PostalCodeNotFoundError):
        ViaCepDirectory.from_env().lookup("12345678")

    assert seen == [("http://localhost:9999/ws/12345678/json/", 1.5)]
