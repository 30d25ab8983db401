from __future__ import annotations

from services.api.app.models.checkout import AddressRecord
from services.api.app.services.postal_base import (
    PostalCodeNotFoundError,
    PostalLookupNetworkError,
)


class MockPostalDirectory:
    """Deterministic postal directory for tests and local dev."""

    name = "MOCK_POSTAL"

    def __init__(self, catalog: dict[str, AddressRecord] | None = None) -> None:
        self._catalog = catalog if catalog is not None else _default_catalog()
        self.calls: list[str] = []

    def lookup(self, postal_code: str) -> AddressRecord:
        self.calls.append(postal_code)

        # Reserved code to exercise the transport failure path locally.
        if postal_code == "00000000":
            raise PostalLookupNetworkError(postal_code, "simulated outage")

        record = self._catalog.get(postal_code)
        if record is None:
            raise PostalCodeNotFoundError(postal_code)
        return record


def _default_catalog() -> dict[str, AddressRecord]:
    return {
        "01310100": AddressRecord(
            street="Avenida Paulista",
            neighborhood="Bela Vista",
            city="São Paulo",
            state="SP",
        ),
        "20040020": AddressRecord(
            street="Avenida Rio Branco",
            neighborhood="Centro",
            city="Rio de Janeiro",
            state="RJ",
        ),
        "30130010": AddressRecord(
            street="Praça Sete de Setembro",
            neighborhood="Centro",
            city="Belo Horizonte",
            state="MG",
        ),
    }
