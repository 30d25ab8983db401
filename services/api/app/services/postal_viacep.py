from __future__ import annotations

import json
import os
import urllib.error
import urllib.request

from services.api.app.models.checkout import AddressRecord
from services.api.app.services.postal_base import (
    PostalCodeNotFoundError,
    PostalLookupNetworkError,
)


class ViaCepDirectory:
    """Postal directory backed by the public ViaCEP service.

    Env vars:
    - CHECKOUT_VIACEP_BASE_URL (default: https://viacep.com.br)
    - CHECKOUT_VIACEP_TIMEOUT_S (default: 10)
    """

    name = "VIACEP"

    def __init__(self, *, base_url: str, timeout_s: float) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    @classmethod
    def from_env(cls) -> "ViaCepDirectory":
        return cls(
            base_url=os.getenv("CHECKOUT_VIACEP_BASE_URL", "https://viacep.com.br"),
            timeout_s=float(os.getenv("CHECKOUT_VIACEP_TIMEOUT_S", "10")),
        )

    def lookup(self, postal_code: str) -> AddressRecord:
        url = f"{self._base_url}/ws/{postal_code}/json/"
        req = urllib.request.Request(url, method="GET")
        req.add_header("Accept", "application/json")

        try:
            with urllib.request.urlopen(req, timeout=self._timeout_s) as resp:
                raw = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            # ViaCEP answers 400 for codes it cannot parse at all.
            if e.code == 400:
                raise PostalCodeNotFoundError(postal_code) from e
            raise PostalLookupNetworkError(postal_code, f"HTTP {e.code}") from e
        except OSError as e:
            # URLError, timeouts and connection resets all land here.
            raise PostalLookupNetworkError(postal_code, str(e)) from e

        try:
            data = json.loads(raw) if raw.strip() else None
        except ValueError as e:
            raise PostalLookupNetworkError(postal_code, "malformed response body") from e

        if not isinstance(data, dict) or _is_truthy_flag(data.get("erro")):
            raise PostalCodeNotFoundError(postal_code)

        return AddressRecord(
            street=str(data.get("logradouro") or ""),
            neighborhood=str(data.get("bairro") or ""),
            city=str(data.get("localidade") or ""),
            state=str(data.get("uf") or ""),
        )


def _is_truthy_flag(value: object) -> bool:
    # The service has sent both {"erro": true} and {"erro": "true"} over time.
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
