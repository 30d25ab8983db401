from __future__ import annotations

from typing import Protocol

from packages.shared.schemas.checkout_v1 import LookupErrorKindV1
from services.api.app.models.checkout import AddressRecord


class PostalLookupError(Exception):
    """Base class for postal code lookup errors.

    Every lookup error is shown next to the postal code field and never aborts checkout.
    """

    kind: LookupErrorKindV1


class PostalCodeFormatError(PostalLookupError):
    kind = LookupErrorKindV1.INVALID_FORMAT

    def __init__(self, raw_input: str) -> None:
        super().__init__("Postal code must have 8 digits")
        self.raw_input = raw_input


class PostalCodeNotFoundError(PostalLookupError):
    kind = LookupErrorKindV1.NOT_FOUND

    def __init__(self, postal_code: str) -> None:
        super().__init__("Postal code not found")
        self.postal_code = postal_code


class PostalLookupNetworkError(PostalLookupError):
    kind = LookupErrorKindV1.NETWORK_FAILURE

    def __init__(self, postal_code: str, reason: str) -> None:
        super().__init__("Could not look up postal code")
        self.postal_code = postal_code
        self.reason = reason


class PostalDirectory(Protocol):
    name: str

    def lookup(self, postal_code: str) -> AddressRecord:
        """Resolve an 8-digit postal code.

        Raises PostalCodeNotFoundError or PostalLookupNetworkError.
        """
        ...
