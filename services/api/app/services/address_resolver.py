from __future__ import annotations

import itertools
from dataclasses import dataclass

import structlog
from services.api.app.models.checkout import AddressRecord
from services.api.app.services.formatting import digits_only
from services.api.app.services.postal_base import (
    PostalCodeFormatError,
    PostalDirectory,
    PostalLookupError,
)

logger = structlog.get_logger(__name__)

POSTAL_CODE_DIGITS = 8

LookupOutcome = AddressRecord | PostalLookupError


def resolve(raw_input: str, directory: PostalDirectory) -> AddressRecord:
    """Normalize a postal code and resolve it through ``directory``.

    The directory is only called for exactly 8 digits; anything else raises
    PostalCodeFormatError without touching the network.
    """

    postal_code = digits_only(raw_input)
    if len(postal_code) != POSTAL_CODE_DIGITS:
        raise PostalCodeFormatError(raw_input)

    logger.info("postal_lookup_started", postal_code=postal_code, directory=directory.name)
    try:
        record = directory.lookup(postal_code)
    except PostalLookupError as e:
        logger.info(
            "postal_lookup_failed",
            postal_code=postal_code,
            kind=e.kind.value,
            directory=directory.name,
        )
        raise

    return record


def try_resolve(raw_input: str, directory: PostalDirectory) -> LookupOutcome:
    try:
        return resolve(raw_input, directory)
    except PostalLookupError as e:
        return e


@dataclass(frozen=True, slots=True)
class LookupTicket:
    generation: int
    raw_input: str


class LookupGeneration:
    """Monotonic counter deciding which postal code edit owns the address field.

    Every edit takes a ticket; only the holder of the newest ticket may apply a result.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def issue(self, raw_input: str) -> LookupTicket:
        self._current = next(self._counter)
        return LookupTicket(generation=self._current, raw_input=raw_input)

    def is_current(self, ticket: LookupTicket) -> bool:
        return ticket.generation == self._current
