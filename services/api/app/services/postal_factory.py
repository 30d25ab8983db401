from __future__ import annotations

import os

from services.api.app.services.postal_base import PostalDirectory
from services.api.app.services.postal_mock import MockPostalDirectory


def get_postal_directory() -> PostalDirectory:
    """Select a postal directory based on env vars.

    Defaults to the mock directory so tests and local dev never reach the network unless
    explicitly configured otherwise.
    """

    mode = os.getenv("CHECKOUT_POSTAL_DIRECTORY", "mock").strip().lower()

    if mode == "mock":
        return MockPostalDirectory()

    if mode == "viacep":
        from services.api.app.services.postal_viacep import ViaCepDirectory

        return ViaCepDirectory.from_env()

    raise ValueError(f"Unknown CHECKOUT_POSTAL_DIRECTORY={mode!r}. Expected mock or viacep.")
