from __future__ import annotations

import os

from services.api.app.services.channel_base import (
    BrowserChannelOpener,
    ChannelOpener,
    RecordingChannelOpener,
)


def get_channel_opener() -> ChannelOpener:
    mode = os.getenv("CHECKOUT_CHANNEL_OPENER", "record").strip().lower()

    if mode == "record":
        return RecordingChannelOpener()

    if mode == "browser":
        return BrowserChannelOpener()

    raise ValueError(f"Unknown CHECKOUT_CHANNEL_OPENER={mode!r}. Expected record or browser.")
