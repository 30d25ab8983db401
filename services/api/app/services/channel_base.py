from __future__ import annotations

import webbrowser
from typing import Protocol


class ChannelOpener(Protocol):
    name: str

    def open(self, url: str) -> None: ...


class BrowserChannelOpener:
    """Hands the deep link to the OS default handler in a new browser tab."""

    name = "BROWSER"

    def open(self, url: str) -> None:
        webbrowser.open_new_tab(url)


class RecordingChannelOpener:
    """Keeps every opened URL in memory.

    Used by the API, where the client opens the link itself, and by tests.
    """

    name = "RECORD"

    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)
