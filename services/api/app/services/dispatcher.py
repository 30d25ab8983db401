from __future__ import annotations

import os
from urllib.parse import quote, urlencode

import structlog
from services.api.app.models.store import DEFAULT_CONTACT_ID, StoreConfig
from services.api.app.services.channel_base import ChannelOpener

logger = structlog.get_logger(__name__)


def build_dispatch_url(text: str, config: StoreConfig) -> str:
    """Deep link that opens a chat with the store with ``text`` prefilled.

    Env vars:
    - CHECKOUT_CHANNEL_SCHEME (default: whatsapp)
    - CHECKOUT_CHANNEL_RECIPIENT_PARAM (default: phone)
    """

    scheme = os.getenv("CHECKOUT_CHANNEL_SCHEME", "whatsapp").strip() or "whatsapp"
    recipient_param = os.getenv("CHECKOUT_CHANNEL_RECIPIENT_PARAM", "phone").strip() or "phone"
    recipient = (config.contact_id or "").strip() or DEFAULT_CONTACT_ID

    query = urlencode({recipient_param: recipient, "text": text}, quote_via=quote)
    return f"{scheme}://send?{query}"


def dispatch(text: str, config: StoreConfig, opener: ChannelOpener) -> str:
    """Open the fulfillment channel and return the URL handed to it.

    Fire and forget: nothing is read back from the channel.
    """

    url = build_dispatch_url(text, config)
    opener.open(url)
    logger.info("order_dispatched", store=config.name, opener=opener.name, length=len(text))
    return url
