from typing import Optional

import requests

from gaccess.settings import Settings
from .local_relay_client import LocalRelayClient
from .relay_client import RelayClient, extract_text


def build_completion_client(settings: Settings, session: Optional[requests.Session] = None):
    """Remote relay when RELAY_URL is set, in-process relay otherwise."""
    if settings.RELAY_URL:
        return RelayClient(settings, session=session)
    return LocalRelayClient(settings)


__all__ = ["RelayClient", "LocalRelayClient", "extract_text", "build_completion_client"]
