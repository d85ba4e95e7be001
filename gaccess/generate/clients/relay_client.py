# Completion client that talks to a deployed relay (POST /api/gemini)
# with the shared bearer token, the same way any outside caller would.

import logging
from typing import Any, Optional

import requests

from gaccess.errors import EmptyCompletion, Misconfigured, UpstreamError
from gaccess.settings import Settings

logger = logging.getLogger(__name__)


def extract_text(data: Any) -> str:
    """Return candidates[0].content.parts[0].text or raise EmptyCompletion."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not isinstance(text, str) or not text:
        raise EmptyCompletion("No text content in response")
    return text


class RelayClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        if not settings.RELAY_URL:
            raise Misconfigured("RELAY_URL not configured")
        self.settings = settings
        self.url = settings.RELAY_URL
        self.session = session or requests.Session()

    def complete(self, prompt: str) -> str:
        token = self.settings.PROXY_SECRET_TOKEN
        if not token:
            raise Misconfigured("PROXY_SECRET_TOKEN not configured")

        try:
            resp = self.session.post(
                self.url,
                headers={"Authorization": f"Bearer {token}"},
                json={"prompt": prompt},
                timeout=self.settings.REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error("relay request to %s failed: %s", self.url, e)
            raise UpstreamError(f"Relay request failed: {e}") from e

        if not resp.ok:
            raise UpstreamError(
                f"Relay API error: {resp.status_code} - {resp.text}",
                upstream_status=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise EmptyCompletion("Relay response is not JSON") from e
        return extract_text(data)

    def close(self) -> None:
        self.session.close()
