# Client for the Gemini generateContent endpoint.
# Returns the upstream reply untouched; callers decide what to do with it.

import logging
from typing import Optional

import requests

from gaccess.errors import Misconfigured, UpstreamError
from gaccess.settings import Settings
from .types import UpstreamReply

logger = logging.getLogger(__name__)


class GeminiClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def model(self) -> str:
        return self.settings.GEMINI_MODEL

    def generate_content(self, prompt: str) -> UpstreamReply:
        api_key = self.settings.GEMINI_API_KEY
        if not api_key:
            raise Misconfigured("GEMINI_API_KEY not configured")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = self.session.post(
                self.settings.generate_content_url,
                params={"key": api_key},
                json=payload,
                timeout=self.settings.REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            # the exception text can contain the request URL, which holds the key
            logger.error("Gemini request failed: %s", type(e).__name__)
            raise UpstreamError(f"Upstream request failed: {type(e).__name__}") from e

        if not resp.ok:
            logger.error("Gemini replied %s", resp.status_code)
        return UpstreamReply(
            status_code=resp.status_code,
            body=resp.content,
            content_type=resp.headers.get("Content-Type", "application/json"),
        )

    def close(self) -> None:
        self.session.close()
