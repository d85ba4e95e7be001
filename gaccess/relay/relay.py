"""Authenticated pass-through to the generation API.

The relay checks the bearer token, validates the ``{"prompt": ...}`` body and
issues exactly one upstream call. Whatever the upstream answers (body, status,
content type) goes back to the caller unchanged.
"""

from __future__ import annotations
import hmac
import logging
from typing import Optional

from pydantic import ValidationError

from gaccess.errors import BadRequest, Unauthorized
from gaccess.settings import Settings
from .gemini_client import GeminiClient
from .types import GenerationRequest, UpstreamReply

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def check_bearer(authorization: Optional[str], secret: Optional[str]) -> None:
    """Raise Unauthorized unless the header carries exactly ``Bearer <secret>``."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Missing or invalid Authorization header")

    token = authorization[len(BEARER_PREFIX):]
    if not secret:
        logger.warning("PROXY_SECRET_TOKEN is not set; rejecting all relay requests")
        raise Unauthorized("Invalid token")
    if not hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8")):
        raise Unauthorized("Invalid token")


def parse_prompt(raw: bytes | str) -> str:
    """Extract the prompt from a JSON request body."""
    try:
        req = GenerationRequest.model_validate_json(raw)
    except ValidationError as e:
        if any(err["type"] == "json_invalid" for err in e.errors()):
            raise BadRequest("Invalid JSON body") from e
        raise BadRequest("Missing prompt field") from e
    return req.prompt


class Relay:
    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None):
        self.settings = settings
        self.client = client or GeminiClient(settings)

    def authorize(self, authorization: Optional[str]) -> None:
        check_bearer(authorization, self.settings.PROXY_SECRET_TOKEN)

    def forward(self, prompt: str) -> UpstreamReply:
        """One upstream call; the reply is returned even when it is an error."""
        reply = self.client.generate_content(prompt)
        logger.info("relay forwarded prompt (%d chars) -> %s", len(prompt), reply.status_code)
        return reply

    def handle(self, authorization: Optional[str], raw_body: bytes | str) -> UpstreamReply:
        """Full relay contract: auth, then body, then upstream."""
        self.authorize(authorization)
        prompt = parse_prompt(raw_body)
        return self.forward(prompt)

    def close(self) -> None:
        self.client.close()
