# Completion client that runs the relay contract in process.
# Used when no RELAY_URL is configured: same token check, same body
# validation, same single upstream call, without an HTTP hop to ourselves.

import json
from typing import Optional

from gaccess.errors import EmptyCompletion, Misconfigured, UpstreamError
from gaccess.relay import Relay
from gaccess.settings import Settings
from .relay_client import extract_text


class LocalRelayClient:
    def __init__(self, settings: Settings, relay: Optional[Relay] = None):
        self.settings = settings
        self.relay = relay or Relay(settings)

    def complete(self, prompt: str) -> str:
        token = self.settings.PROXY_SECRET_TOKEN
        if not token:
            raise Misconfigured("PROXY_SECRET_TOKEN not configured")

        body = json.dumps({"prompt": prompt})
        reply = self.relay.handle(f"Bearer {token}", body)
        text = reply.body.decode("utf-8", errors="replace")
        if not reply.ok:
            raise UpstreamError(
                f"Relay API error: {reply.status_code} - {text}",
                upstream_status=reply.status_code,
                body=text,
            )

        try:
            data = json.loads(text)
        except ValueError as e:
            raise EmptyCompletion("Relay response is not JSON") from e
        return extract_text(data)

    def close(self) -> None:
        self.relay.close()
