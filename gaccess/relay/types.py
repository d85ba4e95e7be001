from __future__ import annotations
from dataclasses import dataclass

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    """Relay input body."""
    prompt: str = Field(..., min_length=1)


@dataclass
class UpstreamReply:
    """Raw reply from the generation API, forwarded without inspection."""
    status_code: int
    body: bytes
    content_type: str = "application/json"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
