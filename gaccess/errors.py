"""Error types shared by the relay and the article orchestrator.

Every error carries the HTTP status its handler should answer with. The
orchestrator tags errors with the pipeline stage they came from but never
changes their type.
"""

from __future__ import annotations
from typing import Optional


class GAccessError(Exception):
    status_code: int = 500

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def with_stage(self, stage: str) -> "GAccessError":
        if self.stage is None:
            self.stage = stage
            self.message = f"{stage} stage failed: {self.message}"
            self.args = (self.message,)
        return self


class Unauthorized(GAccessError):
    status_code = 401


class BadRequest(GAccessError):
    status_code = 400


class Misconfigured(GAccessError):
    status_code = 500


class UpstreamError(GAccessError):
    """Non-success reply from the generation API, or no reply at all.

    ``upstream_status`` is None when the request never got an answer
    (connection refused, timeout).
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
        stage: Optional[str] = None,
    ):
        super().__init__(message, stage=stage)
        self.upstream_status = upstream_status
        self.body = body


class EmptyOutline(GAccessError):
    status_code = 500


class EmptyCompletion(GAccessError):
    status_code = 500
