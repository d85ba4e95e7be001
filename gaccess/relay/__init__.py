# Relay package: bearer-token check + pass-through to the generation API.

from .relay import Relay, check_bearer, parse_prompt
from .gemini_client import GeminiClient
from .types import GenerationRequest, UpstreamReply

__all__ = ["Relay", "check_bearer", "parse_prompt", "GeminiClient", "GenerationRequest", "UpstreamReply"]
