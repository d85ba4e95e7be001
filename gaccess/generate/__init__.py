# Article generation package.

# Exposes the pipeline, its data types and the completion clients.

from .generator import ArticleGenerator, parse_outline, clean_title, assemble_markdown
from .types import Article, ArticleContext, ChapterBrief, TextCompletionClient
from .clients import RelayClient, LocalRelayClient, build_completion_client

__all__ = [
    "ArticleGenerator",
    "parse_outline",
    "clean_title",
    "assemble_markdown",
    "Article",
    "ArticleContext",
    "ChapterBrief",
    "TextCompletionClient",
    "RelayClient",
    "LocalRelayClient",
    "build_completion_client",
]
