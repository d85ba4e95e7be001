# Dataclasses shared by the article pipeline and its clients.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol


class TextCompletionClient(Protocol):
    """Anything that turns a prompt into completion text."""

    def complete(self, prompt: str) -> str: ...


@dataclass
class ChapterBrief:
    """Inputs for one chapter prompt."""
    index: int
    total: int
    title: str
    target_words: int

    @property
    def is_intro(self) -> bool:
        return self.index == 0

    @property
    def is_conclusion(self) -> bool:
        return self.index == self.total - 1


@dataclass
class ArticleContext:
    """State accumulated by the pipeline stages for one article."""
    topic: str
    generated_on: date
    title: Optional[str] = None
    outline: List[str] = field(default_factory=list)
    chapters: List[str] = field(default_factory=list)
    content: Optional[str] = None


@dataclass
class Article:
    """Final assembled document."""
    title: str
    content: str
    filename: str

    @property
    def word_count(self) -> int:
        # character length of the Markdown, as reported to API callers
        return len(self.content)
