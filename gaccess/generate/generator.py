"""Article pipeline: title -> outline -> chapters -> assembly.

Each stage reads and extends an ``ArticleContext``. Stages run in order, once,
and the first error stops the run; nothing partial is returned.
"""

from __future__ import annotations
import logging
import re
import time
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Tuple

from gaccess.errors import EmptyOutline, GAccessError
from .prompts import build_chapter_prompt, build_outline_prompt, build_title_prompt, target_words
from .types import Article, ArticleContext, ChapterBrief, TextCompletionClient

logger = logging.getLogger(__name__)

MAX_CHAPTERS = 8

_TITLE_PUNCT = re.compile(r"[\"'“”‘’「」『』《》]")
_ENUM_PREFIX = re.compile(r"^(?:[\d、.\-)）•]+|\*\s)\s*")
_EMPHASIS = re.compile(r"^(\*\*|__)(.+)\1$")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def clean_title(raw: str) -> str:
    return _TITLE_PUNCT.sub("", raw.strip())


def parse_outline(text: str, limit: int = MAX_CHAPTERS) -> List[str]:
    """Turn free-form model output into at most ``limit`` chapter titles.

    Blank lines and Markdown heading lines are dropped, list numbering is
    stripped from what remains, as is bold or underline wrapping.
    """
    chapters = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        line = _ENUM_PREFIX.sub("", line).strip()
        line = _EMPHASIS.sub(r"\2", line).strip()
        if line:
            chapters.append(line)
    return chapters[:limit]


def article_filename(title: str, on: date) -> str:
    return f"{title}-{on.isoformat()}.md"


def assemble_markdown(title: str, on: date, outline: List[str], chapters: List[str]) -> str:
    parts = [f"# {title}\n\n", f"> Generated on: {on.isoformat()}\n\n", "## Table of Contents\n\n"]
    parts += [f"{i}. {chapter}\n" for i, chapter in enumerate(outline, start=1)]
    parts.append("\n---\n\n")
    for chapter, body in zip(outline, chapters):
        parts.append(f"## {chapter}\n\n{body}\n\n---\n\n")
    return "".join(parts)


Stage = Tuple[str, Callable[[ArticleContext], None]]


class ArticleGenerator:
    def __init__(
        self,
        client: TextCompletionClient,
        chapter_delay: float = 0.5,
        max_chapters: int = MAX_CHAPTERS,
        sleep: Callable[[float], None] = time.sleep,
        today: Callable[[], date] = utc_today,
    ):
        self.client = client
        self.chapter_delay = chapter_delay
        self.max_chapters = min(max_chapters, MAX_CHAPTERS)
        self._sleep = sleep
        self._today = today
        self.stages: List[Stage] = [
            ("title", self._extract_title),
            ("outline", self._generate_outline),
            ("chapters", self._generate_chapters),
            ("assembly", self._assemble),
        ]

    @classmethod
    def from_settings(cls, client: TextCompletionClient, settings, **kwargs) -> "ArticleGenerator":
        return cls(
            client,
            chapter_delay=settings.CHAPTER_DELAY_SECONDS,
            max_chapters=settings.MAX_CHAPTERS,
            **kwargs,
        )

    # -------------------------
    # Stages
    # -------------------------
    def _extract_title(self, ctx: ArticleContext) -> None:
        logger.info("Extracting title...")
        ctx.title = clean_title(self.client.complete(build_title_prompt(ctx.topic)))

    def _generate_outline(self, ctx: ArticleContext) -> None:
        logger.info("Generating outline...")
        raw = self.client.complete(build_outline_prompt(ctx.topic))
        ctx.outline = parse_outline(raw, limit=self.max_chapters)
        if not ctx.outline:
            raise EmptyOutline("Failed to generate outline")

    def _generate_chapters(self, ctx: ArticleContext) -> None:
        total = len(ctx.outline)
        logger.info("Generating %d chapters...", total)
        for i, chapter_title in enumerate(ctx.outline):
            logger.info("Generating chapter %d/%d: %s", i + 1, total, chapter_title)
            brief = ChapterBrief(index=i, total=total, title=chapter_title, target_words=target_words(i, total))
            ctx.chapters.append(self.client.complete(build_chapter_prompt(ctx.topic, brief)).strip())
            if i < total - 1:
                self._sleep(self.chapter_delay)

    def _assemble(self, ctx: ArticleContext) -> None:
        ctx.content = assemble_markdown(ctx.title, ctx.generated_on, ctx.outline, ctx.chapters)

    # -------------------------
    # Public API
    # -------------------------
    def generate(self, topic: str, on: Optional[date] = None) -> Article:
        ctx = ArticleContext(topic=topic.strip(), generated_on=on or self._today())
        for name, stage in self.stages:
            try:
                stage(ctx)
            except GAccessError as e:
                logger.error("Article generation aborted at %s stage: %s", name, e.message)
                raise e.with_stage(name)
        return Article(
            title=ctx.title,
            content=ctx.content,
            filename=article_filename(ctx.title, ctx.generated_on),
        )
