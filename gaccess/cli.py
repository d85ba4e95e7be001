#!/usr/bin/env python3
# =============================================================
# cli.py
# -------------------------------------------------------------
# Generate one article from the command line and save it as
# <out>/<title>-<YYYY-MM-DD>.md
#
#   gaccess-article "renewable energy" --out articles/
#
# Uses the same settings as the API (env / .env.dev).
# =============================================================

from __future__ import annotations
import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from gaccess.errors import GAccessError
from gaccess.generate import ArticleGenerator, build_completion_client
from gaccess.logs import configure_logging
from gaccess.settings import Settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[\\/\x00]")


def safe_filename(name: str) -> str:
    """Single path component: separators become dashes, no leading dots."""
    name = _UNSAFE_CHARS.sub("-", name).lstrip(". ")
    return name or "article.md"


def _parse_args(argv: List[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Generate a multi-chapter Markdown article for a topic.")
    ap.add_argument("topic", help="Article topic")
    ap.add_argument("--out", default=".", help="Output directory (default: current directory)")
    ap.add_argument("--stdout", action="store_true", help="Print the article instead of writing a file")
    ap.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return ap.parse_args(argv)


def main(argv: List[str], settings: Optional[Settings] = None, generator: Optional[ArticleGenerator] = None) -> int:
    args = _parse_args(argv)
    cfg = settings or Settings()
    configure_logging(args.log_level or cfg.LOG_LEVEL)

    topic = args.topic.strip()
    if not topic:
        print("error: topic is empty", file=sys.stderr)
        return 2

    own_client = None
    if generator is None:
        own_client = build_completion_client(cfg)
        generator = ArticleGenerator.from_settings(own_client, cfg)
    try:
        article = generator.generate(topic)
    except GAccessError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        if own_client is not None:
            own_client.close()

    if args.stdout:
        sys.stdout.write(article.content)
        return 0

    out_dir = Path(args.out)
    path = out_dir / safe_filename(article.filename)
    if path.resolve().parent != out_dir.resolve():
        print(f"error: refusing to write outside {out_dir}: {article.filename}", file=sys.stderr)
        return 1
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(article.content, encoding="utf-8")
    except OSError as e:
        print(f"error: could not write {path}: {e}", file=sys.stderr)
        return 1
    logger.info("Wrote %s (%d chars)", path, article.word_count)
    print(path)
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
