# Prompt templates for the article pipeline.

from .types import ChapterBrief

INTRO_WORDS = 600
CONCLUSION_WORDS = 800
BODY_WORDS = 1500


def build_title_prompt(topic: str) -> str:
    return f"""Condense the following topic into a short title of 8-10 characters.
Return only the title text, nothing else.

Topic: {topic}"""


def build_outline_prompt(topic: str) -> str:
    return f"""Create an article outline for the topic below. Requirements:
1. 5-8 chapters
2. The first chapter may be an introduction or overview
3. The middle chapters develop the subject in detail
4. The last chapter is a summary or outlook
5. Return chapter titles only, without numbering
6. One chapter title per line

Topic: {topic}

Return the list of chapter titles directly, one per line, with no other text."""


def target_words(index: int, total: int) -> int:
    """Introduction is short, conclusion medium, everything else long."""
    if index == 0:
        return INTRO_WORDS
    if index == total - 1:
        return CONCLUSION_WORDS
    return BODY_WORDS


def build_chapter_prompt(topic: str, brief: ChapterBrief) -> str:
    intro_note = "As the introduction, briefly present the background and the topic." if brief.is_intro else ""
    conclusion_note = "As the conclusion, summarize the key points and look ahead." if brief.is_conclusion else ""
    return f"""Write the content of one article chapter from the information below.

Topic: {topic}
Chapter title: {brief.title}
Position: chapter {brief.index + 1} of {brief.total}
Target length: about {brief.target_words} words

Writing requirements:
1. Substantial content with clear logic
2. Use Markdown formatting
3. Sub-headings are allowed (use ###)
4. {intro_note}
5. {conclusion_note}
6. Do not repeat the chapter title

Return the chapter content directly, with no other commentary."""
