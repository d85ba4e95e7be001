"""Shared fixtures: settings, fake completion client, mocked HTTP replies."""

import json
from typing import Callable, List, Optional
from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from gaccess.app import app
from gaccess.settings import Settings, get_settings

SECRET = "s3cret"
API_KEY = "test-key"


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def http_reply(status: int = 200, body=None, content_type: str = "application/json") -> Mock:
    """Stand-in for requests.Response."""
    raw = body if isinstance(body, bytes) else json.dumps(body if body is not None else {}).encode("utf-8")
    resp = Mock(spec=requests.Response)
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.content = raw
    resp.text = raw.decode("utf-8")
    resp.headers = {"Content-Type": content_type}
    resp.json.side_effect = lambda: json.loads(raw)
    return resp


class FakeCompletionClient:
    """Answers title/outline/chapter prompts from fixed strings and records every prompt."""

    def __init__(self, title: str = "Title", outline: str = "Intro\nBody\nEnd", chapter: Optional[Callable[[str], str]] = None):
        self.title = title
        self.outline = outline
        self.chapter = chapter or (lambda name: f"Body of {name}.")
        self.prompts: List[str] = []

    @property
    def chapter_prompts(self) -> List[str]:
        return [p for p in self.prompts if "Chapter title:" in p]

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if prompt.startswith("Condense"):
            return self.title
        if prompt.startswith("Create an article outline"):
            return self.outline
        for line in prompt.splitlines():
            if line.startswith("Chapter title: "):
                return self.chapter(line[len("Chapter title: "):])
        raise AssertionError(f"unexpected prompt: {prompt[:40]}")


@pytest.fixture
def cfg() -> Settings:
    return Settings(
        _env_file=None,
        GEMINI_API_KEY=API_KEY,
        PROXY_SECRET_TOKEN=SECRET,
        RELAY_URL=None,
        CHAPTER_DELAY_SECONDS=0,
    )


@pytest.fixture
def session() -> Mock:
    s = Mock(spec=requests.Session)
    s.post.return_value = http_reply(200, gemini_body("hello"))
    return s


@pytest.fixture
def client(cfg):
    app.dependency_overrides[get_settings] = lambda: cfg
    yield TestClient(app)
    app.dependency_overrides.clear()
