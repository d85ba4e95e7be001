import re
from datetime import date
from unittest.mock import Mock

import pytest
import requests

from gaccess.app import app, get_article_generator, get_relay
from gaccess.errors import UpstreamError
from gaccess.generate import ArticleGenerator, LocalRelayClient, RelayClient

from conftest import FakeCompletionClient


def use_generator(fake):
    app.dependency_overrides[get_article_generator] = lambda: ArticleGenerator(
        fake, chapter_delay=0, sleep=Mock(), today=lambda: date(2025, 3, 14)
    )


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["upstream_configured"] is True
    assert data["proxy_configured"] is True
    assert data["relay_mode"] == "local"
    assert "s3cret" not in r.text


def test_generate_article_success(client):
    fake = FakeCompletionClient(title="Renewable Power", outline="Intro\nChallenges\nConclusion")
    use_generator(fake)

    r = client.post("/api/generate-article", json={"topic": "  renewable energy  "})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["title"] == "Renewable Power"
    assert data["filename"] == "Renewable Power-2025-03-14.md"
    assert data["wordCount"] == len(data["content"])
    assert re.findall(r"^## (.+)$", data["content"], re.M) == ["Table of Contents", "Intro", "Challenges", "Conclusion"]
    assert all("Topic: renewable energy\n" in p or p.endswith("Topic: renewable energy") for p in fake.prompts)


def test_generate_article_missing_topic(client):
    fake = FakeCompletionClient()
    use_generator(fake)
    for body in ({}, {"topic": ""}, {"topic": "   "}, {"topic": None}):
        r = client.post("/api/generate-article", json=body)
        assert r.status_code == 400
        assert r.json() == {"status": "error", "message": "Missing or empty topic field"}
    assert fake.prompts == []


def test_generate_article_invalid_json(client):
    use_generator(FakeCompletionClient())
    r = client.post("/api/generate-article", content=b"topic=x")
    assert r.status_code == 400
    assert r.json()["status"] == "error"


def test_generate_article_empty_outline_is_500(client):
    fake = FakeCompletionClient(outline="### nothing usable")
    use_generator(fake)

    r = client.post("/api/generate-article", json={"topic": "t"})

    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "outline stage failed: Failed to generate outline"}
    assert fake.chapter_prompts == []


def test_generate_article_upstream_error_is_500(client):
    def chapter(name):
        raise UpstreamError("Relay API error: 429 - quota", upstream_status=429, body="quota")

    use_generator(FakeCompletionClient(chapter=chapter))

    r = client.post("/api/generate-article", json={"topic": "t"})

    assert r.status_code == 500
    assert r.json()["status"] == "error"
    assert "429" in r.json()["message"]
    assert "data" not in r.json()


def test_generate_article_unexpected_error_is_500(client):
    fake = Mock()
    fake.complete.side_effect = RuntimeError("boom")
    use_generator(fake)

    r = client.post("/api/generate-article", json={"topic": "t"})

    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "boom"}


# -------------------------
# Per-request resources
# -------------------------
def test_relay_dependency_closes_session(cfg):
    deps = get_relay(cfg)
    relay = next(deps)
    relay.client.session = Mock(spec=requests.Session)

    with pytest.raises(StopIteration):
        next(deps)
    relay.client.session.close.assert_called_once()


def test_generator_dependency_closes_local_session(cfg):
    deps = get_article_generator(cfg)
    generator = next(deps)
    assert isinstance(generator.client, LocalRelayClient)
    generator.client.relay.client.session = Mock(spec=requests.Session)

    with pytest.raises(StopIteration):
        next(deps)
    generator.client.relay.client.session.close.assert_called_once()


def test_generator_dependency_closes_remote_session(cfg):
    remote = cfg.model_copy(update={"RELAY_URL": "https://relay.example/api/gemini"})
    deps = get_article_generator(remote)
    generator = next(deps)
    assert isinstance(generator.client, RelayClient)
    generator.client.session = Mock(spec=requests.Session)

    with pytest.raises(StopIteration):
        next(deps)
    generator.client.session.close.assert_called_once()
