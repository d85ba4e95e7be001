# ============================================================
# G-access FastAPI App
# ------------------------------------------------------------
# Two independent handlers:
#   - /api/gemini            bearer-token relay to the Gemini API
#   - /api/generate-article  title -> outline -> chapters article
# ============================================================

import logging
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError, field_validator
from starlette.concurrency import run_in_threadpool

# --- Local imports ---
from gaccess.errors import BadRequest, GAccessError, Unauthorized, UpstreamError
from gaccess.generate import ArticleGenerator, build_completion_client
from gaccess.logs import configure_logging
from gaccess.relay import Relay, parse_prompt
from gaccess.settings import Settings, get_settings, settings

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# 🔧 Component wiring (overridable in tests)
# One HTTP session per request, closed once the response is sent.
# ------------------------------------------------------------
def get_relay(cfg: Settings = Depends(get_settings)) -> Iterator[Relay]:
    relay = Relay(cfg)
    try:
        yield relay
    finally:
        relay.close()


def get_article_generator(cfg: Settings = Depends(get_settings)) -> Iterator[ArticleGenerator]:
    client = build_completion_client(cfg)
    try:
        yield ArticleGenerator.from_settings(client, cfg)
    finally:
        client.close()

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="G-access API", version="0.1")

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class TopicRequest(BaseModel):
    topic: str

    @field_validator("topic")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("topic is empty")
        return v


class ArticleData(BaseModel):
    title: str
    filename: str
    content: str
    wordCount: int


class ArticlePayload(BaseModel):
    status: str = "success"
    data: ArticleData


class ErrorPayload(BaseModel):
    status: str = "error"
    message: str

# ------------------------------------------------------------
# 🔁 Relay route
# ------------------------------------------------------------
@app.post("/api/gemini")
async def gemini(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    relay: Relay = Depends(get_relay),
):
    try:
        relay.authorize(authorization)
        prompt = parse_prompt(await request.body())
        reply = await run_in_threadpool(relay.forward, prompt)
    except Unauthorized as e:
        logger.warning("relay rejected request: %s", e.message)
        return JSONResponse({"error": e.message}, status_code=e.status_code)
    except GAccessError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return Response(content=reply.body, status_code=reply.status_code, media_type=reply.content_type)

# ------------------------------------------------------------
# 📝 Article route
# ------------------------------------------------------------
def _parse_topic(raw: bytes) -> str:
    try:
        return TopicRequest.model_validate_json(raw).topic
    except ValidationError as e:
        raise BadRequest("Missing or empty topic field") from e


@app.post("/api/generate-article", response_model=ArticlePayload)
async def generate_article(request: Request, generator: ArticleGenerator = Depends(get_article_generator)):
    try:
        topic = _parse_topic(await request.body())
        article = await run_in_threadpool(generator.generate, topic)
    except BadRequest as e:
        return JSONResponse(ErrorPayload(message=e.message).model_dump(), status_code=400)
    except GAccessError as e:
        if isinstance(e, UpstreamError):
            logger.error("article generation failed upstream (status=%s)", e.upstream_status)
        return JSONResponse(ErrorPayload(message=e.message).model_dump(), status_code=500)
    except Exception as e:
        logger.exception("article generation failed")
        return JSONResponse(ErrorPayload(message=str(e) or "Unknown error").model_dump(), status_code=500)

    return ArticlePayload(
        data=ArticleData(
            title=article.title,
            filename=article.filename,
            content=article.content,
            wordCount=article.word_count,
        )
    )

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/health")
def health(cfg: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "env": cfg.ENV,
        "upstream_configured": bool(cfg.GEMINI_API_KEY),
        "proxy_configured": bool(cfg.PROXY_SECRET_TOKEN),
        "relay_mode": "remote" if cfg.RELAY_URL else "local",
    }


@app.get("/")
def hello():
    return {"message": "G-access service running."}
