"""FastAPI application exposing the story relay webhooks."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storyrelay.api.auth_middleware import SignatureMiddleware
from storyrelay.config import RelaySettings
from storyrelay.generation.story import StoryGenerator
from storyrelay.messaging.vonage import VonageMessenger
from storyrelay.webhook.classifier import parse_inbound_event
from storyrelay.webhook.dispatcher import StoryDispatcher

logger = logging.getLogger(__name__)

STATUS_WEBHOOK_PATH = "/webhooks/status"
INBOUND_WEBHOOK_PATH = "/webhooks/inbound"
WEBHOOK_PATHS = frozenset({STATUS_WEBHOOK_PATH, INBOUND_WEBHOOK_PATH})


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    return create_app(RelaySettings.from_env())


def build_dispatcher(settings: RelaySettings) -> StoryDispatcher:
    generator = StoryGenerator(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
        timeout=settings.request_timeout,
    )
    messenger = VonageMessenger(
        application_id=settings.application_id,
        private_key=settings.private_key,
        messages_url=settings.messages_url,
        timeout=settings.request_timeout,
    )
    return StoryDispatcher(
        sender_id=settings.rcs_sender_id,
        generator=generator,
        messenger=messenger,
    )


def _problem(status_code: int, detail: str | None = None) -> JSONResponse:
    content: dict[str, object] = {
        "status": status_code,
        "title": HTTPStatus(status_code).phrase,
    }
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(content, status_code=status_code)


def create_app(
    settings: RelaySettings,
    dispatcher: StoryDispatcher | None = None,
) -> FastAPI:
    """Create the relay app with signed-webhook verification."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    story_dispatcher = dispatcher or build_dispatcher(settings)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown methods on known paths are reported as unknown routes
        if exc.status_code in (404, 405):
            return _problem(404)
        return _problem(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _problem(500, str(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/send-story-request")
    async def send_story_request() -> JSONResponse:
        result = await story_dispatcher.trigger_initial_prompt(settings.phone_number)
        if not result.ok:
            return _problem(502, "Failed to send story prompt.")
        return JSONResponse({"message": "Bedtime story prompt sent!"})

    @app.post(STATUS_WEBHOOK_PATH)
    async def status_webhook(request: Request) -> dict[str, bool]:
        try:
            payload = json.loads(await request.body())
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            logger.info(
                "Message %s status: %s",
                payload.get("message_uuid"), payload.get("status"),
            )
        return {"ok": True}

    @app.post(INBOUND_WEBHOOK_PATH)
    async def inbound_webhook(request: Request) -> JSONResponse:
        try:
            raw = json.loads(await request.body())
        except ValueError:
            return _problem(400, "Malformed JSON body.")

        await story_dispatcher.handle_inbound(parse_inbound_event(raw))
        return JSONResponse({"ok": True})

    app.add_middleware(
        SignatureMiddleware,
        secret=settings.signature_secret,
        protected_paths=WEBHOOK_PATHS,
    )

    return app
