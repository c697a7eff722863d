"""HTTP proxy in front of the completion gateway.

POST /api/chat  {"message": str} -> 200 {"text": str}
                                  -> 400 {"error": str} on absent/blank input
                                  -> 500 {"error": str} on provider failure
GET  /          liveness check
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from ..config import Settings
from ..gateway import CompletionGateway, ProviderGateway, create_gateway
from .schemas import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Eva backend is running"
PROVIDER_ERROR = "Failed to get a response from the completion provider"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _gateway_from_settings(settings: Settings) -> ProviderGateway:
    return create_gateway(
        "provider",
        api_key=settings.api_key,
        model=settings.model,
        timeout_s=settings.timeout_s,
        max_output_tokens=settings.max_output_tokens,
    )


def create_app(
    gateway: CompletionGateway | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the proxy application.

    Args:
        gateway: Gateway to answer with; built from settings when omitted
        settings: Server settings (default: Settings.from_env())

    Raises:
        ConfigurationError: If no gateway is given and the credential is missing
    """
    if gateway is None:
        settings = settings or Settings.from_env()
        gateway = _gateway_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.gateway.close()

    app = FastAPI(
        title="Eva API",
        version="0.1.0",
        description="Proxy between Eva front-ends and the completion provider.",
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    origins = list(settings.cors_origins) if settings else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("rejected request path=%s errors=%s", request.url.path, exc.errors())
        return _error(400, "Invalid request body")

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return LIVENESS_TEXT

    @app.post(
        "/api/chat",
        response_model=ChatResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat(req: ChatRequest):
        message = (req.message or "").strip()
        if not message:
            logger.warning("chat request without message")
            return _error(400, "No message provided")

        result = await app.state.gateway.complete(message)
        if not result.ok:
            logger.error("chat failed err=%s", result.error)
            return _error(500, PROVIDER_ERROR)

        logger.info("chat ok in_chars=%d out_chars=%d", len(message), len(result.text))
        return ChatResponse(text=result.text)

    return app
