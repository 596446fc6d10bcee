from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import generate_router
from .config import get_settings
from .exceptions import ConfigError, GatewayError
from .log import setup_logging

logger = logging.getLogger(__name__)


def _resolve_cors_options() -> tuple[list[str], list[str]]:
    settings = get_settings()
    return settings.cors_allow_origins or ["*"], settings.cors_allow_headers or ["*"]


def _cors_error_headers(origin: str | None, allow_origins: list[str]) -> dict[str, str]:
    if not origin:
        return {}
    if "*" in allow_origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allow_origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def _validation_message(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg") or "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + ("; ".join(problems) or "malformed body")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(title="Sitesmith API")

    allow_origins, allow_headers = _resolve_cors_options()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=allow_headers,
    )

    app.include_router(generate_router)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(_request: Request, exc: GatewayError) -> JSONResponse:
        logger.error("Generation failed [%s]: %s", exc.error_type, exc.with_trace())
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_request: Request, exc: ConfigError) -> JSONResponse:
        logger.error("Configuration error: %s", exc.with_trace())
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    # Runs outside CORSMiddleware, so the allow-origin header is added here.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled server exception", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=_cors_error_headers(request.headers.get("origin"), allow_origins),
        )

    @app.get("/health")
    def health() -> dict:
        checks: dict[str, str] = {}
        overall = "ok"

        current = get_settings()
        has_key = bool(current.gateway_api_key)
        checks["api_key"] = "ok" if has_key else "missing"
        if not has_key:
            overall = "degraded"
        checks["text_model"] = current.text_model
        checks["image_model"] = current.image_model

        return {"status": overall, "checks": checks}

    return app


app = create_app()

__all__ = ["create_app", "app"]
