import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from paperdesk.api import billing, coupons, health, identity, notifications
from paperdesk.context import AppContext, build_context
from paperdesk.core.config import Settings, get_settings, validate_config
from paperdesk.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from paperdesk.core.logging import configure_logging
from paperdesk.core.middleware.request_id import RequestIdMiddleware
from paperdesk.core.validation import validate_env


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("paperdesk")
    logger.info("Starting PaperDesk backend...", extra={"identity": app.state.context.identity_enabled})
    try:
        yield
    finally:
        logger.info("Stopping PaperDesk backend...")


def create_app(context: Optional[AppContext] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Prebuilt context (tests pass fakes); built from settings otherwise
        settings: Settings to validate and build from (defaults to the environment)

    Raises:
        EnvValidationError: If required configuration is missing
    """
    if context is None:
        cfg = settings or get_settings()
        configure_logging(cfg.ENV)
        validate_env(cfg)
        validate_config(cfg)
        context = build_context(cfg)
    cfg = context.settings

    app = FastAPI(title="PaperDesk - Backend", lifespan=lifespan)
    app.state.context = context

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # CORS: only the configured front-end origin
    origins = [cfg.FRONTEND_URL] if cfg.FRONTEND_URL else []
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(health.router)
    app.include_router(notifications.router)
    app.include_router(billing.router)
    app.include_router(coupons.router)
    if context.identity_enabled:
        app.include_router(identity.router)

    return app


def _load_env() -> None:
    # Load env from the working directory's .env (tests set their own)
    if "PYTEST_CURRENT_TEST" not in os.environ:
        load_dotenv()


def get_app() -> FastAPI:
    """ASGI factory: `uvicorn paperdesk.main:get_app --factory`."""
    _load_env()
    return create_app()
