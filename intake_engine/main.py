"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake_engine.config import Settings, get_settings
from intake_engine.infrastructure.database import close_db, init_db
from intake_engine.infrastructure.middleware import (
    RequestContextMiddleware,
    error_handler_middleware,
)
from intake_engine.infrastructure.providers.execution import JDoodleCodeRunner
from intake_engine.infrastructure.providers.llm import GroqProvider, LLMRubricGrader
from intake_engine.infrastructure.tasks import BackgroundTaskRunner
from intake_engine.infrastructure.telemetry import configure_logging, get_logger
from intake_engine.presentation.http import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    logger.info(
        "Starting intake engine",
        extra={
            "version": settings.version,
            "environment": settings.environment,
            "grader_enabled": settings.grader_enabled,
            "code_execution_enabled": settings.code_execution_enabled,
        },
    )

    await init_db(settings)
    logger.info("Database connection initialized")

    yield

    logger.info("Shutting down intake engine")
    await app.state.task_runner.drain()

    if app.state.llm_provider is not None:
        await app.state.llm_provider.close()
    if app.state.code_runner is not None:
        await app.state.code_runner.close()

    await close_db()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override for testing

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        service_name=settings.service_name,
    )

    app = FastAPI(
        title="Intake Engine API",
        description="Adaptive intake assessment, skill mastery and project recommendations",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    app.state.settings = settings
    app.state.task_runner = BackgroundTaskRunner()

    # Optional collaborators; grading falls back to heuristics without them
    app.state.llm_provider = GroqProvider(settings) if settings.grader_enabled else None
    app.state.rubric_grader = (
        LLMRubricGrader(app.state.llm_provider, temperature=settings.grader_temperature)
        if app.state.llm_provider is not None
        else None
    )
    app.state.code_runner = (
        JDoodleCodeRunner(settings) if settings.code_execution_enabled else None
    )

    # Add middleware (order matters - last added is first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if not settings.is_production else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    error_handler_middleware(app)

    app.include_router(api_router)

    return app


# Default app instance for uvicorn
app = create_app()
