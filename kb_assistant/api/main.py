"""
FastAPI application with assembled routers.

Initializes the FastAPI app, builds the pipeline context at startup,
maps domain errors to JSON error bodies and configures the uvicorn server.

Dependencies: fastapi, uvicorn, kb_assistant.api.routers, kb_assistant.core.context
System role: API entry point with router assembly and server launch
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kb_assistant.configs import get_settings
from kb_assistant.core.context import PipelineContext, build_pipeline_context
from kb_assistant.core.exceptions import ClientInputError, KnowledgeBaseError
from kb_assistant.observability import configure_logging
from kb_assistant.observability.log_utils import log_exception_with_context

from .routers import chat_router, health_router
from .routers.chat import MISSING_FIELDS_MESSAGE

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto {"error": message} bodies."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"{__name__}:handle_request_validation - {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_MESSAGE})

    @app.exception_handler(ClientInputError)
    async def handle_client_input(request: Request, exc: ClientInputError) -> JSONResponse:
        logger.warning(f"{__name__}:handle_client_input - {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(KnowledgeBaseError)
    async def handle_knowledge_base_error(request: Request, exc: KnowledgeBaseError) -> JSONResponse:
        log_exception_with_context(
            logger,
            "Request failed",
            exc,
            request_path=request.url.path,
        )
        return JSONResponse(status_code=500, content={"error": exc.message})


def create_app(
    context_factory: Callable[[], PipelineContext] = build_pipeline_context,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        context_factory: Builds the pipeline context at startup. Any error it
            raises aborts startup.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Building pipeline context...")
        app.state.pipeline_context = context_factory()
        logger.info(f"Pipeline context ready ({len(app.state.pipeline_context.store)} chunks)")

        yield

        # Shutdown
        app.state.pipeline_context = None
        logger.info("Pipeline context released")

    app = FastAPI(
        title="Knowledge Base Assistant API",
        description="Retrieval-augmented question answering over a fixed document set",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(chat_router)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "kb_assistant.api.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )
