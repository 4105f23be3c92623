"""FastAPI application factory for TNFD Evaluator."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ..config import Config
from ..evaluation.evaluator import Evaluator
from ..llm.openai import OpenAIClient
from .route import router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    evaluator: Optional[Evaluator] = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        config: Application configuration. Read from the environment if not provided.
        evaluator: Pre-built evaluator. When omitted, one is created on startup
                   around a new provider client that is closed on shutdown.

    Returns:
        Configured FastAPI application.
    """
    config = config or Config.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client: Optional[OpenAIClient] = None
        if getattr(app.state, "evaluator", None) is None:
            client = OpenAIClient(config.provider)
            app.state.evaluator = Evaluator(
                client,
                config=config.evaluation,
                prompts_dir=config.prompts_dir,
            )
        logger.info(f"Server is running on port {config.server.port}")
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()
                app.state.evaluator = None

    app = FastAPI(
        title="TNFD Evaluator",
        description="Score nature-related disclosure reports against the TNFD recommendations",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.evaluator = evaluator

    app.include_router(router)

    static_dir = config.server.static_dir
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug(f"Static directory {static_dir} not found, static files disabled")

    return app
