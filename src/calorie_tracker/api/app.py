"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from calorie_tracker.api.meals import router as meals_router
from calorie_tracker.api.models import RagQueryRequest
from calorie_tracker.api.profile import router as profile_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(meals_router)
    app.include_router(profile_router)

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request bodies as plain 400 errors."""
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/rag-query")
    async def rag_query(payload: RagQueryRequest, request: Request) -> JSONResponse:
        """Answer a nutrition question using retrieved context."""
        if not payload.query or not payload.namespace:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Missing query or namespace"},
            )
        state_container: AppContainer = request.app.state.container
        try:
            answer = await state_container.rag_service.answer(
                payload.query, payload.namespace
            )
        except Exception:
            logger.exception(
                "Failed to process RAG request",
                extra={"namespace": payload.namespace},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )
        return JSONResponse(content={"response": answer})

    return app
