"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status

from food_resolver.api.admin import router as admin_router
from food_resolver.api.models import (
    ImageAnalysisRequest,
    PortionRequest,
    analysis_payload,
    portion_payload,
    result_payload,
)
from food_resolver.app_logging import configure_logging
from food_resolver.containers import AppContainer
from food_resolver.services.images import InvalidImageError


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

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        query: str = Query(min_length=1),
        limit: int = Query(default=10, ge=1, le=50),
    ) -> dict[str, object]:
        """Resolve a free-text food query."""
        state_container: AppContainer = request.app.state.container
        results = await state_container.food_resolver.search_food(query, limit)
        return {"results": [result_payload(result) for result in results]}

    @app.post("/foods/portion")
    async def food_portion(body: PortionRequest, request: Request) -> dict[str, object]:
        """Compute nutrients for a serving of a named food."""
        state_container: AppContainer = request.app.state.container
        details = state_container.portion_service.portion_for_name(
            body.name,
            category=body.category,
            unit=body.unit,
            quantity=body.quantity,
        )
        return portion_payload(details)

    @app.post("/images/analyze")
    async def analyze_image(
        body: ImageAnalysisRequest, request: Request
    ) -> dict[str, object]:
        """Detect foods in a base64-encoded meal photo."""
        state_container: AppContainer = request.app.state.container
        try:
            image_bytes = _decode_image(body.image)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        try:
            analysis = await state_container.image_analysis_service.analyze_image(
                image_bytes
            )
        except InvalidImageError as exc:
            logger.info("Rejected undecodable image upload")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return analysis_payload(analysis)

    return app


def _decode_image(raw: str) -> bytes:
    """Decode base64 image data, stripping a data URL prefix if present."""
    _, _, encoded = raw.rpartition(",")
    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError("Image is not valid base64") from exc
    if not image_bytes:
        raise ValueError("Image is empty")
    return image_bytes
