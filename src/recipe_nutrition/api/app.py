"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status

from recipe_nutrition.api.admin import router as admin_router
from recipe_nutrition.api.models import AggregateRequest, LinkIngredientRequest
from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.containers import AppContainer
from recipe_nutrition.domain.catalog import CatalogEntry
from recipe_nutrition.domain.errors import (
    CatalogEntryNotFoundError,
    IngredientNotFoundError,
)
from recipe_nutrition.domain.shopping import AggregationResult
from recipe_nutrition.services.quantities import format_amount


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/catalog/search")
    async def search_catalog(
        request: Request,
        q: str = "",
        limit: int | None = Query(default=None, ge=1),
    ) -> list[dict[str, object]]:
        """Ranked catalog search; short queries return an empty list."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.catalog_matcher.search(q, limit)
        return [serialize_entry(entry) for entry in entries]

    @app.get("/catalog/local-search")
    async def search_local_catalog(
        request: Request,
        q: str = "",
        limit: int | None = Query(default=None, ge=1),
    ) -> list[dict[str, object]]:
        """Autocomplete over administrator-created entries."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.catalog_matcher.search_local(q, limit)
        return [serialize_entry(entry) for entry in entries]

    @app.get("/catalog/{code}")
    async def get_catalog_entry(code: str, request: Request) -> dict[str, object]:
        """Return a single catalog entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.catalog_service.get_entry(code)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        return serialize_entry(entry)

    @app.post("/catalog/link")
    async def link_ingredient(
        payload: LinkIngredientRequest, request: Request
    ) -> dict[str, object]:
        """Copy catalog nutrition onto an ingredient row."""
        state_container: AppContainer = request.app.state.container
        try:
            link = state_container.catalog_service.link_ingredient(
                payload.ingredient_id, payload.catalog_code
            )
        except (CatalogEntryNotFoundError, IngredientNotFoundError) as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return {
            "ok": True,
            "ingredient_id": link.ingredient_id,
            "catalog_code": link.catalog_code,
            "synced_at": link.synced_at.isoformat(),
        }

    @app.post("/nutrition/aggregate")
    async def aggregate_nutrition(
        payload: AggregateRequest, request: Request
    ) -> dict[str, object]:
        """Merge planned ingredients into a shopping list and nutrition total."""
        state_container: AppContainer = request.app.state.container
        result = state_container.aggregation_service.aggregate(
            (item.ingredient.to_reference(), item.occurrence_count)
            for item in payload.items
        )
        return serialize_aggregation(result)

    return app


def serialize_entry(entry: CatalogEntry) -> dict[str, object]:
    """Serialize a catalog entry for API responses."""
    return {
        "code": entry.code,
        "name": entry.name or "",
        "localized_name": entry.localized_name,
        "brands": entry.brands or "",
        "quantity": entry.quantity or "",
        "image_small_url": entry.image_url,
        "source": entry.source,
        "piece_weight_g": entry.piece_weight_g,
        "nutrients_per_100g": entry.nutrients.to_dict(),
        "last_synced_at": entry.last_synced_at.isoformat()
        if entry.last_synced_at
        else None,
    }


def serialize_aggregation(result: AggregationResult) -> dict[str, object]:
    """Serialize an aggregation result for API responses."""
    return {
        "shopping_list": [
            {
                "name": line.name,
                "unit": line.unit,
                "total_amount": line.total_amount,
                "label": f"{line.name} — {format_amount(line.total_amount)} {line.unit}",
            }
            for line in result.shopping_list
        ],
        "nutrition_total": result.nutrition_total.to_dict(),
    }
