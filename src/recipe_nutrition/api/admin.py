"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    Header,
    HTTPException,
    Request,
    status,
)

from recipe_nutrition.api.models import SyncRequest  # noqa: TC001
from recipe_nutrition.config import sync_options_from_settings

if TYPE_CHECKING:
    from recipe_nutrition.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/catalog/count", dependencies=[Depends(require_admin)])
async def catalog_count(request: Request) -> dict[str, int]:
    """Return the number of catalog entries."""
    container: AppContainer = request.app.state.container
    return {"count": container.catalog_service.count()}


@router.post(
    "/catalog/sync",
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(require_admin)],
)
async def run_catalog_sync(
    request: Request,
    background_tasks: BackgroundTasks,
    overrides: SyncRequest | None = None,
) -> dict[str, object]:
    """Schedule a product dump sync; progress and outcome go to the logs."""
    container: AppContainer = request.app.state.container
    options = sync_options_from_settings(container.settings)
    if overrides is not None:
        changes = overrides.model_dump(exclude_none=True)
        options = dataclasses.replace(options, **changes)
    background_tasks.add_task(
        container.ingestion_service.sync, container.dump_source, options
    )
    return {"status": "accepted", "options": dataclasses.asdict(options)}
