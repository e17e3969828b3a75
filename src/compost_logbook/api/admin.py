"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import PositiveInt  # noqa: TC002

from compost_logbook.api.models import ReportCreateRequest  # noqa: TC001
from compost_logbook.api.serializers import serialize_listing, serialize_report

if TYPE_CHECKING:
    from compost_logbook.containers import AppContainer

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


@router.post(
    "/reports",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    payload: ReportCreateRequest, request: Request
) -> dict[str, object]:
    """Validate and store a new report definition."""
    container: AppContainer = request.app.state.container
    report = container.report_service.create_report(
        payload.to_filter(), payload.date_from, payload.date_to
    )
    return serialize_report(report)


@router.get("/reports", dependencies=[Depends(require_admin)])
async def list_reports(request: Request) -> dict[str, object]:
    """Return saved reports, newest first."""
    container: AppContainer = request.app.state.container
    reports = container.report_service.list_reports()
    return {"reports": [serialize_report(report) for report in reports]}


@router.get("/logs", dependencies=[Depends(require_admin)])
async def list_logs(
    request: Request, limit: PositiveInt | None = None
) -> dict[str, object]:
    """Return recent logs with masked emails."""
    container: AppContainer = request.app.state.container
    resolved_limit = limit or container.settings.recent_logs_limit
    listings = container.logbook_service.list_recent(resolved_limit)
    return {"logs": [serialize_listing(listing) for listing in listings]}
