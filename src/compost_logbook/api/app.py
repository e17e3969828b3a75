"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from compost_logbook.api.admin import router as admin_router
from compost_logbook.api.models import LogSubmission
from compost_logbook.api.serializers import (
    serialize_log,
    serialize_report,
    serialize_result,
)
from compost_logbook.app_logging import configure_logging
from compost_logbook.containers import AppContainer
from compost_logbook.domain.errors import (
    LogValidationError,
    ReportNotFoundError,
    ReportValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(LogValidationError)
    @app.exception_handler(ReportValidationError)
    async def validation_error(_request: Request, exc: ValueError) -> JSONResponse:
        logger.info("Rejected request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ReportNotFoundError)
    async def not_found(_request: Request, exc: ReportNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/logs", status_code=status.HTTP_201_CREATED)
    async def submit_log(
        submission: LogSubmission, request: Request
    ) -> dict[str, object]:
        """Store an activity log from the logging form."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.logbook_service.submit(
            location_id=submission.location_id,
            location_name=submission.location_name,
            activity=submission.activity,
            weight_kg=submission.weight_kg,
            device_id=submission.device_id,
            email=submission.email,
        )
        return serialize_log(entry)

    @app.get("/reports/email/{email}")
    async def email_report(email: str, request: Request) -> dict[str, object]:
        """Return a report of every log submitted with an email."""
        state_container: AppContainer = request.app.state.container
        result = state_container.report_service.build_email_report(email)
        return {"email": email.strip().lower(), "result": serialize_result(result)}

    @app.get("/reports/{report_id}")
    async def report_detail(report_id: int, request: Request) -> dict[str, object]:
        """Return a saved report computed against current data."""
        state_container: AppContainer = request.app.state.container
        view = state_container.report_service.build_report(report_id)
        return {
            "report": serialize_report(view.report),
            "result": serialize_result(view.result),
        }

    return app
