"""Custom exception classes and handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CalendarError(Exception):
    """Raised when a calendar request cannot be honoured as posted."""

    def __init__(self, detail: str, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI app."""

    @app.exception_handler(CalendarError)
    async def _calendar_error_handler(request: Request, exc: CalendarError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(
            {"success": False, "message": exc.detail},
            status_code=exc.status_code,
        )
