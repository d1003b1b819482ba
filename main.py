"""FastAPI application entrypoint."""

import logging

from fastapi import FastAPI

from clinic.core.config import settings
from clinic.core.exceptions import register_exception_handlers
from clinic.core.logging import configure_logging
from clinic.modules.calendar.router import router as calendar_router

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version="0.1.0",
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(calendar_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting %s", settings.app_name)
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
