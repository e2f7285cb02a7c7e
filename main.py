from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import logging
from routes.warrant_routes import router as warrant_router, warrant_error_handler
from services.errors import WarrantError
from services.warrant_service import WarrantService
from settings.config import settings
from settings.logging_config import configure_logging

logger = logging.getLogger(__name__)


def get_app(service: WarrantService | None = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Warrant Extractor API")
    app = FastAPI(title="A/P Warrant Extractor API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.warrant_service = service or WarrantService()

    app.add_exception_handler(WarrantError, warrant_error_handler)

    @app.exception_handler(Exception)
    async def unhandled_error(request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc) or "Failed to process request"})

    app.include_router(warrant_router)
    logger.info("Routers initialized successfully")

    @app.get("/health")
    async def health_check() -> Dict[str, str]:
        return {"status": "ok"}

    return app


# ASGI app instance
app = get_app()
