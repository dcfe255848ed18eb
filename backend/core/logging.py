import logging
import time
from typing import Optional

from fastapi import FastAPI, Request

from backend.core.settings import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger from LOG_LEVEL; repeated calls are no-ops."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )


def add_logging_middleware(app: FastAPI) -> None:
    """Log every request line and its status with elapsed milliseconds on the "backend" logger."""
    setup_logging()
    logger = logging.getLogger("backend")

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):  # type: ignore[override]
        started = time.perf_counter()
        logger.info("%s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Completed %s %s %s in %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
