"""Entrypoint: python -m registration_service"""
from __future__ import annotations

import logging

import uvicorn

from registration_service.api.middleware.correlation_id import RequestIdLogFilter
from registration_service.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIdLogFilter())
    logger.info("Starting registration API on http://%s:%d", settings.HOST, settings.PORT)
    uvicorn.run(
        "registration_service.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
