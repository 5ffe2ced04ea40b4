#!/usr/bin/env python3
"""PAYLENS API server runner"""

import uvicorn

from app.core.config import get_settings


def main():
    settings = get_settings()

    uvicorn.run(
        "app.api.main:app",
        host=settings.host,
        port=settings.port,
        # uvicorn ignores workers when reload is on
        reload=settings.is_debug,
        workers=1 if settings.is_debug else settings.workers,
        log_level="debug" if settings.is_debug else "info",
    )


if __name__ == "__main__":
    main()
