#!/usr/bin/env python3
"""
Standalone script to run the Vibely backend.
"""
import logging
import sys

import uvicorn

from vibely.core.config import Settings


def main():
    """Main entry point for the application."""
    settings = Settings()

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger(__name__)

    logger.info("Starting Vibely backend")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Host: {settings.API_HOST}")
    logger.info(f"Port: {settings.API_PORT}")

    try:
        # The factory builds its own Settings from the same environment
        uvicorn.run(
            "vibely.main:create_app",
            factory=True,
            host=settings.API_HOST,
            port=settings.API_PORT,
            reload=settings.is_development,
            log_level=settings.LOG_LEVEL.lower(),
            access_log=True
        )

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
