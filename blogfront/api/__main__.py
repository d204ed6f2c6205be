"""Server entry point for running with python -m blogfront.api."""

import logging
import os

import uvicorn

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info("Starting blogfront server on %s:%s", host, port)

    uvicorn.run(
        "blogfront.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # Keep the logging configured above
    )
