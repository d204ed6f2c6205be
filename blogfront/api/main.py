import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from blogfront.api.deps import get_content_source, get_rules, get_settings
from blogfront.app_shell.config import validate_startup

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = get_rules()
        validate_startup(rules)
    except Exception:
        logger.critical("Rules load failed from %s", settings.rules_path, exc_info=True)
        raise
    logger.info("Rules loaded from %s", settings.rules_path)

    yield

    # Only close a source that a request actually created
    if get_content_source.cache_info().currsize:
        close = getattr(get_content_source(), "close", None)
        if close is not None:
            close()


app = FastAPI(
    title="Blogfront",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from blogfront.api.routes import pages, posts  # noqa: E402

app.include_router(posts.router, prefix="/api", tags=["Posts"])
app.include_router(pages.router, prefix="", tags=["Pages"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "blogfront"}
