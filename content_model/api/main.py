import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from content_model.adapters.sqlite.migrator import SQLiteMigrator
from content_model.api.deps import get_settings
from content_model.app_shell.config import validate_ops_rules
from content_model.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = app.dependency_overrides.get(get_settings, get_settings)()

    # Load rules and migrate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings.data_dir)
        os.makedirs(os.path.dirname(settings.db_path) or ".", exist_ok=True)
        SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    except (OSError, ValueError, RuntimeError) as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Content Model API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from content_model.api.routes import authors, nodes  # noqa: E402

app.include_router(nodes.router, prefix="/api/nodes", tags=["Nodes"])
app.include_router(authors.router, prefix="/api/authors", tags=["Authors"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
