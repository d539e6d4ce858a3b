"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.config import Settings
from api.errors import register_exception_handlers
from api.routes import auth, frontend, health, profile
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Auth Portal API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: connect to MongoDB and make sure the users indexes exist."""
    settings: Settings = app.state.settings
    client = get_mongodb_client(settings.mongo_url)
    if client:
        if ensure_all_indexes(client[settings.database_name]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    if not settings.frontend_dir.joinpath("index.html").is_file():
        logger.warning("Frontend not found", extra={"path": str(settings.frontend_dir)})

    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Tests pass their own Settings (secret, rounds)."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Sign up, sign in and edit a user profile",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Browsers reject credentials with a wildcard origin
    allow_credentials = settings.cors_origins != "*"
    if not allow_credentials:
        logger.warning(
            "CORS configured with wildcard origin ('*'). "
            "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if allow_credentials else ["*"],
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(profile.router)
    # Catch-all; must stay last
    app.include_router(frontend.router)

    return app


_settings = Settings.from_env()
setup_structured_logging(_settings.log_level)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=_settings.port,
        access_log=False
    )
