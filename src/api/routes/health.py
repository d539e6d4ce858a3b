"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client
from api.config import Settings
from api.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health(settings: Settings = Depends(get_settings)):
    """Liveness plus MongoDB status. Always 200 while the process is up."""
    mongodb = {"status": "healthy", "message": "Connection successful"}
    try:
        client = get_mongodb_client(settings.mongo_url)
        if client is None:
            mongodb = {"status": "unhealthy", "message": "Connection failed or not configured"}
        else:
            client.admin.command('ping')
    except PyMongoError as e:
        mongodb = {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}

    if mongodb["status"] != "healthy":
        logger.warning("Health check: MongoDB unavailable")

    return {
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {"mongodb": mongodb},
    }
