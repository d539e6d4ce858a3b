"""Startup configuration.

Read once from the environment (and a local .env file) and handed to
create_app(); nothing else in the service reads os.environ.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Local development defaults only. Override every one of these in production.
DEFAULT_MONGO_URL = "mongodb://localhost:27017"
DEFAULT_DATABASE_NAME = "auth_portal"
DEV_JWT_SECRET = "dev-secret-change-in-production"
DEFAULT_PORT = 5000

STATIC_DIR = Path(__file__).parent / "static"


@dataclass(frozen=True)
class Settings:
    mongo_url: str = DEFAULT_MONGO_URL
    database_name: str = DEFAULT_DATABASE_NAME
    jwt_secret: str = DEV_JWT_SECRET
    jwt_expiration_days: int = 7
    bcrypt_rounds: int = 12
    port: int = DEFAULT_PORT
    cors_origins: list[str] | str = "*"
    log_level: str = "INFO"
    frontend_dir: Path = field(default=STATIC_DIR)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, loading .env first."""
        load_dotenv()

        jwt_secret = os.getenv("JWT_SECRET_KEY")
        if not jwt_secret:
            logger.warning(
                "JWT_SECRET_KEY not set, using the development secret. "
                "Generate a secure key with: openssl rand -hex 32"
            )
            jwt_secret = DEV_JWT_SECRET

        return cls(
            mongo_url=os.getenv("MONGO_URL", DEFAULT_MONGO_URL),
            database_name=os.getenv("MONGODB_DATABASE", DEFAULT_DATABASE_NAME),
            jwt_secret=jwt_secret,
            jwt_expiration_days=int(os.getenv("JWT_EXPIRATION_DAYS", "7")),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            cors_origins=parse_cors_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            frontend_dir=Path(os.getenv("FRONTEND_DIR", str(STATIC_DIR))),
        )


def parse_cors_origins(value: str) -> list[str] | str:
    """'*' stays a wildcard string; anything else becomes a list of origins."""
    if value.strip() == "*":
        return "*"
    # Strip whitespace to handle "origin1, origin2" format
    return [origin.strip() for origin in value.split(",") if origin.strip()]
