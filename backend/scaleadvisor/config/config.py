import os
import secrets
from dotenv import load_dotenv

load_dotenv()


def resolve_secret_key(secret_key, app_env):
    """JWT signing secret; only development may run without one (random per process)."""
    if secret_key:
        return secret_key
    if app_env != "development":
        raise RuntimeError("SECRET_KEY must be set when APP_ENV is not 'development'")
    return secrets.token_urlsafe(48)


# Application Config
APP_NAME = os.getenv("APP_NAME", "ScaleAdvisor")
APP_ENV = os.getenv("APP_ENV", "development")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Database (async)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./scaleadvisor.db")

# Auth / JWT
SECRET_KEY = resolve_secret_key(os.getenv("SECRET_KEY"), APP_ENV)
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
