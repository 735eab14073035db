# User Manager for FastAPI Users.
import uuid
import logging
from fastapi import Depends, Request
from fastapi_users import BaseUserManager, UUIDIDMixin
from scaleadvisor.models import User
from scaleadvisor.auth.db import get_user_db
from scaleadvisor.config import config

logger = logging.getLogger(__name__)
SECRET = config.SECRET_KEY


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = SECRET
    verification_token_secret = SECRET

    # Token validity (3 days)
    verification_token_lifetime_seconds = 60 * 60 * 24 * 3

    async def on_after_register(self, user: User, request: Request | None = None):
        logger.info(f"User {user.email} has registered.")

    async def on_after_forgot_password(self, user: User, token: str, request: Request | None = None):
        logger.info(f"Password reset requested for {user.email}")

    async def on_after_request_verify(self, user: User, token: str, request: Request | None = None):
        logger.info(f"Verification requested for {user.email}")

    async def on_after_verify(self, user: User, request: Request | None = None):
        logger.info(f"User {user.email} has been verified.")


async def get_user_manager(user_db=Depends(get_user_db)):
    yield UserManager(user_db)
