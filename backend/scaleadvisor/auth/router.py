"""
Authentication routes: JWT bearer login/logout, registration and the
`/users/me` endpoints, all provided by FastAPI Users.
"""
import uuid
from fastapi import APIRouter
from fastapi_users import FastAPIUsers
from fastapi_users.authentication import (
    AuthenticationBackend, BearerTransport, JWTStrategy,
)

from scaleadvisor import schemas
from scaleadvisor.models import User
from scaleadvisor.auth.manager import get_user_manager, SECRET
from scaleadvisor.config import config

bearer_transport = BearerTransport(tokenUrl="auth/jwt/login")


def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=SECRET,
        lifetime_seconds=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        algorithm=config.ALGORITHM,
    )


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

# Resolves to None for anonymous callers
optional_active_user = fastapi_users.current_user(active=True, optional=True)

router = APIRouter()
router.include_router(
    fastapi_users.get_auth_router(auth_backend), prefix="/auth/jwt", tags=["Auth"]
)
router.include_router(
    fastapi_users.get_register_router(schemas.UserRead, schemas.UserCreate),
    prefix="/auth",
    tags=["Auth"],
)
router.include_router(
    fastapi_users.get_users_router(schemas.UserRead, schemas.UserUpdate),
    prefix="/users",
    tags=["Users"],
)
