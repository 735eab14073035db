"""
Auth package initializer.
"""
# scaleadvisor/auth/__init__.py

from .router import router, fastapi_users, optional_active_user
from .manager import get_user_manager, UserManager

__all__ = [
    "router",
    "fastapi_users",
    "optional_active_user",
    "get_user_manager",
    "UserManager",
]
