"""Account registration, login and the ``current_active_user`` dependency."""

from .users import (
    UserCreate,
    UserRead,
    UserUpdate,
    auth_backend,
    current_active_user,
    fastapi_users,
)

__all__ = [
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "auth_backend",
    "current_active_user",
    "fastapi_users",
]
