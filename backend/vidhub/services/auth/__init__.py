from .dto import (
    AuthTokenConfig,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "ChangePasswordIn",
    "LoginIn",
    "LoginOut",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
]
