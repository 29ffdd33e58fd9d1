from .dto import UpdateProfileIn, UserPublicOut, to_user_public
from .service import AccountService

__all__ = ["AccountService", "UpdateProfileIn", "UserPublicOut", "to_user_public"]
