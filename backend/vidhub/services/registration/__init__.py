from .dto import RegisterIn
from .service import UserRegistrationService

__all__ = ["RegisterIn", "UserRegistrationService"]
