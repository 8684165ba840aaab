# =======================================================================================
# securepass/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .validators import *

__all__ = [
    "SecurePassError", "LoginNotFoundError", "EmailAlreadyRegisteredError",
    "PassNotFoundError", "UnauthorizedError", "InvalidTransitionError",
    "InvalidPassRequestError", "ExternalServiceError",
    "PassTransitionValidator", "ViewAccessValidator",
]
