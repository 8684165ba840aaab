# =======================================================================================
# securepass/utils/exceptions.py - Custom Exceptions
# =======================================================================================
from typing import Optional


class SecurePassError(Exception):
    """Base exception for the gate-pass system."""
    pass

class LoginNotFoundError(SecurePassError):
    """Raised when no registered user matches the login email."""
    pass

class EmailAlreadyRegisteredError(SecurePassError):
    """Raised when registering an email that already exists."""
    pass

class PassNotFoundError(SecurePassError):
    """Raised when a pass id does not exist."""
    pass

class UnauthorizedError(SecurePassError):
    """Raised when the acting user's role does not allow the operation."""
    pass

class InvalidTransitionError(SecurePassError):
    """Raised when a status change would break the pass lifecycle."""
    pass

class InvalidPassRequestError(SecurePassError):
    """Raised when a pass request is missing required visitor details."""
    pass

class ExternalServiceError(SecurePassError):
    """Raised when the plausibility-check service fails or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
