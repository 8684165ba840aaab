# =======================================================================================
# securepass/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from ..models.schemas import User
from ..services.pass_service import PassLifecycleManager

def get_manager(request: Request) -> PassLifecycleManager:
    """Dependency to get the shared pass lifecycle manager."""
    manager = getattr(request.app.state, "manager", None)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is still starting",
        )
    return manager

def get_optional_user(manager: PassLifecycleManager = Depends(get_manager)) -> Optional[User]:
    return manager.current_session

def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in")
    return user
