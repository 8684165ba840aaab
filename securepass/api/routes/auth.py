# =======================================================================================
# securepass/api/routes/auth.py - Registration & Session Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends, HTTPException, status

from ...models.schemas import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SessionResponse,
    User,
)
from ...services.pass_service import PassLifecycleManager, new_user_id
from ...utils.exceptions import EmailAlreadyRegisteredError, LoginNotFoundError
from ..dependencies import get_manager

router = APIRouter()


@router.post("/auth/register", response_model=SessionResponse)
def register(request: RegisterRequest, manager: PassLifecycleManager = Depends(get_manager)):
    user = User(
        id=new_user_id(),
        name=request.name,
        email=request.email,
        role=request.role,
        avatar=request.avatar,
    )
    try:
        user = manager.register(user)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return SessionResponse(user=user, view=manager.landing_view(user))


@router.post("/auth/login", response_model=SessionResponse)
def login(request: LoginRequest, manager: PassLifecycleManager = Depends(get_manager)):
    try:
        user = manager.login(request.email)
    except LoginNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found. Please register first.",
        )

    return SessionResponse(user=user, view=manager.landing_view(user))


@router.post("/auth/logout", response_model=MessageResponse)
def logout(manager: PassLifecycleManager = Depends(get_manager)):
    manager.logout()
    return MessageResponse(success=True, message="Logged out")


@router.get("/auth/session", response_model=SessionResponse)
def current_session(manager: PassLifecycleManager = Depends(get_manager)):
    user = manager.current_session
    if user is None:
        return SessionResponse()
    return SessionResponse(user=user, view=manager.landing_view(user))
