# =======================================================================================
# securepass/api/routes/passes.py - Gate Pass Endpoints
# =======================================================================================
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.enums import ActiveView, UserRole
from ...models.schemas import (
    GatePass,
    PassCreatedResponse,
    PassRequest,
    StatusUpdateRequest,
    User,
)
from ...services.pass_service import PassLifecycleManager
from ...utils.exceptions import (
    ExternalServiceError,
    InvalidPassRequestError,
    InvalidTransitionError,
    PassNotFoundError,
    UnauthorizedError,
)
from ..dependencies import get_current_user, get_manager, get_optional_user

router = APIRouter()


@router.post("/passes", response_model=PassCreatedResponse, status_code=status.HTTP_201_CREATED)
async def request_pass(
    request: PassRequest,
    manager: PassLifecycleManager = Depends(get_manager),
):
    """Submit a pass request; the purpose is checked by the AI service first."""
    if manager.is_busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another pass request is still being processed",
        )
    try:
        gate_pass, view = await manager.request_pass(request)
    except InvalidPassRequestError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ExternalServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Pass request could not be verified; please try again",
        )

    return PassCreatedResponse(gate_pass=gate_pass, view=view)


@router.get("/passes", response_model=List[GatePass])
def list_passes(
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    try:
        return manager.project(ActiveView.ALL_PASSES, user)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.get("/passes/mine", response_model=List[GatePass])
def my_passes(
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    try:
        return manager.project(ActiveView.MY_PASSES, user)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.get("/passes/{pass_id}", response_model=GatePass)
def get_pass(
    pass_id: str,
    user: Optional[User] = Depends(get_optional_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    try:
        gate_pass = manager.require_pass(pass_id)
    except PassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    # visitors (and guests) only see their own passes
    if user is None or (user.role == UserRole.VISITOR and gate_pass.visitor_id != user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view this pass")
    return gate_pass


@router.post("/passes/{pass_id}/status", response_model=GatePass)
def update_status(
    pass_id: str,
    request: StatusUpdateRequest,
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    try:
        updated = manager.update_status(user, pass_id, request.status)
        if updated is None:
            raise PassNotFoundError(f"Pass {pass_id} not found")
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return updated
