# =======================================================================================
# securepass/api/routes/dashboard.py - Dashboard, Reports & Views
# =======================================================================================
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.enums import ActiveView
from ...models.schemas import DashboardSummary, GatePass, User, ViewResponse, VisitorReportRow
from ...services.pass_service import PassLifecycleManager
from ...utils.exceptions import UnauthorizedError
from ..dependencies import get_current_user, get_manager

router = APIRouter()


def _project(manager: PassLifecycleManager, view: ActiveView, user: User):
    try:
        return manager.project(view, user)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    return _project(manager, ActiveView.DASHBOARD, user)


@router.get("/history", response_model=List[GatePass])
def get_history(
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    return _project(manager, ActiveView.HISTORY, user)


@router.get("/visitors", response_model=List[VisitorReportRow])
def get_visitors(
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    return _project(manager, ActiveView.VISITORS, user)


@router.get("/views/{view}", response_model=ViewResponse)
def get_view(
    view: ActiveView,
    user: User = Depends(get_current_user),
    manager: PassLifecycleManager = Depends(get_manager),
):
    return ViewResponse(view=view, data=_project(manager, view, user))
