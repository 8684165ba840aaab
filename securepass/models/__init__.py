# =======================================================================================
# securepass/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *

__all__ = [
    "User", "GatePass", "PlausibilityResult", "PassRequest", "RegisterRequest",
    "LoginRequest", "StatusUpdateRequest", "SessionResponse", "PassCreatedResponse",
    "MessageResponse", "DashboardSummary", "VisitorReportRow", "RequestFormInfo",
    "ViewResponse", "HealthResponse", "UserRole", "PassStatus", "PassType", "ActiveView",
    "TERMINAL_STATUSES", "GATE_ACTIONABLE_STATUSES",
]
