# =======================================================================================
# securepass/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum


class UserRole(str, Enum):
    """Roles a registered user can hold."""
    ADMIN = "ADMIN"
    SECURITY = "SECURITY"
    VISITOR = "VISITOR"


class PassStatus(str, Enum):
    """Gate pass lifecycle states."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class PassType(str, Enum):
    VISITOR = "VISITOR"
    MATERIAL = "MATERIAL"
    VEHICLE = "VEHICLE"


class ActiveView(str, Enum):
    """Named views the front-end can switch between."""
    DASHBOARD = "dashboard"
    REQUEST = "request"
    MY_PASSES = "my-passes"
    ALL_PASSES = "all-passes"
    SECURITY = "security"
    HISTORY = "history"
    VISITORS = "visitors"


TERMINAL_STATUSES = (PassStatus.REJECTED, PassStatus.CHECKED_OUT)
GATE_ACTIONABLE_STATUSES = (PassStatus.PENDING, PassStatus.APPROVED, PassStatus.CHECKED_IN)
