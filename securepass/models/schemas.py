# =======================================================================================
# securepass/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import ActiveView, PassStatus, PassType, UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys (the stored JSON layout)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========== Core records ==========

class User(CamelModel):
    """Registered user. Never mutated after registration."""
    id: str = Field(..., description="Opaque stable identifier")
    name: str
    email: str = Field(..., description="Login key, matched case-insensitively")
    role: UserRole
    avatar: Optional[str] = None


class GatePass(CamelModel):
    """A single gate pass and its lifecycle timestamps."""
    id: str
    visitor_id: str
    visitor_name: str
    visitor_email: str
    purpose: str
    department: str
    type: PassType
    status: PassStatus
    requested_at: datetime
    valid_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    photo_url: Optional[str] = None
    ai_verification: Optional[str] = None


class PlausibilityResult(CamelModel):
    """Output of the AI plausibility check; only `reasoning` is kept on the pass."""
    reasoning: str
    is_valid: Optional[bool] = None


# ========== Requests ==========

class PassRequest(CamelModel):
    """Pass request payload. Guest fields are only used without a session."""
    purpose: str = Field(..., min_length=1, max_length=500, description="Stated reason for the visit")
    type: PassType = Field(PassType.VISITOR, description="Kind of pass")
    department: Optional[str] = Field(None, max_length=120, description="Host department")
    valid_date: date = Field(..., description="Day the pass is valid for")
    visitor_name: Optional[str] = Field(None, max_length=120)
    visitor_email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    photo_url: Optional[str] = None

    @field_validator("purpose")
    @classmethod
    def purpose_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("purpose must not be blank")
        return v


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    role: UserRole = UserRole.VISITOR
    avatar: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)


class StatusUpdateRequest(CamelModel):
    status: PassStatus


# ========== Responses ==========

class SessionResponse(CamelModel):
    user: Optional[User] = None
    view: Optional[ActiveView] = None


class PassCreatedResponse(CamelModel):
    gate_pass: GatePass
    view: ActiveView


class MessageResponse(BaseModel):
    success: bool
    message: str


class DashboardSummary(CamelModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    checked_in: int = 0
    checked_out: int = 0


class VisitorReportRow(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    pass_count: int


class RequestFormInfo(CamelModel):
    pass_types: List[PassType]
    default_department: str
    busy: bool


class ViewResponse(CamelModel):
    view: ActiveView
    data: Any


# ========== Health ==========

class HealthResponse(BaseModel):
    status: str                 # "ok" | "error"
    dataAvailable: bool
    message: Optional[str] = None
