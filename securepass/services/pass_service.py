# =======================================================================================
# securepass/services/pass_service.py - Pass Lifecycle Manager
# =======================================================================================
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from loguru import logger
from pydantic import TypeAdapter

from ..config import config
from ..database import KeyValueStore
from ..models.enums import ActiveView, PassStatus, PassType, UserRole
from ..models.schemas import GatePass, PassRequest, RequestFormInfo, User, VisitorReportRow
from ..utils.exceptions import (
    EmailAlreadyRegisteredError,
    ExternalServiceError,
    InvalidPassRequestError,
    LoginNotFoundError,
    PassNotFoundError,
)
from ..utils.validators import PassTransitionValidator, ViewAccessValidator
from .plausibility_service import PlausibilityService
from .report_service import ReportService

# Storage keys
USERS_KEY = "registeredUsers"
PASSES_KEY = "gatepasses"
SESSION_KEY = "currentUser"

GUEST_VISITOR_ID = "guest"

DEFAULT_ADMIN = User(
    id="admin-001",
    name="System Administrator",
    email="admin@securepass.com",
    role=UserRole.ADMIN,
)

_users_adapter = TypeAdapter(List[User])
_passes_adapter = TypeAdapter(List[GatePass])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_user_id() -> str:
    return f"user-{uuid.uuid4().hex}"


class PassLifecycleManager:
    """
    Owns users, gate passes and the current session.

    Every mutation is written straight through to the key-value store; the
    store is only read back at construction time.
    """

    def __init__(
        self,
        store: KeyValueStore,
        checker: PlausibilityService,
        clock: Optional[Callable[[], datetime]] = None,
        default_department: Optional[str] = None,
    ):
        self.store = store
        self.checker = checker
        self.clock = clock or _utcnow
        self.default_department = default_department or config.DEFAULT_DEPARTMENT
        self.reports = ReportService()

        self.users: List[User] = []
        self.passes: List[GatePass] = []  # newest first
        self.current_session: Optional[User] = None
        self._busy = False

        self.load()

    # ----------------------------------------------------------------------
    # Persistence
    # ----------------------------------------------------------------------
    def load(self) -> None:
        """Read users, passes and session from the store."""
        raw_users = self.store.get(USERS_KEY)
        users = _users_adapter.validate_json(raw_users) if raw_users else []
        admin_email = DEFAULT_ADMIN.email.lower()
        if not any(u.email.lower() == admin_email for u in users):
            users = [DEFAULT_ADMIN, *users]
        self.users = users

        raw_passes = self.store.get(PASSES_KEY)
        self.passes = _passes_adapter.validate_json(raw_passes) if raw_passes else []

        raw_session = self.store.get(SESSION_KEY)
        self.current_session = User.model_validate_json(raw_session) if raw_session else None

        self._persist_users()
        logger.info(
            f"Loaded {len(self.users)} user(s), {len(self.passes)} pass(es); "
            f"session={'yes' if self.current_session else 'no'}"
        )

    def _persist_users(self) -> None:
        self.store.set(USERS_KEY, _users_adapter.dump_json(self.users, by_alias=True).decode())

    def _persist_passes(self) -> None:
        self.store.set(PASSES_KEY, _passes_adapter.dump_json(self.passes, by_alias=True).decode())

    # ----------------------------------------------------------------------
    # Users & session
    # ----------------------------------------------------------------------
    def find_user(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        return next((u for u in self.users if u.email.lower() == wanted), None)

    def register(self, user: User) -> User:
        """Add a user and sign them in."""
        if self.find_user(user.email) is not None:
            raise EmailAlreadyRegisteredError(f"Email {user.email} is already registered")

        self.users.append(user)
        self._persist_users()
        logger.info(f"Registered {user.role.value} user {user.id}")
        return self.login(user.email)

    def login(self, email: str) -> User:
        user = self.find_user(email)
        if user is None:
            raise LoginNotFoundError(f"No registered user with email {email}")

        self.current_session = user
        self.store.set(SESSION_KEY, user.model_dump_json(by_alias=True))
        logger.info(f"Session started for {user.id}")
        return user

    def logout(self) -> None:
        if self.current_session is not None:
            logger.info(f"Session ended for {self.current_session.id}")
        self.current_session = None
        self.store.delete(SESSION_KEY)

    @staticmethod
    def landing_view(user: User) -> ActiveView:
        return ViewAccessValidator.landing_view(user)

    # ----------------------------------------------------------------------
    # Passes
    # ----------------------------------------------------------------------
    @property
    def is_busy(self) -> bool:
        """True while a pass request is waiting on the plausibility check."""
        return self._busy

    def _new_pass_id(self) -> str:
        existing = {p.id for p in self.passes}
        while True:
            candidate = f"GP-{uuid.uuid4().hex[:12].upper()}"
            if candidate not in existing:
                return candidate

    async def request_pass(self, request: PassRequest) -> Tuple[GatePass, ActiveView]:
        """
        Create a PENDING pass after the plausibility check succeeds.

        Returns the new pass and the view the caller should switch to. If the
        check fails nothing is created and ExternalServiceError propagates.
        """
        session = self.current_session
        if session is None and not (request.visitor_name and request.visitor_email):
            raise InvalidPassRequestError("Guest requests need visitorName and visitorEmail")

        pass_id = self._new_pass_id()

        self._busy = True
        try:
            verdict = await self.checker.check(request.purpose, request.type)
        except ExternalServiceError as e:
            logger.error(f"Pass request {pass_id} abandoned: {e}")
            raise
        except Exception as e:
            logger.exception(f"Pass request {pass_id} abandoned")
            raise ExternalServiceError(str(e)) from e
        finally:
            self._busy = False

        new_pass = GatePass(
            id=pass_id,
            visitor_id=session.id if session else GUEST_VISITOR_ID,
            visitor_name=session.name if session else request.visitor_name,
            visitor_email=session.email if session else request.visitor_email,
            purpose=request.purpose,
            department=request.department or self.default_department,
            type=request.type,
            status=PassStatus.PENDING,
            requested_at=self.clock(),
            valid_date=request.valid_date,
            photo_url=request.photo_url,
            ai_verification=verdict.reasoning,
        )

        self.passes.insert(0, new_pass)
        self._persist_passes()
        logger.info(f"Pass {new_pass.id} requested ({new_pass.type.value}) for {new_pass.visitor_email}")

        if session is not None and session.role == UserRole.VISITOR:
            return new_pass, ActiveView.MY_PASSES
        return new_pass, ActiveView.ALL_PASSES

    def update_status(
        self, actor: Optional[User], pass_id: str, new_status: PassStatus
    ) -> Optional[GatePass]:
        """
        Move a pass to `new_status`, stamping check-in/out times.

        Unknown ids are ignored and return None.
        """
        PassTransitionValidator.authorize_transition(actor, new_status)

        index = next((i for i, p in enumerate(self.passes) if p.id == pass_id), None)
        if index is None:
            logger.debug(f"Status update for unknown pass {pass_id} ignored")
            return None

        current = self.passes[index]
        PassTransitionValidator.validate_transition(current.status, new_status)

        updates: dict = {"status": new_status}
        if new_status == PassStatus.CHECKED_IN:
            updates["check_in_time"] = self.clock()
        elif new_status == PassStatus.CHECKED_OUT:
            updates["check_out_time"] = self.clock()

        updated = current.model_copy(update=updates)
        self.passes[index] = updated
        self._persist_passes()
        logger.info(f"Pass {pass_id}: {current.status.value} -> {new_status.value} by {actor.id}")
        return updated

    # ----------------------------------------------------------------------
    # Derived views
    # ----------------------------------------------------------------------
    def get_pass(self, pass_id: str) -> Optional[GatePass]:
        return next((p for p in self.passes if p.id == pass_id), None)

    def require_pass(self, pass_id: str) -> GatePass:
        gate_pass = self.get_pass(pass_id)
        if gate_pass is None:
            raise PassNotFoundError(f"Pass {pass_id} not found")
        return gate_pass

    def my_passes(self, user: User) -> List[GatePass]:
        return [p for p in self.passes if p.visitor_id == user.id]

    def all_passes(self) -> List[GatePass]:
        return list(self.passes)

    def visitor_report(self) -> List[VisitorReportRow]:
        return self.reports.visitor_report(self.users, self.passes)

    def project(self, view: ActiveView, actor: Optional[User]) -> Any:
        """Read-only data behind a named view, gated by the actor's role."""
        ViewAccessValidator.ensure_view_allowed(actor, view)

        if view == ActiveView.DASHBOARD:
            return self.reports.dashboard_summary(self.passes, actor)
        if view == ActiveView.REQUEST:
            return RequestFormInfo(
                pass_types=list(PassType),
                default_department=self.default_department,
                busy=self.is_busy,
            )
        if view == ActiveView.MY_PASSES:
            return self.my_passes(actor)
        if view == ActiveView.ALL_PASSES:
            return self.all_passes()
        if view == ActiveView.SECURITY:
            return self.reports.security_queue(self.passes)
        if view == ActiveView.HISTORY:
            return self.reports.history(self.passes)
        return self.visitor_report()
