# =======================================================================================
# securepass/services/report_service.py - Dashboard & Reporting Projections
# =======================================================================================
from collections import Counter
from typing import List, Optional, Sequence

from ..models.enums import GATE_ACTIONABLE_STATUSES, TERMINAL_STATUSES, PassStatus, UserRole
from ..models.schemas import DashboardSummary, GatePass, User, VisitorReportRow


class ReportService:
    """Read-only aggregations over the pass and user collections."""

    # ---------- summary ----------

    def dashboard_summary(
        self, passes: Sequence[GatePass], user: Optional[User] = None
    ) -> DashboardSummary:
        """Counts per status. Visitors only see their own passes counted."""
        if user is not None and user.role == UserRole.VISITOR:
            passes = [p for p in passes if p.visitor_id == user.id]

        counts = Counter(p.status for p in passes)
        return DashboardSummary(
            total=len(passes),
            pending=counts[PassStatus.PENDING],
            approved=counts[PassStatus.APPROVED],
            rejected=counts[PassStatus.REJECTED],
            checked_in=counts[PassStatus.CHECKED_IN],
            checked_out=counts[PassStatus.CHECKED_OUT],
        )

    # ---------- lists ----------

    def history(self, passes: Sequence[GatePass]) -> List[GatePass]:
        return [p for p in passes if p.status in TERMINAL_STATUSES]

    def security_queue(self, passes: Sequence[GatePass]) -> List[GatePass]:
        """Passes that still need action at the gate."""
        return [p for p in passes if p.status in GATE_ACTIONABLE_STATUSES]

    def visitor_report(
        self, users: Sequence[User], passes: Sequence[GatePass]
    ) -> List[VisitorReportRow]:
        # exact email match, same as the pass -> user link
        per_email = Counter(p.visitor_email for p in passes)
        return [
            VisitorReportRow(
                id=u.id,
                name=u.name,
                email=u.email,
                role=u.role,
                pass_count=per_email[u.email],
            )
            for u in users
            if u.role == UserRole.VISITOR
        ]
