# =======================================================================================
# securepass/services/__init__.py - Services Package
# =======================================================================================
from .pass_service import PassLifecycleManager
from .plausibility_service import PlausibilityService
from .report_service import ReportService

__all__ = ["PassLifecycleManager", "PlausibilityService", "ReportService"]
