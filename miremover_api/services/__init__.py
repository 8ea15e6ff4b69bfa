from miremover_api.services.identity import RegistrationResult, register_or_update, record_login
from miremover_api.services.reconciliation import reconcile
from miremover_api.services.reporting import Period, global_report, summarize

__all__ = [
    "Period",
    "RegistrationResult",
    "global_report",
    "reconcile",
    "record_login",
    "register_or_update",
    "summarize",
]
