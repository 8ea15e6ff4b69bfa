from miremover_api.schemas.user import (
    LoginSchema,
    MessageSchema,
    RegisterSchema,
    UserOutSchema,
    UserListSchema,
)
from miremover_api.schemas.stats import (
    GlobalReportSchema,
    GlobalStatsSchema,
    StatOutcomeSchema,
    StatOutSchema,
    StatReportSchema,
    StatsSummarySchema,
    StatsUpdateSchema,
    StatsUpdateResultSchema,
    TopUserSchema,
    UserStatsSchema,
)

__all__ = [
    "GlobalReportSchema",
    "GlobalStatsSchema",
    "LoginSchema",
    "MessageSchema",
    "RegisterSchema",
    "StatOutcomeSchema",
    "StatOutSchema",
    "StatReportSchema",
    "StatsSummarySchema",
    "StatsUpdateSchema",
    "StatsUpdateResultSchema",
    "TopUserSchema",
    "UserListSchema",
    "UserOutSchema",
    "UserStatsSchema",
]
