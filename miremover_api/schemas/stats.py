"""Pydantic schemas for stats sync, per-user summaries and the admin report."""
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class StatReportSchema(BaseModel):
    """One day of counters as accumulated by a client device."""

    stat_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    date: str
    images_processed: int = 0
    resize_operations: int = 0
    bg_removal_operations: int = 0
    face_crop_operations: int = 0
    process_time: float = 0.0

    class Config:
        # clients may send numeric ids
        coerce_numbers_to_str = True

    def counters(self) -> dict[str, int | float]:
        return {
            "images_processed": self.images_processed,
            "resize_operations": self.resize_operations,
            "bg_removal_operations": self.bg_removal_operations,
            "face_crop_operations": self.face_crop_operations,
            "process_time": self.process_time,
        }


class StatsUpdateSchema(BaseModel):
    # items are validated one by one so a bad item can't reject the batch
    stats: Any = None


class StatOutcomeSchema(BaseModel):
    stat_id: str | None = None
    status: Literal["created", "updated", "error"]
    message: str | None = None


class StatsUpdateResultSchema(BaseModel):
    results: list[StatOutcomeSchema]


class StatOutSchema(BaseModel):
    stat_id: str
    user_id: str
    date: str
    images_processed: int
    resize_operations: int
    bg_removal_operations: int
    face_crop_operations: int
    process_time: float
    sync_timestamp: datetime | None = None

    class Config:
        from_attributes = True


class StatsSummarySchema(BaseModel):
    images_processed: int = 0
    resize_operations: int = 0
    bg_removal_operations: int = 0
    face_crop_operations: int = 0
    process_time: float = 0.0


class UserStatsSchema(BaseModel):
    summary: StatsSummarySchema
    details: list[StatOutSchema]


class GlobalStatsSchema(BaseModel):
    total_images: int = 0
    total_resize: int = 0
    total_bg_removal: int = 0
    total_face_crop: int = 0
    total_time: float = 0.0


class TopUserSchema(BaseModel):
    user_id: str
    total_images: int
    total_time: float
    username: str
    email: str
    full_name: str


class GlobalReportSchema(BaseModel):
    user_count: int
    global_stats: GlobalStatsSchema
    top_users: list[TopUserSchema]
