"""Stat model: one sync report of a user's counters for one calendar day."""
from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from miremover_api.db.session import Base


class Stat(Base):
    __tablename__ = "stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # client-generated idempotency key
    stat_id = Column(String(64), unique=True, nullable=False, index=True)
    # looked up against users.user_id, intentionally no FK
    user_id = Column(String(64), nullable=False, index=True)
    date = Column(String(32), nullable=False, index=True)  # YYYY-MM-DD by convention

    images_processed = Column(Integer, nullable=False, default=0)
    resize_operations = Column(Integer, nullable=False, default=0)
    bg_removal_operations = Column(Integer, nullable=False, default=0)
    face_crop_operations = Column(Integer, nullable=False, default=0)
    process_time = Column(Float, nullable=False, default=0.0)  # seconds

    sync_timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    COUNTER_FIELDS = (
        "images_processed",
        "resize_operations",
        "bg_removal_operations",
        "face_crop_operations",
        "process_time",
    )
