"""Scheduling schemas."""

from __future__ import annotations

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ScheduleSlotRead(BaseModel):
    """Schedule slot response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    worker_id: UUID
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    is_available: bool
    booking_id: UUID | None
    created_at: dt.datetime
    updated_at: dt.datetime
