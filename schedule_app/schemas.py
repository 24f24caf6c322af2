from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schedule_app.ingestion.schema import UnifiedGameRecord


class HealthOut(BaseModel):
    status: str
    timestamp: datetime


class ScheduleResponse(BaseModel):
    success: bool
    count: int
    data: list[UnifiedGameRecord]


class ScheduleErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


class PublishedSchedule(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    count: int
    last_updated: datetime
    data: list[UnifiedGameRecord]


class PublishResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    message: Optional[str] = None
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
