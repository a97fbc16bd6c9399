from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class TaskBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator("description", "due_date", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return value or None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(TaskBase):
    """Full replacement: fields left out are stored as null."""


class TaskOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    description: Optional[str] = None
    status: str
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> datetime:
        # Stored as naive UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ErrorOut(BaseModel):
    error: str
