from __future__ import annotations

from typing import List, Optional

from pydantic import Field as PydanticField, field_validator

from app.core.enums import WEEKDAYS

from .common import CamelModel, UTCDateTime

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class OperationalHourEntry(CamelModel):
    day: str
    is_closed: bool = False
    start_time: Optional[str] = PydanticField(None, pattern=HHMM_PATTERN)
    end_time: Optional[str] = PydanticField(None, pattern=HHMM_PATTERN)

    @field_validator("day")
    @classmethod
    def _validate_day(cls, value: str) -> str:
        normalized = value.strip().capitalize()
        if normalized not in WEEKDAYS:
            raise ValueError(f"day must be one of {', '.join(WEEKDAYS)}")
        return normalized

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class OperationalHoursRequest(CamelModel):
    operational_hours: List[OperationalHourEntry]


class OperationalHourResponse(CamelModel):
    id: int
    day: str
    is_closed: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class OperationalHoursResponse(CamelModel):
    message: str
    operational_hours: List[OperationalHourResponse]


class SlotDurationRequest(CamelModel):
    slot_duration_minutes: int = PydanticField(..., ge=5, le=240)


class SlotDurationResponse(CamelModel):
    slot_duration_minutes: int


class SlotGenerationStatusResponse(CamelModel):
    status: str
    error: Optional[str] = None
    generated_at: Optional[UTCDateTime] = None
    slot_count: int = 0
