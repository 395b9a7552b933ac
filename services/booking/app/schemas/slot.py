from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field as PydanticField

from .common import CamelModel, UTCDateTime


class SlotResponse(CamelModel):
    id: int
    day: str
    start_time: str
    end_time: str
    is_active: bool
    is_unavailable: bool = False


class SlotListResponse(CamelModel):
    slots: List[SlotResponse]


class UnavailableSlotRequest(CamelModel):
    date: date
    slot_ids: List[int] = PydanticField(default_factory=list)
    time_zone: Optional[str] = None


class UnavailableSlotResponse(CamelModel):
    id: int
    slot_id: int
    date: date
    start_time: UTCDateTime
    end_time: UTCDateTime


class UnavailableSlotPage(CamelModel):
    slots: List[UnavailableSlotResponse]
    count: int
    page: int
    limit: int
    total_pages: int


class SlotActiveUpdate(CamelModel):
    id: int
    is_active: bool


class SlotsUpdateRequest(CamelModel):
    slots: List[SlotActiveUpdate] = PydanticField(..., min_length=1)
