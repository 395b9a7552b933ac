from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.config import settings
from app.core.database import Base, IdType
from app.core.enums import SlotGenerationStatus

if TYPE_CHECKING:  # pragma: no cover
    from app.models.operational_hour import OperationalHour
    from app.models.slot import Slot
    from app.models.user import User


class Venue(Base):
    """A restaurant, leisure or wellness business that can be booked."""

    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False, unique=True, index=True
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(9, 6), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(9, 6), nullable=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    criteria_ratings: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    slot_duration_minutes: Mapped[int] = mapped_column(
        Integer, nullable=False, default=lambda: settings.DEFAULT_SLOT_DURATION_MINUTES
    )
    slot_generation_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SlotGenerationStatus.IDLE.value
    )
    slot_generation_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    slots_generated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    owner: Mapped["User"] = relationship("User", lazy="joined")
    operational_hours: Mapped[list["OperationalHour"]] = relationship(
        "OperationalHour", back_populates="venue", cascade="all, delete-orphan"
    )
    slots: Mapped[list["Slot"]] = relationship(
        "Slot", back_populates="venue", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Venue(id={self.id}, name={self.name}, type={self.type})>"


__all__ = ["Venue"]
