"""Calendar session ORM model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from clinic.core.database import Base
from clinic.modules.calendar.navigator import PeriodNavigator
from clinic.shared.enums import ViewMode, enum_values
from clinic.shared.models import TimestampMixin
from clinic.shared.ulid import generate_ulid


class CalendarSession(Base, TimestampMixin):
    """Retained navigator state for one calendar screen."""

    __tablename__ = "calendar_sessions"

    session_id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    reference_date: Mapped[date] = mapped_column(Date, nullable=False)
    view_mode: Mapped[ViewMode] = mapped_column(
        Enum(
            ViewMode,
            values_callable=enum_values,
            validate_strings=True,
            name="viewmode",
        ),
        nullable=False,
        default=ViewMode.WEEK,
    )

    def to_navigator(self) -> PeriodNavigator:
        return PeriodNavigator(self.reference_date, ViewMode(self.view_mode))

    def apply(self, navigator: PeriodNavigator) -> None:
        self.reference_date = navigator.reference_date
        self.view_mode = navigator.mode
