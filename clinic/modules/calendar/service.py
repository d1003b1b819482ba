"""Calendar service layer."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Literal
from zoneinfo import ZoneInfo

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.modules.calendar.details import build_appointment_details
from clinic.modules.calendar.dispatcher import InteractionDispatcher
from clinic.modules.calendar.grid import build_day_grid, build_week_grid, render_period
from clinic.modules.calendar.models import CalendarSession
from clinic.modules.calendar.navigator import PeriodNavigator
from clinic.modules.calendar.resolver import SlotIndex, unplaced_appointments
from clinic.modules.calendar.schemas import (
    AppointmentDetails,
    CalendarIntent,
    CalendarSessionCreate,
    CalendarSessionPublic,
    CalendarSnapshot,
    DayGrid,
    IntegrityReport,
    InteractionRequest,
    WeekGrid,
)
from clinic.modules.calendar.slots import GridConfig
from clinic.shared.enums import ViewMode
from clinic.shared.ulid import is_ulid

logger = logging.getLogger(__name__)

Direction = Literal["next", "previous"]


class GridService:
    """Stateless rendering over a posted snapshot."""

    def __init__(self, config: GridConfig | None = None):
        self.config = config or GridConfig.from_settings()
        self.tz = ZoneInfo(settings.default_timezone)

    def _now(self) -> datetime:
        return datetime.now(tz=self.tz)

    def _today(self) -> date:
        return self._now().date()

    def time_slots(self) -> list[str]:
        return list(self.config.time_slots)

    def week(self, reference_date: date | None, snapshot: CalendarSnapshot) -> WeekGrid:
        return build_week_grid(reference_date or self._today(), snapshot.appointments, self._now(), self.config)

    def day(self, reference_date: date | None, snapshot: CalendarSnapshot) -> DayGrid:
        return build_day_grid(
            reference_date or self._today(),
            snapshot.doctors,
            snapshot.appointments,
            snapshot.patients,
            self._now(),
            self.config,
        )

    def interact(self, request: InteractionRequest) -> CalendarIntent:
        gesture = request.gesture
        reachable = []
        if gesture.target == "appointment" and gesture.doctor_id is not None:
            # Week cells only show counts; day cells show the first max_visible entries.
            in_slot = SlotIndex(request.snapshot.appointments).lookup(gesture.date, gesture.time, gesture.doctor_id)
            reachable = in_slot[: self.config.max_visible]
        intent = InteractionDispatcher().dispatch(gesture, reachable)
        logger.debug("Gesture %s at %s %s -> %s", gesture.target, gesture.date, gesture.time, intent.kind)
        return intent

    def integrity(self, snapshot: CalendarSnapshot) -> IntegrityReport:
        unplaced = unplaced_appointments(snapshot.appointments, self.config.time_slots)
        if unplaced:
            logger.warning(
                "%d of %d appointments cannot be placed on the calendar grid",
                len(unplaced),
                len(snapshot.appointments),
            )
        return IntegrityReport(checked=len(snapshot.appointments), unplaced=unplaced)

    def details(self, appointment_id: str, snapshot: CalendarSnapshot) -> AppointmentDetails:
        appointment = next((appt for appt in snapshot.appointments if appt.id == appointment_id), None)
        if appointment is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
        return build_appointment_details(appointment, snapshot.patients, snapshot.doctors)


class CalendarSessionService(GridService):
    """Navigator state kept in the session store between requests."""

    def __init__(self, db: AsyncSession, config: GridConfig | None = None):
        super().__init__(config)
        self.db = db

    async def create(self, payload: CalendarSessionCreate) -> CalendarSession:
        session = CalendarSession(
            reference_date=payload.reference_date or self._today(),
            view_mode=payload.mode,
        )
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        logger.info("Opened calendar session %s at %s (%s)", session.session_id, session.reference_date, session.view_mode)
        return session

    async def get(self, session_id: str) -> CalendarSession:
        if not is_ulid(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Calendar session not found")
        result = await self.db.execute(select(CalendarSession).where(CalendarSession.session_id == session_id))
        session = result.scalar_one_or_none()
        if session is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Calendar session not found")
        return session

    async def navigate(self, session_id: str, direction: Direction) -> CalendarSession:
        session = await self.get(session_id)
        navigator = session.to_navigator()
        if direction == "next":
            navigator.next()
        else:
            navigator.previous()
        return await self._save(session, navigator, direction)

    async def go_to_today(self, session_id: str) -> CalendarSession:
        session = await self.get(session_id)
        navigator = session.to_navigator()
        navigator.go_to_today(self._today())
        return await self._save(session, navigator, "today")

    async def set_mode(self, session_id: str, mode: ViewMode) -> CalendarSession:
        session = await self.get(session_id)
        navigator = session.to_navigator()
        navigator.set_mode(mode)
        return await self._save(session, navigator, f"mode={mode}")

    async def render(self, session_id: str, snapshot: CalendarSnapshot) -> WeekGrid | DayGrid:
        session = await self.get(session_id)
        return render_period(session.to_navigator(), snapshot, self._now(), self.config)

    async def _save(self, session: CalendarSession, navigator: PeriodNavigator, action: str) -> CalendarSession:
        session.apply(navigator)
        await self.db.commit()
        await self.db.refresh(session)
        logger.info("Calendar session %s %s -> %s", session.session_id, action, session.reference_date)
        return session

    @staticmethod
    def to_public(session: CalendarSession) -> CalendarSessionPublic:
        navigator = session.to_navigator()
        return CalendarSessionPublic(
            session_id=session.session_id,
            reference_date=navigator.reference_date,
            mode=navigator.mode,
            title=navigator.title(),
            visible_days=navigator.visible_days(),
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
