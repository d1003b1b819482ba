"""Calendar API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.database import get_db
from clinic.modules.calendar.schemas import (
    AppointmentDetails,
    CalendarIntent,
    CalendarModeUpdate,
    CalendarSessionCreate,
    CalendarSessionPublic,
    CalendarSnapshot,
    DayGrid,
    IntegrityReport,
    InteractionRequest,
    Legend,
    WeekGrid,
)
from clinic.modules.calendar.service import CalendarSessionService, GridService
from clinic.modules.calendar.styles import build_legend

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


def get_grid_service() -> GridService:
    return GridService()


def get_session_service(db: AsyncSession = Depends(get_db)) -> CalendarSessionService:
    return CalendarSessionService(db)


@router.get("/time-slots", response_model=list[str])
async def time_slots(service: GridService = Depends(get_grid_service)) -> list[str]:
    return service.time_slots()


@router.get("/legend", response_model=Legend)
async def legend() -> Legend:
    return build_legend()


@router.post("/week", response_model=WeekGrid)
async def week_grid(
    snapshot: CalendarSnapshot | None = None,
    date_value: date | None = Query(None, alias="date"),
    service: GridService = Depends(get_grid_service),
) -> WeekGrid:
    return service.week(date_value, snapshot or CalendarSnapshot())


@router.post("/day", response_model=DayGrid)
async def day_grid(
    snapshot: CalendarSnapshot | None = None,
    date_value: date | None = Query(None, alias="date"),
    service: GridService = Depends(get_grid_service),
) -> DayGrid:
    return service.day(date_value, snapshot or CalendarSnapshot())


@router.post("/interactions", response_model=CalendarIntent)
async def interactions(
    payload: InteractionRequest,
    service: GridService = Depends(get_grid_service),
) -> CalendarIntent:
    return service.interact(payload)


@router.post("/integrity", response_model=IntegrityReport)
async def integrity(
    snapshot: CalendarSnapshot,
    service: GridService = Depends(get_grid_service),
) -> IntegrityReport:
    return service.integrity(snapshot)


@router.post("/appointments/{appointment_id}/details", response_model=AppointmentDetails)
async def appointment_details(
    appointment_id: str,
    snapshot: CalendarSnapshot,
    service: GridService = Depends(get_grid_service),
) -> AppointmentDetails:
    return service.details(appointment_id, snapshot)


@router.post("/sessions", response_model=CalendarSessionPublic, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: CalendarSessionCreate | None = None,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.create(payload or CalendarSessionCreate()))


@router.get("/sessions/{session_id}", response_model=CalendarSessionPublic)
async def get_session(
    session_id: str,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.get(session_id))


@router.post("/sessions/{session_id}/next", response_model=CalendarSessionPublic)
async def next_period(
    session_id: str,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.navigate(session_id, "next"))


@router.post("/sessions/{session_id}/previous", response_model=CalendarSessionPublic)
async def previous_period(
    session_id: str,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.navigate(session_id, "previous"))


@router.post("/sessions/{session_id}/today", response_model=CalendarSessionPublic)
async def go_to_today(
    session_id: str,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.go_to_today(session_id))


@router.put("/sessions/{session_id}/mode", response_model=CalendarSessionPublic)
async def set_mode(
    session_id: str,
    payload: CalendarModeUpdate,
    service: CalendarSessionService = Depends(get_session_service),
) -> CalendarSessionPublic:
    return service.to_public(await service.set_mode(session_id, payload.mode))


@router.post("/sessions/{session_id}/grid", response_model=WeekGrid | DayGrid)
async def session_grid(
    session_id: str,
    snapshot: CalendarSnapshot | None = None,
    service: CalendarSessionService = Depends(get_session_service),
) -> WeekGrid | DayGrid:
    return await service.render(session_id, snapshot or CalendarSnapshot())
