"""Event listing routes."""

import structlog
from fastapi import APIRouter
from sqlalchemy import delete, select

from club_api.db.base import get_session_factory
from club_api.db.models.event import Event
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.schemas.events import EventCreate, EventResponse, EventUpdate

logger = structlog.get_logger(__name__)

router = APIRouter()

DUPLICATE_NAME = "Event Name already exists"
NOT_FOUND = "No such event exists"


async def _name_taken(session, name: str) -> bool:
    result = await session.execute(select(Event.id).where(Event.name == name).limit(1))
    return result.scalar_one_or_none() is not None


@router.post("", response_model=ApiResponse[EventResponse])
async def create_event(body: EventCreate):
    """Create an event; names must be unique."""
    factory = get_session_factory()
    async with factory() as session:
        if await _name_taken(session, body.name):
            return fail(DUPLICATE_NAME)

        event = Event(**body.model_dump())
        session.add(event)
        await session.commit()
        await session.refresh(event)

    logger.info("event_created", event_id=event.id)
    return ok("Event created successfully", EventResponse.model_validate(event))


@router.get("", response_model=ApiResponse[list[EventResponse]])
async def list_events():
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(select(Event).order_by(Event.start_date))
        events = result.scalars().all()

    if not events:
        return fail("No events found")
    return ok("Events found", [EventResponse.model_validate(e) for e in events])


@router.put("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(event_id: str, body: EventUpdate):
    """Partial update; the name is re-checked only when it changes."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    factory = get_session_factory()
    async with factory() as session:
        event = await session.get(Event, event_id)
        if event is None:
            return fail(NOT_FOUND)

        new_name = changes.get("name")
        if new_name is not None and new_name != event.name and await _name_taken(session, new_name):
            return fail(DUPLICATE_NAME)

        for field, value in changes.items():
            setattr(event, field, value)

        if event.end_date < event.start_date:
            return fail("End date must not be before start date")

        await session.commit()
        await session.refresh(event)

    return ok("Event updated successfully", EventResponse.model_validate(event))


@router.delete("/{event_id}", response_model=ApiResponse[None])
async def delete_event(event_id: str):
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(delete(Event).where(Event.id == event_id))
        await session.commit()

    if result.rowcount == 0:
        return fail(NOT_FOUND)

    logger.info("event_deleted", event_id=event_id)
    return ok("Event deleted successfully")
