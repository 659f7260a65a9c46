from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventgo.core.database import get_db
from eventgo.schemas.event_schema import EventCreate, EventOut
from eventgo.services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=List[EventOut])
async def list_events(db: AsyncSession = Depends(get_db)):
    return await EventService(db).list_events()


@router.get("/by-tag/{tag_id}", response_model=List[EventOut])
async def list_events_by_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    """Events labelled with a tag; an unknown tag gives an empty list, not a 404."""
    return await EventService(db).list_events(tag_id=tag_id)


@router.get("/{event_id}", response_model=EventOut)
async def get_event(event_id: int, db: AsyncSession = Depends(get_db)):
    return await EventService(db).get_event(event_id)


@router.post("", response_model=EventOut, status_code=201)
async def create_event(payload: EventCreate, db: AsyncSession = Depends(get_db)):
    return await EventService(db).create_event(
        payload.event_fields(),
        tag_ids=payload.tag_ids,
        participant_ids=payload.participant_ids,
    )


@router.put("/{event_id}", response_model=EventOut)
async def update_event(event_id: int, payload: EventCreate, db: AsyncSession = Depends(get_db)):
    """Replace the whole event. Omitted tagIds/participantIds clear those associations."""
    return await EventService(db).update_event(
        event_id,
        payload.event_fields(),
        tag_ids=payload.tag_ids,
        participant_ids=payload.participant_ids,
    )


@router.delete("/{event_id}")
async def delete_event(event_id: int, db: AsyncSession = Depends(get_db)):
    await EventService(db).delete_event(event_id)
    return {"message": "Event deleted successfully"}
