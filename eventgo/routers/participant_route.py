from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventgo.core.database import get_db
from eventgo.schemas.participant_schema import ParticipantCreate, ParticipantWithEventsOut
from eventgo.services.participant_service import ParticipantService

router = APIRouter(prefix="/api/participants", tags=["Participants"])


@router.get("", response_model=List[ParticipantWithEventsOut])
async def list_participants(db: AsyncSession = Depends(get_db)):
    return await ParticipantService(db).list_participants()


@router.get("/{participant_id}", response_model=ParticipantWithEventsOut)
async def get_participant(participant_id: int, db: AsyncSession = Depends(get_db)):
    return await ParticipantService(db).get_participant(participant_id)


@router.post("", response_model=ParticipantWithEventsOut, status_code=201)
async def create_participant(payload: ParticipantCreate, db: AsyncSession = Depends(get_db)):
    return await ParticipantService(db).create_participant(payload.model_dump())


@router.put("/{participant_id}", response_model=ParticipantWithEventsOut)
async def update_participant(
    participant_id: int,
    payload: ParticipantCreate,
    db: AsyncSession = Depends(get_db),
):
    return await ParticipantService(db).update_participant(participant_id, payload.model_dump())


@router.delete("/{participant_id}")
async def delete_participant(participant_id: int, db: AsyncSession = Depends(get_db)):
    await ParticipantService(db).delete_participant(participant_id)
    return {"message": "Participant deleted successfully"}
