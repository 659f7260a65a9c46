"""
Participant service.

Participants are the related side of ``event_participants``: deleting one
removes its join rows and leaves every Event in place.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventgo.models.participant import EventParticipant, Participant
from eventgo.services.association_service import AssociationManager, RelationKind, is_storable_id
from eventgo.services.exceptions import NotFoundError, ValidationError
from eventgo.services.validation import check_max_length

logger = logging.getLogger(__name__)

MIN_AGE = 0
MAX_AGE = 150


def validate_participant_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    name = fields.get("name")
    if name is None or not str(name).strip():
        raise ValidationError("name is required", field="name")
    check_max_length(Participant, "name", name)

    age = fields.get("age")
    if age is None:
        raise ValidationError("age is required", field="age")
    if isinstance(age, bool) or not isinstance(age, int):
        raise ValidationError("age must be an integer", field="age")
    if not MIN_AGE <= age <= MAX_AGE:
        raise ValidationError(f"age must be between {MIN_AGE} and {MAX_AGE}", field="age")

    return {"name": name, "age": age}


def _participant_query():
    return (
        select(Participant)
        .options(selectinload(Participant.event_participants).selectinload(EventParticipant.event))
        .execution_options(populate_existing=True)
    )


def _resolve_events(participants: List[Participant]) -> List[Participant]:
    for p in participants:
        p.events = sorted((ep.event for ep in p.event_participants), key=lambda e: e.id)
    return participants


class ParticipantService:
    """CRUD for participants; responses list the events each participant attends."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.associations = AssociationManager(db)

    async def list_participants(self) -> List[Participant]:
        result = await self.db.execute(_participant_query().order_by(Participant.id))
        return _resolve_events(list(result.scalars().all()))

    async def get_participant(self, participant_id: int) -> Participant:
        if not is_storable_id(participant_id):
            raise NotFoundError("Participant", participant_id)
        result = await self.db.execute(_participant_query().where(Participant.id == participant_id))
        participant = result.scalar_one_or_none()
        if participant is None:
            raise NotFoundError("Participant", participant_id)
        return _resolve_events([participant])[0]

    async def create_participant(self, fields: Dict[str, Any]) -> Participant:
        participant = Participant(**validate_participant_fields(fields))
        self.db.add(participant)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Created participant %s (%s)", participant.id, participant.name)
        return await self.get_participant(participant.id)

    async def update_participant(self, participant_id: int, fields: Dict[str, Any]) -> Participant:
        participant = await self.db.get(Participant, participant_id) if is_storable_id(participant_id) else None
        if participant is None:
            raise NotFoundError("Participant", participant_id)

        values = validate_participant_fields(fields)
        try:
            for field, new_val in values.items():
                setattr(participant, field, new_val)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Updated participant %s", participant_id)
        return await self.get_participant(participant_id)

    async def delete_participant(self, participant_id: int) -> None:
        if not is_storable_id(participant_id) or await self.db.get(Participant, participant_id) is None:
            raise NotFoundError("Participant", participant_id)

        try:
            removed = await self.associations.cascade_delete_for_related(participant_id, RelationKind.PARTICIPANTS)
            await self.db.execute(delete(Participant).where(Participant.id == participant_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Deleted participant %s (left %s events)", participant_id, removed)
