"""
Event service: CRUD on events plus their tag and participant sets.

Every mutation runs as a single transaction. The Event row and both join
tables are written in one session and committed once; any failure rolls all
of it back, so an update can never leave an event with its old join rows
deleted and the new ones missing.
"""

import datetime
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventgo.models.event import Event
from eventgo.models.participant import EventParticipant
from eventgo.models.tag import EventTag
from eventgo.services.association_service import AssociationManager, RelationKind, is_storable_id
from eventgo.services.exceptions import NotFoundError, ValidationError
from eventgo.services.validation import check_max_length

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}$")
EVENT_FIELDS = ("name", "date", "duration", "description", "place")


def parse_event_date(value: Any) -> datetime.date:
    """Accept a date, a ``YYYY-MM-DD`` string, or an ISO datetime string (truncated to its date)."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    # fromisoformat widens its accepted forms across Python versions; pin the date part
    if DATE_PATTERN.match(text[:10]):
        try:
            if len(text) == 10:
                return datetime.datetime.strptime(text, "%Y-%m-%d").date()
            if text[10] in "T ":
                return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationError("date must be a valid calendar date (YYYY-MM-DD)", field="date")


def validate_event_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Check the five scalar fields in order; the first failure is raised."""
    cleaned = {}
    for field in EVENT_FIELDS:
        value = fields.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field} is required", field=field)
        check_max_length(Event, field, value)
        cleaned[field] = parse_event_date(value) if field == "date" else value
    return cleaned


def resolve_associations(events: List[Event]) -> List[Event]:
    """Attach ``tags`` and ``participants`` to each event, sorted by id."""
    for ev in events:
        ev.tags = sorted((et.tag for et in ev.event_tags), key=lambda t: t.id)
        ev.participants = sorted((ep.participant for ep in ev.event_participants), key=lambda p: p.id)
    return events


def _event_query():
    # populate_existing: join rows may have changed under instances already in the session
    return (
        select(Event)
        .options(
            selectinload(Event.event_tags).selectinload(EventTag.tag),
            selectinload(Event.event_participants).selectinload(EventParticipant.participant),
        )
        .execution_options(populate_existing=True)
    )


class EventService:
    """
    Service for managing events and their associations.

    Usage:
        >>> service = EventService(session)
        >>> event = await service.create_event(
        ...     {"name": "Conf", "date": "2025-10-20", "duration": "2 hours",
        ...      "description": "d", "place": "p"},
        ...     tag_ids=[1, 2],
        ... )
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.associations = AssociationManager(db)

    async def list_events(self, tag_id: Optional[int] = None) -> List[Event]:
        """
        List events ordered by id.

        Args:
            tag_id: Only events labelled with this tag. An unknown id yields an empty list.
        """
        if tag_id is not None and not is_storable_id(tag_id):
            return []
        query = _event_query().order_by(Event.id)
        if tag_id is not None:
            query = query.where(Event.id.in_(select(EventTag.event_id).where(EventTag.tag_id == tag_id)))
        result = await self.db.execute(query)
        return resolve_associations(list(result.scalars().all()))

    async def get_event(self, event_id: int) -> Event:
        if not is_storable_id(event_id):
            raise NotFoundError("Event", event_id)
        result = await self.db.execute(_event_query().where(Event.id == event_id))
        event = result.scalar_one_or_none()
        if event is None:
            raise NotFoundError("Event", event_id)
        return resolve_associations([event])[0]

    async def create_event(
        self,
        fields: Dict[str, Any],
        tag_ids: Optional[Iterable[int]] = None,
        participant_ids: Optional[Iterable[int]] = None,
    ) -> Event:
        """
        Create an event and its join rows.

        Raises:
            ValidationError: Before any write, naming the first invalid field
            InvalidReferenceError: If a tag or participant id does not exist
        """
        values = validate_event_fields(fields)
        event = Event(**values)

        self.db.add(event)
        try:
            await self.db.flush()
            await self.associations.reconcile(event.id, tag_ids or [], RelationKind.TAGS)
            await self.associations.reconcile(event.id, participant_ids or [], RelationKind.PARTICIPANTS)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Created event %s (%s)", event.id, values["name"])
        return await self.get_event(event.id)

    async def update_event(
        self,
        event_id: int,
        fields: Dict[str, Any],
        tag_ids: Optional[Iterable[int]] = None,
        participant_ids: Optional[Iterable[int]] = None,
    ) -> Event:
        """
        Replace an event: all five scalar fields and both association sets.

        Omitted ``tag_ids``/``participant_ids`` clear the corresponding set.
        Callers that want to keep the current associations must resend them.

        Raises:
            NotFoundError: If the event does not exist
            ValidationError: Before any write, naming the first invalid field
            InvalidReferenceError: If a tag or participant id does not exist
        """
        event = await self.db.get(Event, event_id) if is_storable_id(event_id) else None
        if event is None:
            raise NotFoundError("Event", event_id)

        values = validate_event_fields(fields)
        try:
            for field, new_val in values.items():
                setattr(event, field, new_val)
            await self.db.flush()
            await self.associations.reconcile(event_id, tag_ids or [], RelationKind.TAGS)
            await self.associations.reconcile(event_id, participant_ids or [], RelationKind.PARTICIPANTS)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Updated event %s", event_id)
        return await self.get_event(event_id)

    async def delete_event(self, event_id: int) -> None:
        if not is_storable_id(event_id) or await self.db.get(Event, event_id) is None:
            raise NotFoundError("Event", event_id)

        try:
            removed = await self.associations.cascade_delete_for_event(event_id)
            await self.db.execute(delete(Event).where(Event.id == event_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Deleted event %s and %s association rows", event_id, removed)
