"""
Association management for the Event join tables.

An Event owns two sets of join rows: ``event_tags`` and
``event_participants``. ``AssociationManager.reconcile`` replaces one set
wholesale (delete all, insert the requested distinct ids) and the cascade
helpers remove join rows when either end is deleted.

None of these methods commit. They run inside the transaction of the
service that calls them, so a failure anywhere in an Event mutation rolls
the join rows back together with the Event row.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Type

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventgo.models.base import Base
from eventgo.models.event import Event
from eventgo.models.participant import EventParticipant, Participant
from eventgo.models.tag import EventTag, Tag
from eventgo.services.exceptions import InvalidReferenceError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Relation:
    label: str
    join_model: Type[Base]
    related_model: Type[Base]
    related_column: str


class RelationKind(enum.Enum):
    TAGS = _Relation("Tag", EventTag, Tag, "tag_id")
    PARTICIPANTS = _Relation("Participant", EventParticipant, Participant, "participant_id")

    @property
    def join_model(self):
        return self.value.join_model

    @property
    def related_model(self):
        return self.value.related_model

    @property
    def related_column(self):
        return getattr(self.value.join_model, self.value.related_column)

    @property
    def label(self) -> str:
        return self.value.label


# Signed 64-bit INTEGER range; drivers refuse to bind anything wider
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def is_storable_id(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def distinct_ids(ids: Iterable[int]) -> List[int]:
    """Drop repeated ids, keeping first-occurrence order."""
    return list(dict.fromkeys(ids))


class AssociationManager:
    """
    Keeps an Event's join rows consistent with a requested set of related ids.

    Usage:
        >>> manager = AssociationManager(session)
        >>> await manager.reconcile(event.id, [1, 2, 2], RelationKind.TAGS)
        [1, 2]
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile(self, event_id: int, related_ids: Iterable[int], kind: RelationKind) -> List[int]:
        """
        Replace the join rows of ``kind`` for ``event_id`` with ``related_ids``.

        Args:
            event_id: Owning Event id (must exist)
            related_ids: Tag or Participant ids; may be empty or repeat ids
            kind: Which join table to reconcile

        Returns:
            The distinct ids now joined, in first-occurrence order

        Raises:
            NotFoundError: If the Event does not exist
            InvalidReferenceError: If any related id does not exist
        """
        if not is_storable_id(event_id) or await self.db.get(Event, event_id) is None:
            raise NotFoundError("Event", event_id)

        wanted = distinct_ids(related_ids)
        await self._check_references(wanted, kind)

        join = kind.join_model
        await self.db.execute(delete(join).where(join.event_id == event_id))
        if wanted:
            await self.db.execute(
                insert(join),
                [{"event_id": event_id, kind.value.related_column: rid} for rid in wanted],
            )

        logger.debug("Reconciled %s for event %s: %s", join.__tablename__, event_id, wanted)
        return wanted

    async def cascade_delete_for_event(self, event_id: int) -> int:
        """Delete every join row of both kinds owned by ``event_id``. Safe on events with none."""
        if not is_storable_id(event_id):
            return 0
        removed = 0
        for kind in RelationKind:
            join = kind.join_model
            result = await self.db.execute(delete(join).where(join.event_id == event_id))
            removed += result.rowcount or 0
        logger.debug("Removed %s join rows for event %s", removed, event_id)
        return removed

    async def cascade_delete_for_related(self, related_id: int, kind: RelationKind) -> int:
        """Delete the join rows referencing one Tag or Participant. Events are left alone."""
        if not is_storable_id(related_id):
            return 0
        result = await self.db.execute(delete(kind.join_model).where(kind.related_column == related_id))
        removed = result.rowcount or 0
        logger.debug("Removed %s %s rows for %s %s", removed, kind.join_model.__tablename__, kind.label, related_id)
        return removed

    async def related_ids(self, event_id: int, kind: RelationKind) -> List[int]:
        if not is_storable_id(event_id):
            return []
        join = kind.join_model
        result = await self.db.execute(
            select(kind.related_column).where(join.event_id == event_id).order_by(kind.related_column)
        )
        return list(result.scalars().all())

    async def _check_references(self, ids: List[int], kind: RelationKind) -> None:
        if not ids:
            return
        model = kind.related_model
        lookup = [i for i in ids if is_storable_id(i)]
        result = await self.db.execute(select(model.id).where(model.id.in_(lookup)))
        missing = set(ids) - set(result.scalars().all())
        if missing:
            raise InvalidReferenceError(kind.label, missing)
