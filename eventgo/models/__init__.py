from eventgo.models.base import Base
from eventgo.models.tag import Tag, EventTag
from eventgo.models.participant import Participant, EventParticipant
from eventgo.models.event import Event

__all__ = [
    "Base",
    "Tag",
    "EventTag",
    "Participant",
    "EventParticipant",
    "Event",
]
