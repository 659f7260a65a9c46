import datetime
from pydantic import BaseModel, Field
from typing import Optional, List

from eventgo.schemas.tag_schema import TagOut
from eventgo.schemas.participant_schema import ParticipantOut


class EventBase(BaseModel):
    name: Optional[str] = None
    date: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    place: Optional[str] = None


class EventCreate(EventBase):
    """Body for both POST and PUT: the whole resource, associations included."""
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")
    participant_ids: Optional[List[int]] = Field(None, alias="participantIds")

    class Config:
        populate_by_name = True

    def event_fields(self) -> dict:
        return self.model_dump(include={"name", "date", "duration", "description", "place"})


class EventOut(BaseModel):
    id: int
    name: str
    date: datetime.date
    duration: str
    description: str
    place: str
    tags: List[TagOut] = []
    participants: List[ParticipantOut] = []

    class Config:
        from_attributes = True
