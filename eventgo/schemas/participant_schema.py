import datetime
from pydantic import BaseModel, StrictInt
from typing import Optional, List


class ParticipantBase(BaseModel):
    name: Optional[str] = None
    age: Optional[StrictInt] = None


class ParticipantCreate(ParticipantBase):
    pass


class ParticipantOut(BaseModel):
    id: int
    name: str
    age: int

    class Config:
        from_attributes = True


class ParticipantEventOut(BaseModel):
    """An event as listed on a participant, without its own associations."""
    id: int
    name: str
    date: datetime.date
    duration: str
    description: str
    place: str

    class Config:
        from_attributes = True


class ParticipantWithEventsOut(ParticipantOut):
    events: List[ParticipantEventOut] = []
