import datetime
from typing import List

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Text, Date
from eventgo.models.base import Base


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    place: Mapped[str] = mapped_column(String(255), nullable=False)

    # join rows are removed by AssociationManager and ON DELETE CASCADE, never loaded for deletes
    event_tags: Mapped[List["EventTag"]] = relationship(
        "EventTag", back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
    event_participants: Mapped[List["EventParticipant"]] = relationship(
        "EventParticipant", back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
