from typing import List
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, ForeignKey, CheckConstraint
from eventgo.models.base import Base


class Participant(Base):
    __tablename__ = "participants"
    __table_args__ = (CheckConstraint("age >= 0 AND age <= 150", name="ck_participants_age_range"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)

    event_participants: Mapped[List["EventParticipant"]] = relationship(
        "EventParticipant", back_populates="participant", passive_deletes=True
    )


class EventParticipant(Base):
    __tablename__ = "event_participants"

    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    participant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("participants.id", ondelete="CASCADE"), primary_key=True
    )

    event: Mapped["Event"] = relationship("Event", back_populates="event_participants")
    participant: Mapped["Participant"] = relationship("Participant", back_populates="event_participants")
