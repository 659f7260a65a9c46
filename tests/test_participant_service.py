"""
Tests for ParticipantService and TagService: validation and delete cascades.
"""

import pytest
from sqlalchemy import func, select

from eventgo.models import Event, EventParticipant, EventTag
from eventgo.services.event_service import EventService
from eventgo.services.exceptions import NotFoundError, ValidationError
from eventgo.services.participant_service import ParticipantService, validate_participant_fields
from eventgo.services.tag_service import TagService, validate_tag_fields

from tests.factories import event_payload


async def _count(session, model):
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class TestParticipantValidation:

    @pytest.mark.parametrize("age", [0, 30, 150])
    def test_age_boundaries_accepted(self, age):
        assert validate_participant_fields({"name": "Ann", "age": age})["age"] == age

    @pytest.mark.parametrize("age", [-1, 151])
    def test_age_out_of_range(self, age):
        with pytest.raises(ValidationError) as exc_info:
            validate_participant_fields({"name": "Ann", "age": age})
        assert exc_info.value.field == "age"

    @pytest.mark.parametrize("age", [None, "30", 30.5, True])
    def test_age_must_be_integer(self, age):
        with pytest.raises(ValidationError):
            validate_participant_fields({"name": "Ann", "age": age})

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_name_required(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_participant_fields({"name": name, "age": 20})
        assert exc_info.value.field == "name"


class TestParticipantService:

    @pytest.mark.asyncio
    async def test_create_and_list(self, db_session):
        service = ParticipantService(db_session)
        a = await service.create_participant({"name": "A", "age": 0})
        b = await service.create_participant({"name": "B", "age": 150})

        listed = await service.list_participants()

        assert [p.id for p in listed] == [a.id, b.id]
        assert listed[0].events == []

    @pytest.mark.asyncio
    async def test_events_attached(self, db_session, make_participant):
        p1 = await make_participant()
        events = EventService(db_session)
        first = await events.create_event(event_payload(name="First"), participant_ids=[p1])
        second = await events.create_event(event_payload(name="Second"), participant_ids=[p1])

        participant = await ParticipantService(db_session).get_participant(p1)

        assert [e.id for e in participant.events] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, db_session, make_participant):
        p1 = await make_participant("Old", 20)

        updated = await ParticipantService(db_session).update_participant(p1, {"name": "New", "age": 21})

        assert (updated.name, updated.age) == ("New", 21)

    @pytest.mark.asyncio
    async def test_update_invalid_age(self, db_session, make_participant):
        p1 = await make_participant()

        with pytest.raises(ValidationError):
            await ParticipantService(db_session).update_participant(p1, {"name": "X", "age": 151})

    @pytest.mark.asyncio
    async def test_delete_keeps_events(self, db_session, make_participant):
        p1, p2 = await make_participant("A"), await make_participant("B")
        event = await EventService(db_session).create_event(event_payload(), participant_ids=[p1, p2])
        event_id = event.id

        await ParticipantService(db_session).delete_participant(p1)

        assert await _count(db_session, Event) == 1
        remaining = (
            await db_session.execute(
                select(EventParticipant.participant_id).where(EventParticipant.event_id == event_id)
            )
        ).scalars().all()
        assert list(remaining) == [p2]

    @pytest.mark.asyncio
    async def test_missing_participant(self, db_session):
        service = ParticipantService(db_session)
        with pytest.raises(NotFoundError):
            await service.get_participant(9)
        with pytest.raises(NotFoundError):
            await service.delete_participant(9)

    @pytest.mark.asyncio
    async def test_id_beyond_integer_range_is_not_found(self, db_session):
        service = ParticipantService(db_session)
        with pytest.raises(NotFoundError):
            await service.update_participant(2 ** 63, {"name": "Ann", "age": 30})
        with pytest.raises(NotFoundError):
            await service.delete_participant(-(2 ** 63) - 1)


class TestTagService:

    def test_color_unconstrained(self):
        assert validate_tag_fields({"name": "x", "color": "not-a-color"})["color"] == "not-a-color"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            validate_tag_fields({"name": " ", "color": "#fff"})

    def test_name_limited_to_column_length(self):
        assert validate_tag_fields({"name": "x" * 50})["name"] == "x" * 50
        with pytest.raises(ValidationError) as exc_info:
            validate_tag_fields({"name": "x" * 51})
        assert str(exc_info.value) == "name must be at most 50 characters"

    def test_long_color_accepted(self):
        color = "#" + "f" * 63
        assert validate_tag_fields({"name": "x", "color": color})["color"] == color

    @pytest.mark.asyncio
    async def test_crud(self, db_session):
        service = TagService(db_session)
        tag = await service.create_tag({"name": "Music", "color": "#FF5733"})
        tag_id = tag.id

        updated = await service.update_tag(tag_id, {"name": "Jazz", "color": None})
        assert (updated.name, updated.color) == ("Jazz", None)
        assert [t.id for t in await service.list_tags()] == [tag_id]

        await service.delete_tag(tag_id)
        assert await service.list_tags() == []

    @pytest.mark.asyncio
    async def test_delete_untags_events(self, db_session, make_tag):
        t1, t2 = await make_tag("a"), await make_tag("b")
        events = EventService(db_session)
        e1 = await events.create_event(event_payload(name="E1"), tag_ids=[t1, t2])
        e2 = await events.create_event(event_payload(name="E2"), tag_ids=[t1])
        e1_id, e2_id = e1.id, e2.id

        await TagService(db_session).delete_tag(t1)

        assert await _count(db_session, EventTag) == 1
        assert [t.id for t in (await events.get_event(e1_id)).tags] == [t2]
        assert (await events.get_event(e2_id)).tags == []
