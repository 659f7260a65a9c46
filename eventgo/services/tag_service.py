import logging
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventgo.models.tag import Tag
from eventgo.services.association_service import AssociationManager, RelationKind, is_storable_id
from eventgo.services.exceptions import NotFoundError, ValidationError
from eventgo.services.validation import check_max_length

logger = logging.getLogger(__name__)


def validate_tag_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    name = fields.get("name")
    if name is None or not str(name).strip():
        raise ValidationError("name is required", field="name")
    check_max_length(Tag, "name", name)
    return {"name": name, "color": fields.get("color")}


class TagService:
    """CRUD for tags. Color is stored as given."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.associations = AssociationManager(db)

    async def list_tags(self) -> List[Tag]:
        result = await self.db.execute(select(Tag).order_by(Tag.id))
        return list(result.scalars().all())

    async def get_tag(self, tag_id: int) -> Tag:
        tag = await self.db.get(Tag, tag_id) if is_storable_id(tag_id) else None
        if tag is None:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def create_tag(self, fields: Dict[str, Any]) -> Tag:
        tag = Tag(**validate_tag_fields(fields))
        self.db.add(tag)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(tag)
        logger.info("Created tag %s (%s)", tag.id, tag.name)
        return tag

    async def update_tag(self, tag_id: int, fields: Dict[str, Any]) -> Tag:
        tag = await self.get_tag(tag_id)

        values = validate_tag_fields(fields)
        try:
            for field, new_val in values.items():
                setattr(tag, field, new_val)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(tag)
        logger.info("Updated tag %s", tag_id)
        return tag

    async def delete_tag(self, tag_id: int) -> None:
        await self.get_tag(tag_id)

        try:
            removed = await self.associations.cascade_delete_for_related(tag_id, RelationKind.TAGS)
            await self.db.execute(delete(Tag).where(Tag.id == tag_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Deleted tag %s (untagged %s events)", tag_id, removed)
