from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventgo.core.database import get_db
from eventgo.schemas.tag_schema import TagCreate, TagOut
from eventgo.services.tag_service import TagService

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get("", response_model=List[TagOut])
async def list_tags(db: AsyncSession = Depends(get_db)):
    return await TagService(db).list_tags()


@router.get("/{tag_id}", response_model=TagOut)
async def get_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    return await TagService(db).get_tag(tag_id)


@router.post("", response_model=TagOut, status_code=201)
async def create_tag(payload: TagCreate, db: AsyncSession = Depends(get_db)):
    return await TagService(db).create_tag(payload.model_dump())


@router.put("/{tag_id}", response_model=TagOut)
async def update_tag(tag_id: int, payload: TagCreate, db: AsyncSession = Depends(get_db)):
    return await TagService(db).update_tag(tag_id, payload.model_dump())


@router.delete("/{tag_id}")
async def delete_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a tag. Events carrying it stay, minus the tag."""
    await TagService(db).delete_tag(tag_id)
    return {"message": "Tag deleted successfully"}
