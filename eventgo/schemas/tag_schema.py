from pydantic import BaseModel
from typing import Optional


class TagBase(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class TagCreate(TagBase):
    pass


class TagOut(BaseModel):
    id: int
    name: str
    color: Optional[str] = None

    class Config:
        from_attributes = True
