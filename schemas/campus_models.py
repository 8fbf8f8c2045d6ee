from pydantic import BaseModel, Field
from typing import Optional, List


class CampusCreate(BaseModel):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None  # generated from name when omitted
    description: Optional[str] = None
    is_active: bool = True


class Campus(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[str] = None


class CampusListResponse(BaseModel):
    count: int
    campuses: List[Campus]
