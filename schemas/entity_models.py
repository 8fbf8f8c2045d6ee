from enum import Enum
from pydantic import BaseModel
from typing import List


class EntityKind(str, Enum):
    """Map entity collections exposed by the API (URL segment)"""
    buildings = "buildings"
    open_spaces = "open-spaces"
    pois = "pois"
    paths = "paths"
    boundaries = "boundaries"


# URL segment -> sqlite table
ENTITY_TABLES = {
    EntityKind.buildings: "buildings",
    EntityKind.open_spaces: "open_spaces",
    EntityKind.pois: "pois",
    EntityKind.paths: "paths",
    EntityKind.boundaries: "boundaries",
}


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class EntityListResponse(BaseModel):
    data: List[dict]
    pagination: Pagination
