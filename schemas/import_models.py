from pydantic import BaseModel, ConfigDict
from typing import List


class ImportErrorDetail(BaseModel):
    """A feature that could not be imported"""
    model_config = ConfigDict(frozen=True)

    name: str
    error: str


class ImportDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    imported: List[str]
    duplicates: List[str]
    errors: List[ImportErrorDetail]


class ImportResponse(BaseModel):
    """Outcome of one GeoJSON import: counts and names per bucket.

    total == imported + duplicates + errors; each details list keeps the
    order of the features in the uploaded file.
    """
    model_config = ConfigDict(frozen=True)

    total: int
    imported: int
    duplicates: int
    errors: int
    details: ImportDetails
