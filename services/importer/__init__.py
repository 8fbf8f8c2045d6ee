from .errors import (
    CampusNotFoundError,
    ExtractionError,
    FeatureImportError,
    GeoJSONFormatError,
    ImportRejectedError,
    PersistenceError,
)
from .adapters import (
    ADAPTERS,
    BoundaryAdapter,
    BuildingAdapter,
    Candidate,
    EntityAdapter,
    OpenSpaceAdapter,
    PathAdapter,
    POIAdapter,
    get_adapter,
)
from .reconciler import ImportReconciler, ImportTally, import_features

__all__ = [
    "CampusNotFoundError",
    "ExtractionError",
    "FeatureImportError",
    "GeoJSONFormatError",
    "ImportRejectedError",
    "PersistenceError",
    "ADAPTERS",
    "BoundaryAdapter",
    "BuildingAdapter",
    "Candidate",
    "EntityAdapter",
    "OpenSpaceAdapter",
    "PathAdapter",
    "POIAdapter",
    "get_adapter",
    "ImportReconciler",
    "ImportTally",
    "import_features",
]
