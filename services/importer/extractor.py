import json
import logging
from typing import Optional

from shapely.errors import ShapelyError
from shapely.geometry import shape

from services.importer.errors import ExtractionError, GeoJSONFormatError

logger = logging.getLogger(__name__)


def load_feature_collection(source):
    """Parse and check an uploaded GeoJSON document.

    `source` may be raw bytes (an uploaded file), a JSON string, or an already
    decoded dict. Returns the FeatureCollection dict; raises GeoJSONFormatError
    when it cannot be decoded or is not a FeatureCollection with a list of
    features.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            source = source.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise GeoJSONFormatError('File is not valid UTF-8 text')
    if isinstance(source, str):
        try:
            source = json.loads(source)
        except ValueError as e:
            raise GeoJSONFormatError(f'Invalid JSON: {e}')
    if not isinstance(source, dict) or source.get('type') != 'FeatureCollection':
        raise GeoJSONFormatError('Invalid GeoJSON format. Expected FeatureCollection.')
    if not isinstance(source.get('features'), list):
        raise GeoJSONFormatError('Invalid GeoJSON format. "features" must be a list.')
    return source


def feature_properties(feature, index: int) -> dict:
    if not isinstance(feature, dict):
        raise ExtractionError(index, 'Feature is not an object')
    props = feature.get('properties')
    if props is None:
        return {}
    if not isinstance(props, dict):
        raise ExtractionError(index, 'Feature properties must be an object')
    return props


def _as_text(value) -> Optional[str]:
    """Strings (stripped) and numbers as text; None for anything else."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def first_name(properties: dict, fields) -> Optional[str]:
    """First non-blank string or numeric value among `fields`, or None.

    Objects, lists and booleans are skipped.
    """
    for field in fields:
        value = _as_text(properties.get(field))
        if value:
            return value
    return None


def best_effort_name(feature, fields) -> Optional[str]:
    if not isinstance(feature, dict) or not isinstance(feature.get('properties'), dict):
        return None
    return first_name(feature['properties'], fields)


def extract_name(properties: dict, fields, index: int) -> str:
    for field in fields:
        value = properties.get(field)
        if value is not None and _as_text(value) is None:
            raise ExtractionError(index, f"Name field {field!r} must be a string or number, got {type(value).__name__}")
    name = first_name(properties, fields)
    if not name:
        raise ExtractionError(index, f"Missing name (expected one of: {', '.join(fields)})")
    return name


def extract_geometry(feature: dict, allowed_types, index: int, name: str = None) -> str:
    """Check the feature geometry against `allowed_types` and serialize it.

    The geometry object is stored verbatim (type + coordinates) as compact JSON.
    """
    geometry = feature.get('geometry')
    if not isinstance(geometry, dict) or not geometry:
        raise ExtractionError(index, 'Missing geometry', name=name)
    geom_type = geometry.get('type')
    if geom_type not in allowed_types:
        raise ExtractionError(
            index,
            f"Unsupported geometry type {geom_type!r} (expected {', '.join(allowed_types)})",
            name=name,
        )
    try:
        geom = shape(geometry)
    except (ShapelyError, ValueError, TypeError, IndexError, KeyError, AttributeError) as e:
        raise ExtractionError(index, f'Invalid {geom_type} coordinates: {e}', name=name)
    if geom.is_empty:
        raise ExtractionError(index, f'Empty {geom_type} geometry', name=name)
    if not geom.is_valid:
        logger.warning("Feature %s (%s): %s geometry is not valid, importing as-is", index, name, geom_type)
    return json.dumps(geometry, separators=(',', ':'), ensure_ascii=False)
