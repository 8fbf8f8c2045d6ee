"""Per-kind plug-ins for the import reconciler.

Each adapter knows how to read its entity kind out of a GeoJSON feature
(name fields, accepted geometry types, extra attributes), how to key it for
duplicate detection and how to hand it to its store.
"""
import logging
from typing import Any, Dict

from pydantic import BaseModel, Field

from config import POI_MATCH_THRESHOLD
from services.importer.extractor import (
    best_effort_name,
    extract_geometry,
    extract_name,
    feature_properties,
    first_name,
)
from services.importer.stores import SqliteEntityStore
from utils_pkg import best_name_match, parse_float, parse_int, unique_slug

logger = logging.getLogger(__name__)

POLYGONAL = ('Polygon', 'MultiPolygon')
LINEAR = ('LineString', 'MultiLineString')


class Candidate(BaseModel):
    """An entity extracted from one feature, not yet persisted."""
    feature_index: int
    name: str
    geometry_json: str
    campus_id: str
    attributes: Dict[str, Any] = Field(default_factory=dict)


def _fid_description(props: dict) -> str:
    fid = props.get('fid')
    return f"Imported from GeoJSON (FID: {fid if fid is not None else 'N/A'})"


class EntityAdapter:
    kind = None
    table = None
    name_fields = ('name',)
    geometry_types = ()

    def __init__(self, store=None):
        self.store = store if store is not None else SqliteEntityStore(self.table)

    def extract(self, feature, index: int, campus_id: str) -> Candidate:
        props = feature_properties(feature, index)
        name = extract_name(props, self.name_fields, index)
        geometry_json = extract_geometry(feature, self.geometry_types, index, name=name)
        return Candidate(
            feature_index=index,
            name=name,
            geometry_json=geometry_json,
            campus_id=campus_id,
            attributes=self.extract_attributes(props),
        )

    def extract_attributes(self, props: dict) -> dict:
        return {'description': first_name(props, ('description',))}

    def name_of(self, feature):
        """Best-effort display name for error reporting."""
        return best_effort_name(feature, self.name_fields)

    def key_of(self, candidate: Candidate) -> str:
        return candidate.name.casefold()

    def find_existing(self, candidate: Candidate):
        return self.store.find_by_key(candidate.campus_id, self.key_of(candidate))

    def build_record(self, candidate: Candidate) -> dict:
        record = {
            'campus_id': candidate.campus_id,
            'name': candidate.name,
            'name_key': self.key_of(candidate),
            'geometry': candidate.geometry_json,
            'is_active': True,
        }
        record.update(candidate.attributes)
        return record

    def persist(self, candidate: Candidate):
        record = self.build_record(candidate)
        record['slug'] = unique_slug(
            candidate.name, lambda s: self.store.slug_exists(candidate.campus_id, s)
        )
        return self.store.create(record)


class BuildingAdapter(EntityAdapter):
    kind = 'building'
    table = 'buildings'
    geometry_types = POLYGONAL

    def extract_attributes(self, props):
        fid = props.get('fid')
        return {
            'description': first_name(props, ('description',)) or _fid_description(props),
            'height': parse_float(props.get('height')),
            'floors': parse_int(props.get('floors', props.get('levels'))),
            'fid': str(fid) if fid is not None else None,
        }


class OpenSpaceAdapter(EntityAdapter):
    kind = 'open space'
    table = 'open_spaces'
    geometry_types = POLYGONAL

    def extract_attributes(self, props):
        return {
            'description': first_name(props, ('description',)),
            'open_space_type': first_name(props, ('openSpaceType', 'type')) or 'general',
            'capacity': parse_int(props.get('capacity')),
            'is_reservable': False,
        }


class PathAdapter(EntityAdapter):
    kind = 'path'
    table = 'paths'
    geometry_types = LINEAR

    def extract_attributes(self, props):
        fid = props.get('fid')
        return {
            'description': first_name(props, ('description',)) or _fid_description(props),
            'path_type': first_name(props, ('pathType', 'type')),
            'fid': str(fid) if fid is not None else None,
        }


class BoundaryAdapter(EntityAdapter):
    kind = 'boundary'
    table = 'boundaries'
    name_fields = ('display name', 'name', 'displayName')
    geometry_types = POLYGONAL + LINEAR

    def extract_attributes(self, props):
        return {
            'description': first_name(props, ('description',)),
            'boundary_type': first_name(props, ('boundaryType', 'type')),
        }


class POIAdapter(EntityAdapter):
    """Points of interest.

    On persist, a POI is linked to the building or open space of its campus
    whose name is closest to the POI name (buildings win ties).
    """
    kind = 'poi'
    table = 'pois'
    geometry_types = ('Point',)

    def __init__(self, store=None, buildings=None, open_spaces=None, threshold: float = POI_MATCH_THRESHOLD):
        super().__init__(store)
        self.buildings = buildings if buildings is not None else SqliteEntityStore('buildings')
        self.open_spaces = open_spaces if open_spaces is not None else SqliteEntityStore('open_spaces')
        self.threshold = threshold

    def extract_attributes(self, props):
        return {
            'description': first_name(props, ('description',)) or '',
            'category': first_name(props, ('category', 'amenity')),
        }

    def match_parent(self, name: str, campus_id: str) -> dict:
        candidates = [dict(row, parent='building') for row in self.buildings.list_names(campus_id)]
        candidates += [dict(row, parent='open_space') for row in self.open_spaces.list_names(campus_id)]
        match, score = best_name_match(name, candidates, self.threshold)
        if match is None:
            return {'building_id': None, 'open_space_id': None}
        logger.debug("POI %r linked to %s %r (similarity %.2f)", name, match['parent'], match['name'], score)
        if match['parent'] == 'building':
            return {'building_id': match['id'], 'open_space_id': None}
        return {'building_id': None, 'open_space_id': match['id']}

    def build_record(self, candidate):
        record = super().build_record(candidate)
        record.update(self.match_parent(candidate.name, candidate.campus_id))
        return record


# Route segment -> adapter class
ADAPTERS = {
    'buildings': BuildingAdapter,
    'open-spaces': OpenSpaceAdapter,
    'pois': POIAdapter,
    'paths': PathAdapter,
    'boundaries': BoundaryAdapter,
}


def get_adapter(kind: str, **kwargs) -> EntityAdapter:
    try:
        adapter_cls = ADAPTERS[kind]
    except KeyError:
        raise ValueError(f'Unknown entity kind: {kind}')
    return adapter_cls(**kwargs)
