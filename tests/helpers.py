"""GeoJSON builders and an in-memory entity store shared by the tests"""

SQUARE = [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]]
OTHER_SQUARE = [[[5.0, 5.0], [6.0, 5.0], [6.0, 6.0], [5.0, 6.0], [5.0, 5.0]]]


def make_feature(name=None, geometry_type='Polygon', coordinates=None, **props):
    """Build a GeoJSON Feature; `name=None` leaves the name property out."""
    if coordinates is None:
        coordinates = {
            'Polygon': SQUARE,
            'MultiPolygon': [SQUARE],
            'Point': [-7.9382, 32.2215],
            'LineString': [[0.0, 0.0], [1.0, 1.0]],
            'MultiLineString': [[[0.0, 0.0], [1.0, 1.0]]],
        }[geometry_type]
    if name is not None:
        props['name'] = name
    return {
        'type': 'Feature',
        'properties': props,
        'geometry': {'type': geometry_type, 'coordinates': coordinates},
    }


def make_collection(*features):
    return {'type': 'FeatureCollection', 'features': list(features)}


class MemoryStore:
    """In-memory stand-in for SqliteEntityStore"""

    def __init__(self, rows=None):
        self.rows = list(rows or [])

    def find_by_key(self, campus_id, name_key):
        for row in self.rows:
            if row['campus_id'] == campus_id and row['name_key'] == name_key:
                return row
        return None

    def slug_exists(self, campus_id, slug):
        return any(r['campus_id'] == campus_id and r.get('slug') == slug for r in self.rows)

    def create(self, record):
        row = dict(record, id=f"mem-{len(self.rows) + 1}")
        self.rows.append(row)
        return row

    def list_names(self, campus_id):
        return [{'id': r['id'], 'name': r['name']} for r in self.rows if r['campus_id'] == campus_id]
