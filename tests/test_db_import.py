"""
Integration tests: import pipeline against a real (temporary) sqlite database
"""

import json
import pytest

from services import db
from services.importer import (
    BuildingAdapter,
    CampusNotFoundError,
    ImportReconciler,
    OpenSpaceAdapter,
    POIAdapter,
    PersistenceError,
    import_features,
)
from services.importer.stores import SqliteEntityStore
from helpers import OTHER_SQUARE, make_collection, make_feature


class TestSqliteImport:

    def test_import_is_idempotent(self, campus):
        fc = make_collection(make_feature('Library', height=20), make_feature('Chapel'))

        first = import_features(BuildingAdapter(), fc, campus['id'])
        second = import_features(BuildingAdapter(), json.dumps(fc).encode('utf-8'), campus['id'])

        assert first.imported == 2
        assert second.imported == 0
        assert second.duplicates == second.total == 2
        rows, total = db.list_entities('buildings', campus_id=campus['id'])
        assert total == 2
        library = next(r for r in rows if r['name'] == 'Library')
        assert library['height'] == 20.0
        assert library['geometry']['type'] == 'Polygon'
        assert library['is_active'] is True

    def test_duplicate_check_is_case_insensitive(self, campus):
        import_features(BuildingAdapter(), make_collection(make_feature('Student Union')), campus['id'])
        result = import_features(
            BuildingAdapter(), make_collection(make_feature('STUDENT UNION', coordinates=OTHER_SQUARE)), campus['id'])
        assert result.duplicates == 1

    def test_duplicates_are_scoped_to_campus(self, campus):
        other = db.insert_campus('North Campus', 'north-campus')
        fc = make_collection(make_feature('Gym'))
        import_features(BuildingAdapter(), fc, campus['id'])
        result = import_features(BuildingAdapter(), fc, other['id'])
        assert result.imported == 1
        assert db.get_entity('buildings', 'missing') is None

    def test_inactive_campus_rejected(self, inactive_campus):
        with pytest.raises(CampusNotFoundError):
            import_features(BuildingAdapter(), make_collection(make_feature('Gym')), inactive_campus['id'])
        assert db.list_entities('buildings')[1] == 0

    def test_unknown_campus_rejected(self, temp_db):
        with pytest.raises(CampusNotFoundError):
            import_features(BuildingAdapter(), make_collection(make_feature('Gym')), 'no-such-campus')

    def test_poi_linked_to_imported_building(self, campus):
        import_features(BuildingAdapter(), make_collection(make_feature('Science Library')), campus['id'])
        import_features(OpenSpaceAdapter(), make_collection(make_feature('Botanical Garden')), campus['id'])
        pois = make_collection(
            make_feature('Science Library Entrance', geometry_type='Point'),
            make_feature('Botanical Garden Gate', geometry_type='Point'),
        )
        result = import_features(POIAdapter(), pois, campus['id'])
        assert result.imported == 2

        rows, _ = db.list_entities('pois', campus_id=campus['id'])
        by_name = {r['name']: r for r in rows}
        building = db.find_entity_by_key('buildings', campus['id'], 'science library')
        garden = db.find_entity_by_key('open_spaces', campus['id'], 'botanical garden')
        assert by_name['Science Library Entrance']['building_id'] == building['id']
        assert by_name['Botanical Garden Gate']['open_space_id'] == garden['id']

    def test_sqlite_failure_becomes_feature_error(self, campus, monkeypatch):
        import sqlite3

        def broken_insert(table, record):
            raise sqlite3.OperationalError('database is locked')

        monkeypatch.setattr(db, 'insert_entity', broken_insert)
        reconciler = ImportReconciler(BuildingAdapter(store=SqliteEntityStore('buildings')))
        result = reconciler.run(make_collection(make_feature('Annex')), campus['id'])

        assert result.errors == 1
        assert result.details.errors[0].name == 'Annex'
        assert 'database is locked' in result.details.errors[0].error


class TestDbHelpers:

    def test_list_entities_paginates_and_searches(self, campus):
        names = ['Alpha Hall', 'Beta Hall', 'Gamma Lab']
        import_features(BuildingAdapter(), make_collection(*[make_feature(n) for n in names]), campus['id'])

        rows, total = db.list_entities('buildings', campus_id=campus['id'], limit=2, offset=0)
        assert total == 3
        assert [r['name'] for r in rows] == ['Alpha Hall', 'Beta Hall']

        rows, total = db.list_entities('buildings', campus_id=campus['id'], search='HALL')
        assert total == 2

    def test_insert_entity_rejects_unknown_columns(self, campus):
        with pytest.raises(ValueError):
            db.insert_entity('paths', {'campus_id': campus['id'], 'name': 'x', 'name_key': 'x',
                                       'slug': 'x', 'geometry': '{}', 'height': 3})

    def test_unknown_table_rejected(self, temp_db):
        with pytest.raises(ValueError):
            SqliteEntityStore('parking_lots')
        with pytest.raises(ValueError):
            db.list_entities('users; DROP TABLE campuses')

    def test_campus_is_active(self, campus, inactive_campus):
        assert db.campus_is_active(campus['id'])
        assert not db.campus_is_active(inactive_campus['id'])
        assert not db.campus_is_active(None)


class TestOutOfRangeValues:

    def test_huge_floors_imported_without_value(self, campus):
        fc = make_collection(make_feature('Gym'), make_feature('Tower', floors=1e30), make_feature('Hall'))
        result = import_features(BuildingAdapter(), fc, campus['id'])

        assert result.details.imported == ['Gym', 'Tower', 'Hall']
        tower = db.find_entity_by_key('buildings', campus['id'], 'tower')
        assert tower['floors'] is None
        assert tower['created_at'].endswith('Z')

    def test_unbindable_int_becomes_persistence_error(self, campus):
        store = SqliteEntityStore('buildings')
        record = {'campus_id': campus['id'], 'name': 'Tower', 'name_key': 'tower', 'slug': 'tower',
                  'geometry': '{}', 'floors': 10 ** 30}
        with pytest.raises(PersistenceError) as exc:
            store.create(record)
        assert exc.value.name == 'Tower'

    def test_search_treats_wildcards_literally(self, campus):
        names = ['100% Hall', 'Main_Hall', 'Mainx Hall']
        import_features(BuildingAdapter(), make_collection(*[make_feature(n) for n in names]), campus['id'])

        rows, total = db.list_entities('buildings', campus_id=campus['id'], search='%')
        assert [r['name'] for r in rows] == ['100% Hall']
        rows, total = db.list_entities('buildings', campus_id=campus['id'], search='main_')
        assert total == 1 and rows[0]['name'] == 'Main_Hall'
