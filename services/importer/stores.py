import logging
import sqlite3

from services import db
from services.importer.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqliteEntityStore:
    """Storage collaborator for one entity table, backed by services.db.

    Adapters only talk to a store through these methods, so tests can swap in
    any object that provides them:

    - find_by_key(campus_id, name_key) -> dict | None
    - slug_exists(campus_id, slug) -> bool
    - create(record) -> dict
    - list_names(campus_id) -> [{'id', 'name'}]

    sqlite errors surface as PersistenceError.
    """

    def __init__(self, table: str):
        if table not in db.ENTITY_COLUMNS:
            raise ValueError(f'Unknown entity table: {table}')
        self.table = table

    def __repr__(self):
        return f'SqliteEntityStore({self.table!r})'

    def find_by_key(self, campus_id: str, name_key: str):
        try:
            return db.find_entity_by_key(self.table, campus_id, name_key)
        except sqlite3.Error as e:
            raise PersistenceError(f'Lookup in {self.table} failed: {e}')

    def slug_exists(self, campus_id: str, slug: str) -> bool:
        try:
            return db.entity_slug_exists(self.table, campus_id, slug)
        except sqlite3.Error as e:
            raise PersistenceError(f'Slug check in {self.table} failed: {e}')

    def create(self, record: dict):
        try:
            row = db.insert_entity(self.table, record)
        except (sqlite3.Error, OverflowError) as e:
            raise PersistenceError(f'Insert into {self.table} failed: {e}', name=record.get('name'))
        logger.debug('Created %s row %s (%s)', self.table, row['id'], row['name'])
        return row

    def list_names(self, campus_id: str):
        try:
            return db.list_entity_names(self.table, campus_id)
        except sqlite3.Error as e:
            raise PersistenceError(f'Listing {self.table} failed: {e}')
