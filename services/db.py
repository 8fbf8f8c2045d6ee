from pathlib import Path
from config import CAMPUS_DB_PATH
import sqlite3
import json
import uuid
import datetime
from typing import Optional

DB_PATH = Path(CAMPUS_DB_PATH)

_COMMON_COLUMNS = '''
            id TEXT PRIMARY KEY,
            campus_id TEXT NOT NULL REFERENCES campuses(id),
            name TEXT NOT NULL,
            name_key TEXT NOT NULL,
            slug TEXT NOT NULL,
            description TEXT,
            geometry TEXT NOT NULL,
            is_active INTEGER DEFAULT 1,
            created_at TEXT,'''

# Kind-specific columns on top of the common ones, per entity table
ENTITY_COLUMNS = {
    'buildings': {'height': 'REAL', 'floors': 'INTEGER', 'fid': 'TEXT'},
    'open_spaces': {'open_space_type': 'TEXT', 'capacity': 'INTEGER', 'is_reservable': 'INTEGER DEFAULT 0'},
    'pois': {'category': 'TEXT', 'building_id': 'TEXT', 'open_space_id': 'TEXT'},
    'paths': {'path_type': 'TEXT', 'fid': 'TEXT'},
    'boundaries': {'boundary_type': 'TEXT'},
}

_BASE_FIELDS = ('campus_id', 'name', 'name_key', 'slug', 'description', 'geometry', 'is_active')
_BOOL_FIELDS = ('is_active', 'is_reservable')


def init_db():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    try:
        cur = conn.cursor()
        cur.execute('''
        CREATE TABLE IF NOT EXISTS campuses (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            slug TEXT NOT NULL UNIQUE,
            description TEXT,
            is_active INTEGER DEFAULT 1,
            created_at TEXT
        )''')

        for table, extra in ENTITY_COLUMNS.items():
            extra_sql = ''.join(f'\n            {col} {typ},' for col, typ in extra.items())
            cur.execute(f'''
            CREATE TABLE IF NOT EXISTS {table} ({_COMMON_COLUMNS}{extra_sql}
                UNIQUE(campus_id, slug)
            )''')
            cur.execute(f'CREATE INDEX IF NOT EXISTS idx_{table}_name_key ON {table}(campus_id, name_key)')

        conn.commit()
    finally:
        conn.close()


def _connect():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row
    return conn


def _now():
    return datetime.datetime.now(datetime.timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def _check_table(table: str):
    if table not in ENTITY_COLUMNS:
        raise ValueError(f'Unknown entity table: {table}')


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so `text` matches literally (used with ESCAPE '\\')."""
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _row_to_dict(row):
    d = dict(row)
    if 'geometry' in d:
        try:
            d['geometry'] = json.loads(d['geometry']) if d.get('geometry') else None
        except ValueError:
            d['geometry'] = d.get('geometry')
    for field in _BOOL_FIELDS:
        if field in d:
            d[field] = bool(d.get(field))
    return d


# --------- Campuses ---------

def insert_campus(name: str, slug: str, description: str = None, is_active: bool = True):
    campus_id = str(uuid.uuid4())
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute('''
        INSERT INTO campuses(id, name, slug, description, is_active, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        ''', (campus_id, name, slug, description, 1 if is_active else 0, _now()))
        conn.commit()
    finally:
        conn.close()
    return get_campus(campus_id)


def get_campus(campus_id: str):
    if not campus_id:
        return None
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute('SELECT * FROM campuses WHERE id = ?', (campus_id,))
        row = cur.fetchone()
        if not row:
            return None
        return _row_to_dict(row)
    finally:
        conn.close()


def list_campuses(active_only: bool = False, limit: int = 100):
    conn = _connect()
    try:
        cur = conn.cursor()
        q = 'SELECT * FROM campuses'
        params = []
        if active_only:
            q += ' WHERE is_active = 1'
        q += ' ORDER BY name ASC LIMIT ?'
        params.append(limit)
        cur.execute(q, tuple(params))
        return [_row_to_dict(r) for r in cur.fetchall()]
    finally:
        conn.close()


def campus_is_active(campus_id: str) -> bool:
    campus = get_campus(campus_id)
    return bool(campus and campus.get('is_active'))


def campus_slug_exists(slug: str) -> bool:
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute('SELECT 1 FROM campuses WHERE slug = ? LIMIT 1', (slug,))
        return cur.fetchone() is not None
    finally:
        conn.close()


# --------- Map entities (buildings, open spaces, POIs, paths, boundaries) ---------

def insert_entity(table: str, record: dict):
    """Insert one map entity row and return it as a dict.

    `record` must carry the common fields (campus_id, name, name_key, slug,
    geometry as JSON text); kind-specific keys not declared for `table` are
    rejected. sqlite3 errors propagate to the caller.
    """
    _check_table(table)
    allowed = set(_BASE_FIELDS) | set(ENTITY_COLUMNS[table])
    unknown = set(record) - allowed
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {', '.join(sorted(unknown))}")

    values = dict(record)
    values['id'] = str(uuid.uuid4())
    values['created_at'] = _now()
    for field in _BOOL_FIELDS:
        if field in values:
            values[field] = 1 if values[field] else 0
    columns = list(values)
    placeholders = ', '.join('?' for _ in columns)

    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute(
            f"INSERT INTO {table}({', '.join(columns)}) VALUES ({placeholders})",
            tuple(values[c] for c in columns),
        )
        conn.commit()
    finally:
        conn.close()
    return get_entity(table, values['id'])


def get_entity(table: str, entity_id: str):
    _check_table(table)
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute(f'SELECT * FROM {table} WHERE id = ?', (entity_id,))
        row = cur.fetchone()
        if not row:
            return None
        return _row_to_dict(row)
    finally:
        conn.close()


def find_entity_by_key(table: str, campus_id: str, name_key: str):
    _check_table(table)
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute(f'SELECT * FROM {table} WHERE campus_id = ? AND name_key = ? LIMIT 1', (campus_id, name_key))
        row = cur.fetchone()
        if not row:
            return None
        return _row_to_dict(row)
    finally:
        conn.close()


def entity_slug_exists(table: str, campus_id: str, slug: str) -> bool:
    _check_table(table)
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute(f'SELECT 1 FROM {table} WHERE campus_id = ? AND slug = ? LIMIT 1', (campus_id, slug))
        return cur.fetchone() is not None
    finally:
        conn.close()


def list_entity_names(table: str, campus_id: str):
    """Return [{'id', 'name'}] for every entity of `table` in the campus."""
    _check_table(table)
    conn = _connect()
    try:
        cur = conn.cursor()
        cur.execute(f'SELECT id, name FROM {table} WHERE campus_id = ? ORDER BY created_at ASC', (campus_id,))
        return [dict(r) for r in cur.fetchall()]
    finally:
        conn.close()


def list_entities(table: str, campus_id: str = None, search: str = None,
                  limit: int = 12, offset: int = 0, active_only: bool = False):
    """Paginated listing. Returns (rows, total) where total ignores limit/offset."""
    _check_table(table)
    conn = _connect()
    try:
        cur = conn.cursor()
        clauses = []
        params = []
        if campus_id:
            clauses.append('campus_id = ?')
            params.append(campus_id)
        if search:
            clauses.append("name_key LIKE ? ESCAPE '\\'")
            params.append(f'%{_escape_like(search.casefold())}%')
        if active_only:
            clauses.append('is_active = 1')
        where = (' WHERE ' + ' AND '.join(clauses)) if clauses else ''

        cur.execute(f'SELECT COUNT(*) FROM {table}{where}', tuple(params))
        total = cur.fetchone()[0]

        cur.execute(f'SELECT * FROM {table}{where} ORDER BY name ASC LIMIT ? OFFSET ?',
                    tuple(params) + (limit, offset))
        rows = [_row_to_dict(r) for r in cur.fetchall()]
        return rows, total
    finally:
        conn.close()
