"""
Pytest configuration and shared fixtures for the Campus Map API tests
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from services import db
from helpers import MemoryStore


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def always_active():
    """Campus lookup that accepts every campus id"""
    return lambda campus_id: True


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point services.db at a fresh sqlite file for the duration of the test"""
    monkeypatch.setattr(db, 'DB_PATH', tmp_path / 'campus.db')
    db.init_db()
    return db.DB_PATH


@pytest.fixture
def campus(temp_db):
    return db.insert_campus('Main Campus', 'main-campus', description='Test campus')


@pytest.fixture
def inactive_campus(temp_db):
    return db.insert_campus('Old Campus', 'old-campus', is_active=False)


@pytest.fixture
def client(temp_db):
    from fastapi.testclient import TestClient
    from app import app
    with TestClient(app) as c:
        yield c
