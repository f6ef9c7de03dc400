import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "contactbook_test.db"
    # Point the app at this temp DB
    os.environ["CONTACTBOOK_DB_PATH"] = str(path)
    from contactbook.logs import ensure_log_schema
    from contactbook.services.person_svc import ensure_person_schema
    ensure_log_schema()
    ensure_person_schema(seed=False)
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    # No `with` block: startup hooks (seeding) stay off unless a test asks for them
    from contactbook.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: only ever wipe the temp DB, never a real one
    assert os.environ.get("CONTACTBOOK_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("person", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def insert_person(tmp_db_path):
    """Insert a row with an explicit id straight through SQL, bypassing the repository."""
    def _insert(person_id, name, surname, email=None, avatar_id=None):
        email = email or f"{name.lower()}.{surname.lower()}@email.com"
        conn = sqlite3.connect(tmp_db_path)
        try:
            conn.execute(
                "INSERT INTO person(id, name, surname, email, avatar_id) VALUES(?,?,?,?,?)",
                (person_id, name, surname, email, avatar_id),
            )
            conn.commit()
        finally:
            conn.close()
    return _insert
