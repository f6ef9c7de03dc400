from __future__ import annotations

import math
import sqlite3
from sqlite3 import Connection

from ..exceptions import InvalidSortParameterError, PersonAlreadyExistsError, PersonNotFoundError
from ..models import Person

_COLUMNS = "id, name, surname, email, avatar_id"

# Sort keys accepted from callers -> fixed column names. Only these ever reach ORDER BY.
SORT_COLUMNS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "surname": "surname",
    "avatarId": "avatar_id",
    "avatar_id": "avatar_id",
}


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS person (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name VARCHAR(30) NOT NULL,
            surname VARCHAR(30) NOT NULL,
            email VARCHAR(50) NOT NULL,
            avatar_id INTEGER
        )
        """
    )


def sort_column(sort: str) -> str:
    col = SORT_COLUMNS.get(sort)
    if col is None:
        raise InvalidSortParameterError(sort)
    return col


def page_query(page: int, size: int, sort: str = "id", reverse: bool = False) -> tuple[str, tuple[int, int]]:
    """Build the ORDER BY/LIMIT select for one page. Validates `sort` first."""
    col = sort_column(sort)
    direction = "DESC" if reverse else "ASC"
    order = f"{col} {direction}" if col == "id" else f"{col} {direction}, id {direction}"
    sql = f"SELECT {_COLUMNS} FROM person ORDER BY {order} LIMIT ? OFFSET ?"
    return sql, (size, (page - 1) * size)


def page_count(total: int, size: int) -> int:
    return math.ceil(total / size) if size > 0 else 0


def find_all(conn: Connection) -> list[Person]:
    rows = conn.execute(f"SELECT {_COLUMNS} FROM person ORDER BY id").fetchall()
    return [Person.from_row(r) for r in rows]


def find_page(conn: Connection, page: int, size: int, sort: str = "id", reverse: bool = False) -> list[Person]:
    sql, params = page_query(page, size, sort, reverse)
    return [Person.from_row(r) for r in conn.execute(sql, params).fetchall()]


def count(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM person").fetchone()["c"])


def find_by_id(conn: Connection, person_id: int) -> Person:
    row = conn.execute(f"SELECT {_COLUMNS} FROM person WHERE id=?", (person_id,)).fetchone()
    if row is None:
        raise PersonNotFoundError(person_id)
    return Person.from_row(row)


def save(conn: Connection, person: Person) -> int:
    """Insert and return the row id. An explicit id that is taken raises PersonAlreadyExistsError."""
    if person.id is None:
        cur = conn.execute(
            "INSERT INTO person(name, surname, email, avatar_id) VALUES(?,?,?,?)",
            (person.name, person.surname, person.email, person.avatar_id),
        )
        return int(cur.lastrowid)
    try:
        conn.execute(
            "INSERT INTO person(id, name, surname, email, avatar_id) VALUES(?,?,?,?,?)",
            (person.id, person.name, person.surname, person.email, person.avatar_id),
        )
    except sqlite3.IntegrityError as e:
        if "UNIQUE" not in str(e):
            raise
        raise PersonAlreadyExistsError(person.id) from e
    return int(person.id)


def update(conn: Connection, person: Person, person_id: int):
    cur = conn.execute(
        "UPDATE person SET name=?, surname=?, email=?, avatar_id=? WHERE id=?",
        (person.name, person.surname, person.email, person.avatar_id, person_id),
    )
    if cur.rowcount == 0:
        raise PersonNotFoundError(person_id)


def delete_by_id(conn: Connection, person_id: int):
    cur = conn.execute("DELETE FROM person WHERE id=?", (person_id,))
    if cur.rowcount == 0:
        raise PersonNotFoundError(person_id)


def delete_all(conn: Connection) -> int:
    cur = conn.execute("DELETE FROM person")
    return max(cur.rowcount, 0)


def search(conn: Connection, query: str) -> list[Person]:
    """Substring match on "name surname". `%` and `_` in `query` keep their LIKE wildcard meaning."""
    rows = conn.execute(
        f"SELECT {_COLUMNS} FROM person WHERE (name || ' ' || surname) LIKE ? ORDER BY id",
        (f"%{query or ''}%",),
    ).fetchall()
    return [Person.from_row(r) for r in rows]
