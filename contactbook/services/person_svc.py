from __future__ import annotations

# contactbook/services/person_svc.py
import logging

from ..db import get_conn
from ..logs import LogContext
from ..models import Person
from ..repository import person_repo
from .generate_svc import PersonGenerator, get_generator

logger = logging.getLogger(__name__)

BATCH_SIZE = 10


def ensure_person_schema(generator: PersonGenerator | None = None, seed: bool = True) -> int:
    """Create the person table; fill it with BATCH_SIZE generated rows when empty. Returns rows seeded."""
    with get_conn() as conn:
        person_repo.ensure_schema(conn)
        conn.commit()
        if not seed or person_repo.count(conn) > 0:
            return 0
        gen = generator or get_generator()
        for _ in range(BATCH_SIZE):
            person_repo.save(conn, gen.generate_random_person())
        conn.commit()
    logger.info("seeded empty person table with %d generated contacts", BATCH_SIZE)
    return BATCH_SIZE


def show_people() -> list[Person]:
    with get_conn() as conn:
        return person_repo.find_all(conn)


def show_people_page(page: int, size: int, sort: str = "id", reverse: bool = False) -> list[Person]:
    with get_conn() as conn:
        return person_repo.find_page(conn, page, size, sort, reverse)


def count_people() -> int:
    with get_conn() as conn:
        return person_repo.count(conn)


def count_pages(size: int) -> int:
    return person_repo.page_count(count_people(), size)


def show_person(person_id: int) -> Person:
    with get_conn() as conn:
        return person_repo.find_by_id(conn, person_id)


def save_person(person: Person, log: LogContext | None = None) -> int:
    with get_conn() as conn:
        new_id = person_repo.save(conn, person)
        conn.commit()
    if log is not None:
        log.set_person(new_id)
        log.set_after(person.model_copy(update={"id": new_id}))
    return new_id


def update_person(person: Person, person_id: int, log: LogContext | None = None):
    with get_conn() as conn:
        before = person_repo.find_by_id(conn, person_id) if log is not None else None
        person_repo.update(conn, person, person_id)
        conn.commit()
    if log is not None:
        log.set_person(person_id)
        log.set_before(before)
        log.set_after(person.model_copy(update={"id": person_id}))


def delete_person(person_id: int, log: LogContext | None = None):
    with get_conn() as conn:
        before = person_repo.find_by_id(conn, person_id) if log is not None else None
        person_repo.delete_by_id(conn, person_id)
        conn.commit()
    if log is not None:
        log.set_person(person_id)
        log.set_before(before)


def delete_all_people(log: LogContext | None = None) -> int:
    with get_conn() as conn:
        removed = person_repo.delete_all(conn)
        conn.commit()
    if log is not None:
        log.set_after({"deleted": removed})
    return removed


def search(query: str) -> list[Person]:
    with get_conn() as conn:
        return person_repo.search(conn, query)


def create_random_people(generator: PersonGenerator | None = None, log: LogContext | None = None) -> list[int]:
    """Generate and save BATCH_SIZE people one by one; stops at the first failure."""
    gen = generator or get_generator()
    created: list[int] = []
    for _ in range(BATCH_SIZE):
        created.append(save_person(gen.generate_random_person()))
    if log is not None:
        log.set_after({"created": created})
    logger.info("generated %d random people", len(created))
    return created
