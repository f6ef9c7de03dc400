"""
Fill the person table with a batch of generated contacts.

With --reset every existing person is deleted first.

Usage:
  python -m contactbook.scripts.seed_people [--reset]
"""
from __future__ import annotations

import argparse
import logging

from contactbook.logs import LogContext, ensure_log_schema
from contactbook.services.person_svc import (
    count_people,
    create_random_people,
    delete_all_people,
    ensure_person_schema,
)


def main(argv: list[str] | None = None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--reset", action="store_true", help="delete all people before generating")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ensure_log_schema()
    ensure_person_schema(seed=False)

    with LogContext("SEED_PEOPLE") as log:
        log.set_payload({"reset": args.reset})
        removed = delete_all_people() if args.reset else 0
        created = create_random_people(log=log)

    res = {"message": "ok", "removed": removed, "created": len(created), "total": count_people()}
    print(res)
    return res


if __name__ == "__main__":
    main()
