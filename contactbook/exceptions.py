"""Domain errors raised by the person repository."""

from __future__ import annotations


class ContactBookError(Exception):
    """Base class for contact book errors."""


class PersonNotFoundError(ContactBookError, LookupError):
    def __init__(self, person_id: int) -> None:
        super().__init__(f"Person with id {person_id} not found.")
        self.person_id = person_id


class PersonAlreadyExistsError(ContactBookError, ValueError):
    def __init__(self, person_id: int) -> None:
        super().__init__(f"Person with id {person_id} already exists.")
        self.person_id = person_id


class InvalidSortParameterError(ContactBookError, ValueError):
    """Sort key outside the allowed column set."""

    def __init__(self, sort: str) -> None:
        super().__init__(f"Invalid sort parameter: {sort}")
        self.sort = sort
