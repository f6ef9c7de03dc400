from __future__ import annotations

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN, NAME_MAX = 2, 30
EMAIL_MAX = 50
AVATAR_MIN, AVATAR_MAX = 1, 4


class Person(BaseModel):
    """A contact row. `id` is None until the store assigns one."""

    id: Optional[int] = None
    name: str
    surname: str
    email: str
    avatar_id: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> "Person":
        return cls(
            id=row["id"],
            name=row["name"],
            surname=row["surname"],
            email=row["email"],
            avatar_id=row["avatar_id"],
        )


def _bad(msg: str) -> PydanticCustomError:
    return PydanticCustomError("person_form", msg)


def _check_length(v: Any, label: str) -> str:
    s = "" if v is None else str(v).strip()
    if not s:
        raise _bad(f"{label} shouldn't be empty")
    if not (NAME_MIN <= len(s) <= NAME_MAX):
        raise _bad(f"{label} should be between {NAME_MIN} and {NAME_MAX} characters")
    return s


class PersonForm(BaseModel):
    """Create/edit form payload with the user facing validation messages."""

    model_config = ConfigDict(validate_default=True)

    name: str = ""
    surname: str = ""
    email: str = ""
    avatar_id: Optional[int] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return _check_length(v, "Name")

    @field_validator("surname", mode="before")
    @classmethod
    def check_surname(cls, v):
        return _check_length(v, "Surname")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        s = "" if v is None else str(v).strip()
        if not s:
            raise _bad("Email shouldn't be empty")
        if len(s) > EMAIL_MAX:
            raise _bad("Email should be valid")
        try:
            validate_email(s, check_deliverability=False)
        except EmailNotValidError:
            raise _bad("Email should be valid")
        return s

    @field_validator("avatar_id", mode="before")
    @classmethod
    def check_avatar(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            n = int(v)
        except (TypeError, ValueError):
            raise _bad(f"Avatar should be between {AVATAR_MIN} and {AVATAR_MAX}")
        if not (AVATAR_MIN <= n <= AVATAR_MAX):
            raise _bad(f"Avatar should be between {AVATAR_MIN} and {AVATAR_MAX}")
        return n

    def to_person(self, person_id: int | None = None) -> Person:
        return Person(
            id=person_id,
            name=self.name,
            surname=self.surname,
            email=self.email,
            avatar_id=self.avatar_id,
        )


def validate_form(data: dict) -> tuple[PersonForm | None, list[str]]:
    """Return (form, []) on success, or (None, messages) in field order."""
    try:
        return PersonForm(**data), []
    except ValidationError as e:
        return None, [err["msg"] for err in e.errors()]
