from __future__ import annotations

# contactbook/services/generate_svc.py
import random
import re

from faker import Faker

from ..models import AVATAR_MAX, AVATAR_MIN, Person

EMAIL_DOMAIN = "email.com"
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def email_for(name: str, surname: str) -> str:
    """name.surname@email.com, lowercased, anything outside [a-z0-9] dropped."""
    local_name = _NON_ALNUM.sub("", name.lower()) or "user"
    local_surname = _NON_ALNUM.sub("", surname.lower()) or "contact"
    return f"{local_name}.{local_surname}@{EMAIL_DOMAIN}"


class PersonGenerator:
    """
    Produces synthetic contacts for seeding and bulk generation.

    Both sources of randomness are injectable so tests can pin the output:
    `faker` supplies first/last names, `rng` picks the avatar.
    """

    def __init__(self, faker: Faker | None = None, rng: random.Random | None = None):
        self.faker = faker if faker is not None else Faker()
        self.rng = rng if rng is not None else random.Random()

    def generate_random_person(self) -> Person:
        name = self.faker.first_name()
        surname = self.faker.last_name()
        return Person(
            name=name,
            surname=surname,
            email=email_for(name, surname),
            avatar_id=self.random_avatar_id(),
        )

    def random_avatar_id(self) -> int:
        return self.rng.randint(AVATAR_MIN, AVATAR_MAX)


_default_generator: PersonGenerator | None = None


def get_generator() -> PersonGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = PersonGenerator()
    return _default_generator
