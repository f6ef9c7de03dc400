import pytest

from contactbook.models import Person, validate_form


def _data(**kw):
    base = {"name": "Adam", "surname": "Smith", "email": "adam.smith@email.com", "avatar_id": "2"}
    base.update(kw)
    return base


def test_valid_form_converts_to_person():
    form, errors = validate_form(_data())
    assert errors == []
    assert form.to_person(5) == Person(id=5, name="Adam", surname="Smith", email="adam.smith@email.com", avatar_id=2)


def test_blank_avatar_is_optional():
    form, errors = validate_form(_data(avatar_id=""))
    assert errors == []
    assert form.avatar_id is None


def test_values_are_trimmed():
    form, _ = validate_form(_data(name="  Adam  "))
    assert form.name == "Adam"


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("name", "", "Name shouldn't be empty"),
        ("name", "A", "Name should be between 2 and 30 characters"),
        ("name", "A" * 31, "Name should be between 2 and 30 characters"),
        ("surname", "   ", "Surname shouldn't be empty"),
        ("surname", "S", "Surname should be between 2 and 30 characters"),
        ("email", "", "Email shouldn't be empty"),
        ("email", "not-an-email", "Email should be valid"),
        ("email", "a" * 45 + "@email.com", "Email should be valid"),
        ("avatar_id", "5", "Avatar should be between 1 and 4"),
        ("avatar_id", "x", "Avatar should be between 1 and 4"),
    ],
)
def test_field_messages(field, value, message):
    form, errors = validate_form(_data(**{field: value}))
    assert form is None
    assert errors == [message]


def test_all_errors_are_reported_together():
    _, errors = validate_form({"name": "", "surname": "", "email": "", "avatar_id": None})
    assert errors == ["Name shouldn't be empty", "Surname shouldn't be empty", "Email shouldn't be empty"]


def test_missing_fields_are_reported():
    _, errors = validate_form({})
    assert "Name shouldn't be empty" in errors
    assert "Email shouldn't be empty" in errors
