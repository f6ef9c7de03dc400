from __future__ import annotations

from fastapi import APIRouter, Form, HTTPException, Path, Query, Request
from fastapi.responses import RedirectResponse

from ..exceptions import InvalidSortParameterError, PersonNotFoundError
from ..logs import LogContext
from ..models import validate_form
from ..services.person_svc import (
    count_pages,
    create_random_people,
    delete_all_people,
    delete_person,
    save_person,
    search,
    show_people_page,
    show_person,
    update_person,
)
from ..templating import default_page_size, templates

router = APIRouter(prefix="/people")

LIST_MODES = ("show", "edit", "delete")

# sqlite binds 64-bit signed ints; page * size must stay below that too
MAX_PAGE = 2**31 - 1
MAX_ID = 2**63 - 1


def _to_list() -> RedirectResponse:
    return RedirectResponse("/people", status_code=303)


def _listing(request: Request, mode: str, page: int, size: int | None, sort: str, reverse: bool):
    size = size or default_page_size()
    try:
        people = show_people_page(page, size, sort, reverse)
    except InvalidSortParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return templates.TemplateResponse(
        request,
        "people/list.html",
        {
            "people": people,
            "pages": count_pages(size),
            "page": page,
            "size": size,
            "sort": sort,
            "reverse": reverse,
            "mode": mode,
        },
    )


def _form_data(name: str, surname: str, email: str, avatar_id: str | None) -> dict:
    return {"name": name, "surname": surname, "email": email, "avatar_id": avatar_id}


@router.get("")
def get_people(
    request: Request,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    size: int | None = Query(None, ge=1, le=MAX_PAGE),
    sort: str = "id",
    reverse: bool = False,
):
    return _listing(request, "show", page, size, sort, reverse)


@router.get("/edit")
def edit_all(
    request: Request,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    size: int | None = Query(None, ge=1, le=MAX_PAGE),
    sort: str = "id",
    reverse: bool = False,
):
    return _listing(request, "edit", page, size, sort, reverse)


@router.get("/delete")
def get_deletable_people(
    request: Request,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    size: int | None = Query(None, ge=1, le=MAX_PAGE),
    sort: str = "id",
    reverse: bool = False,
):
    return _listing(request, "delete", page, size, sort, reverse)


@router.get("/create")
def new_person(request: Request):
    return templates.TemplateResponse(
        request, "people/form.html", {"person": _form_data("", "", "", None), "person_id": None, "errors": []}
    )


@router.post("")
def create(
    request: Request,
    name: str = Form(""),
    surname: str = Form(""),
    email: str = Form(""),
    avatar_id: str | None = Form(None),
):
    data = _form_data(name, surname, email, avatar_id)
    form, errors = validate_form(data)
    if errors:
        return templates.TemplateResponse(
            request, "people/form.html", {"person": data, "person_id": None, "errors": errors}, status_code=422
        )

    log = LogContext("CREATE_PERSON")
    log.set_payload(data)
    try:
        save_person(form.to_person(), log)
        log.write("OK")
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return _to_list()


@router.get("/search")
def search_people(request: Request, query: str = "", mode: str = "show"):
    """Listing of people whose "name surname" contains `query`; `mode` picks show/edit/delete actions."""
    return templates.TemplateResponse(
        request,
        "people/list.html",
        {
            "people": search(query),
            "pages": None,
            "query": query,
            "mode": mode if mode in LIST_MODES else "show",
        },
    )


@router.post("/generate")
def generate_random_people():
    log = LogContext("GENERATE_PEOPLE")
    try:
        create_random_people(log=log)
        log.write("OK")
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return _to_list()


@router.get("/deleteAll/confirm")
def confirm_delete_all(request: Request):
    return templates.TemplateResponse(request, "people/delete_all_confirm.html", {})


@router.delete("/deleteAll")
def delete_all():
    log = LogContext("DELETE_ALL_PEOPLE")
    try:
        delete_all_people(log)
        log.write("OK")
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return _to_list()


@router.get("/{person_id}")
def get_person(request: Request, person_id: int = Path(..., ge=-MAX_ID, le=MAX_ID)):
    try:
        person = show_person(person_id)
    except PersonNotFoundError:
        return _to_list()
    return templates.TemplateResponse(request, "people/detail.html", {"person": person})


@router.get("/{person_id}/edit")
def edit_one(request: Request, person_id: int = Path(..., ge=-MAX_ID, le=MAX_ID)):
    try:
        person = show_person(person_id)
    except PersonNotFoundError:
        return _to_list()
    return templates.TemplateResponse(
        request, "people/form.html", {"person": person.model_dump(), "person_id": person_id, "errors": []}
    )


@router.patch("/{person_id}")
def update(
    request: Request,
    person_id: int = Path(..., ge=-MAX_ID, le=MAX_ID),
    name: str = Form(""),
    surname: str = Form(""),
    email: str = Form(""),
    avatar_id: str | None = Form(None),
):
    data = _form_data(name, surname, email, avatar_id)
    form, errors = validate_form(data)
    if errors:
        return templates.TemplateResponse(
            request, "people/form.html", {"person": data, "person_id": person_id, "errors": errors}, status_code=422
        )

    log = LogContext("UPDATE_PERSON")
    log.set_payload(data)
    try:
        update_person(form.to_person(), person_id, log)
        log.write("OK")
    except PersonNotFoundError as e:
        log.set_person(person_id)
        log.write("ERROR", str(e))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return _to_list()


@router.get("/{person_id}/delete")
def get_deletable_person(request: Request, person_id: int = Path(..., ge=-MAX_ID, le=MAX_ID)):
    try:
        person = show_person(person_id)
    except PersonNotFoundError:
        return _to_list()
    return templates.TemplateResponse(request, "people/delete_confirm.html", {"person": person})


@router.delete("/{person_id}")
def delete(person_id: int = Path(..., ge=-MAX_ID, le=MAX_ID)):
    log = LogContext("DELETE_PERSON")
    try:
        delete_person(person_id, log)
        log.write("OK")
    except PersonNotFoundError as e:
        log.set_person(person_id)
        log.write("ERROR", str(e))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
    return _to_list()
