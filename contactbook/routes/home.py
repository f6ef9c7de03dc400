from fastapi import APIRouter, Request

from ..templating import templates

router = APIRouter()


@router.get("/")
def welcome_page(request: Request):
    """Landing page linking to show / new / edit / delete."""
    return templates.TemplateResponse(request, "main/home.html", {})
