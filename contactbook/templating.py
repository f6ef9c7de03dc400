from __future__ import annotations

import os
from functools import lru_cache

from fastapi.templating import Jinja2Templates

from .config import read_config

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

templates = Jinja2Templates(directory=TEMPLATE_DIR)


@lru_cache(maxsize=1)
def default_page_size() -> int:
    return int(read_config()["page_size"])
