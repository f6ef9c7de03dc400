"""
FastAPI app entry point aggregating the routers under contactbook/routes.
Run with `uvicorn contactbook.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI

from . import __version__
from .config import read_config
from .logs import ensure_log_schema, LogContext
from .middleware import MethodOverrideMiddleware
from .services.person_svc import ensure_person_schema

logger = logging.getLogger(__name__)

app = FastAPI(title="contactbook", version=__version__)

app.add_middleware(MethodOverrideMiddleware)


@app.on_event("startup")
def on_startup():
    ensure_log_schema()
    cfg = read_config()
    try:
        seeded = ensure_person_schema(seed=cfg["seed_on_startup"])
    except Exception as e:
        LogContext("STARTUP").write("ERROR", f"ensure_person_schema_failed: {e}")
        raise
    if seeded:
        log = LogContext("SEED_PEOPLE")
        log.set_after({"seeded": seeded})
        log.write("OK")


# Include routers
from .routes import base as base_routes
from .routes import home as home_routes
from .routes import people as people_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(home_routes.router)
app.include_router(people_routes.router)
app.include_router(logs_routes.router)
