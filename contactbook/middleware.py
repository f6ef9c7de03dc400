"""HTML forms only send GET/POST; let a POST carry `?_method=PATCH|PUT|DELETE`."""

from __future__ import annotations

from urllib.parse import parse_qs

OVERRIDABLE = {"PATCH", "PUT", "DELETE"}


class MethodOverrideMiddleware:
    """Pure ASGI middleware rewriting the request method before routing."""

    def __init__(self, app, param: str = "_method"):
        self.app = app
        self.param = param

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["method"] == "POST":
            qs = parse_qs(scope.get("query_string", b"").decode("latin-1"))
            wanted = (qs.get(self.param) or [""])[0].upper()
            if wanted in OVERRIDABLE:
                scope = dict(scope)
                scope["method"] = wanted
        await self.app(scope, receive, send)
