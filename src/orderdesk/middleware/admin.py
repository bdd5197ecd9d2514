"""
orderdesk.middleware.admin

Admin-only authorization for protected routes.

Responsibilities:
- Resolve the caller through an injected `IdentityResolver`.
- Short-circuit with the standard 401/403 JSON bodies when the caller is
  anonymous or not an admin.
- Forward admin requests unchanged, exposing the identity on `request.state`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN
from starlette.types import ASGIApp

from orderdesk.auth.resolver import IdentityResolver
from orderdesk.middleware.paths import path_matches_any
from orderdesk.observability.logging import get_logger

log = get_logger(__name__)

# Clients depend on these exact shapes.
UNAUTHENTICATED_BODY: dict[str, Any] = {
    "message": "Unauthenticated.",
    "status_code": HTTP_401_UNAUTHORIZED,
}
FORBIDDEN_BODY: dict[str, Any] = {
    "message": "Forbidden. Admin access required.",
    "error": "You must be an admin to access this resource",
    "status_code": HTTP_403_FORBIDDEN,
}


class AdminAccessMiddleware(BaseHTTPMiddleware):
    """
    With `protected_prefixes=None` every request passing through is guarded.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        resolver: IdentityResolver,
        protected_prefixes: Sequence[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.resolver = resolver
        self.protected_prefixes = None if protected_prefixes is None else tuple(protected_prefixes)

    def is_protected(self, request: Request) -> bool:
        if self.protected_prefixes is None:
            return True
        return path_matches_any(request.url.path, self.protected_prefixes, include_root=True)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.is_protected(request):
            return await call_next(request)

        identity = await self.resolver.resolve(request)
        if identity is None:
            log.info("admin_guard.denied", reason="unauthenticated")
            return JSONResponse(dict(UNAUTHENTICATED_BODY), status_code=HTTP_401_UNAUTHORIZED)

        if not identity.is_admin:
            log.info("admin_guard.denied", reason="not_admin")
            return JSONResponse(dict(FORBIDDEN_BODY), status_code=HTTP_403_FORBIDDEN)

        request.state.identity = identity
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# The guard runs before routing: an unknown path under a protected prefix
# answers 401/403 to non-admins rather than the API 404 body.
