"""
orderdesk.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Expose the app-wide identity resolver to endpoints.
- Convert the current request into a typed `Principal` (or 401).
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED

from orderdesk.auth.models import Identity
from orderdesk.auth.resolver import IdentityResolver


def get_identity_resolver(request: Request) -> IdentityResolver:
    # Installed on app startup in `orderdesk.api.app.create_app`.
    return request.app.state.identity_resolver  # type: ignore[attr-defined]


async def get_principal(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    # The admin guard may already have resolved the caller for this request.
    identity = getattr(request.state, "identity", None)
    if identity is None:
        identity = await resolver.resolve(request)
    if identity is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unauthenticated.")
    return identity


# --- Module Notes -----------------------------------------------------------
# A 401 raised here is rendered as the standard API error body by
# `orderdesk.api.errors` for `api/*` routes.
