"""
orderdesk.api.routers.auth

Current-identity endpoint.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from orderdesk.auth.deps import get_principal
from orderdesk.auth.models import Identity, Principal

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me")
async def me(identity: Identity = Depends(get_principal)) -> dict[str, Any]:
    body: dict[str, Any] = {"is_admin": identity.is_admin}
    if isinstance(identity, Principal):
        body["subject"] = identity.subject
        body["roles"] = sorted(identity.roles)
    return body
