"""
orderdesk.auth.resolver

Identity resolvers.

Responsibilities:
- Define the `IdentityResolver` capability injected into the admin guard.
- Resolve bearer tokens into `Principal` instances.

A resolver answers "who is calling?" for a single request. Returning `None`
means the request is unauthenticated; it is not an error. Anything a resolver
raises (e.g. a backing store being down) propagates to the caller untouched.
"""

from __future__ import annotations

from typing import Any, Protocol

from starlette.requests import Request

from orderdesk.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from orderdesk.auth.models import Identity, Principal
from orderdesk.observability.logging import get_logger

log = get_logger(__name__)


class IdentityResolver(Protocol):
    async def resolve(self, request: Request) -> Identity | None: ...


def principal_from_claims(claims: dict[str, Any]) -> Principal | None:
    subject = str(claims.get("sub", ""))
    roles_raw = claims.get("roles", [])
    if not subject or not isinstance(roles_raw, list):
        return None
    return Principal(subject=subject, roles=frozenset(str(r) for r in roles_raw))


class BearerTokenResolver:
    """
    Resolves `Authorization: Bearer <jwt>` into a `Principal`.
    """

    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    async def resolve(self, request: Request) -> Principal | None:
        scheme, _, token = request.headers.get("authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None

        try:
            claims = decode_and_validate(cfg=self._cfg, token=token.strip())
        except JwtValidationError as e:
            log.info("auth.invalid_token", error=str(e))
            return None

        principal = principal_from_claims(claims)
        if principal is None:
            log.info("auth.invalid_claims")
        return principal
