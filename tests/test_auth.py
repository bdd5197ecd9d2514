"""
tests.test_auth

JWT helpers and the bearer-token identity resolver.
"""

from __future__ import annotations

from datetime import timedelta

import jwt as pyjwt
import pytest
from starlette.requests import Request

from orderdesk.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from orderdesk.auth.models import Principal
from orderdesk.auth.resolver import BearerTokenResolver, principal_from_claims


def _request(authorization: str | None = None) -> Request:
    headers = [] if authorization is None else [(b"authorization", authorization.encode())]
    return Request({"type": "http", "method": "GET", "path": "/api/x", "headers": headers})


def test_issue_and_decode_round_trip(jwt_cfg: JwtConfig) -> None:
    token = issue_token(cfg=jwt_cfg, subject="u1", roles=["admin"])

    claims = decode_and_validate(cfg=jwt_cfg, token=token)

    assert claims["sub"] == "u1"
    assert claims["roles"] == ["admin"]
    assert claims["iss"] == jwt_cfg.issuer


def test_expired_token_rejected(jwt_cfg: JwtConfig) -> None:
    token = issue_token(cfg=jwt_cfg, subject="u1", roles=[], ttl=timedelta(minutes=-5))

    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=jwt_cfg, token=token)


def test_principal_from_claims() -> None:
    assert principal_from_claims({"sub": "u1", "roles": ["staff"]}) == Principal(
        subject="u1", roles=frozenset({"staff"})
    )
    assert principal_from_claims({"sub": "", "roles": []}) is None
    assert principal_from_claims({"sub": "u1", "roles": "admin"}) is None


@pytest.mark.asyncio
async def test_resolver_returns_principal(jwt_cfg: JwtConfig) -> None:
    token = issue_token(cfg=jwt_cfg, subject="u1", roles=["admin"])

    principal = await BearerTokenResolver(jwt_cfg).resolve(_request(f"Bearer {token}"))

    assert principal is not None
    assert principal.subject == "u1"
    assert principal.is_admin


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorization",
    [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwYXNz", "Bearer not-a-jwt"],
)
async def test_resolver_treats_bad_credentials_as_anonymous(
    jwt_cfg: JwtConfig, authorization: str | None
) -> None:
    assert await BearerTokenResolver(jwt_cfg).resolve(_request(authorization)) is None


@pytest.mark.asyncio
async def test_resolver_rejects_foreign_signature(jwt_cfg: JwtConfig) -> None:
    other = JwtConfig(
        alg=jwt_cfg.alg, issuer=jwt_cfg.issuer, audience=jwt_cfg.audience, secret="x" * 32
    )
    token = issue_token(cfg=other, subject="u1", roles=["admin"])

    assert await BearerTokenResolver(jwt_cfg).resolve(_request(f"Bearer {token}")) is None


@pytest.mark.asyncio
async def test_resolver_rejects_malformed_roles(jwt_cfg: JwtConfig) -> None:
    token = pyjwt.encode(
        {
            "iss": jwt_cfg.issuer,
            "aud": jwt_cfg.audience,
            "sub": "u1",
            "roles": "admin",
            "iat": 1,
            "exp": 4_102_444_800,
        },
        jwt_cfg.secret,
        algorithm=jwt_cfg.alg,
    )

    assert await BearerTokenResolver(jwt_cfg).resolve(_request(f"Bearer {token}")) is None
