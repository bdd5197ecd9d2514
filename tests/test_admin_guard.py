"""
tests.test_admin_guard

Behavior of the admin-only authorization stage.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Request
from starlette.responses import Response

from orderdesk.middleware.admin import AdminAccessMiddleware


def _app(resolver, *, protected_prefixes=None) -> FastAPI:
    app = FastAPI()
    app.state.downstream_calls = 0
    app.add_middleware(
        AdminAccessMiddleware, resolver=resolver, protected_prefixes=protected_prefixes
    )

    async def handler(request: Request) -> Response:
        request.app.state.downstream_calls += 1
        identity = getattr(request.state, "identity", None)
        subject = identity.subject if identity is not None else "-"
        return Response(
            f"handled by {subject}".encode(),
            status_code=202,
            media_type="text/plain",
            headers={"x-handler": "yes"},
        )

    app.add_api_route("/{rest:path}", handler, methods=["GET", "POST"])
    return app


@pytest.mark.asyncio
async def test_anonymous_request_gets_401(client_for, stub_resolver) -> None:
    app = _app(stub_resolver(None))
    async with client_for(app) as client:
        r = await client.get("/api/admin/users")

    assert r.status_code == 401
    assert r.json() == {"message": "Unauthenticated.", "status_code": 401}
    assert app.state.downstream_calls == 0


@pytest.mark.asyncio
async def test_non_admin_gets_403(client_for, stub_resolver, staff) -> None:
    app = _app(stub_resolver(staff))
    async with client_for(app) as client:
        r = await client.post("/api/admin/users")

    assert r.status_code == 403
    assert r.json() == {
        "message": "Forbidden. Admin access required.",
        "error": "You must be an admin to access this resource",
        "status_code": 403,
    }
    assert app.state.downstream_calls == 0


@pytest.mark.asyncio
async def test_admin_reaches_handler_once(client_for, stub_resolver, admin) -> None:
    resolver = stub_resolver(admin)
    app = _app(resolver)
    async with client_for(app) as client:
        r = await client.get("/api/admin/users")

    assert app.state.downstream_calls == 1
    assert resolver.calls == 1
    assert r.status_code == 202
    assert r.text == "handled by admin@example.com"
    assert r.headers["x-handler"] == "yes"


@pytest.mark.asyncio
async def test_unprotected_paths_skip_lookup(client_for, stub_resolver) -> None:
    resolver = stub_resolver(None)
    app = _app(resolver, protected_prefixes=["api/admin/"])
    async with client_for(app) as client:
        r = await client.get("/api/orders")
        assert r.status_code == 202
        assert r.text == "handled by -"

        r = await client.get("/api/admin/orders")
        assert r.status_code == 401

    assert resolver.calls == 1
    assert app.state.downstream_calls == 1


@pytest.mark.asyncio
async def test_resolver_failures_propagate(client_for) -> None:
    class BrokenResolver:
        async def resolve(self, request: Request):
            raise RuntimeError("session store unavailable")

    app = _app(BrokenResolver())
    async with client_for(app) as client:
        with pytest.raises(RuntimeError, match="session store unavailable"):
            await client.get("/api/admin/users")

    assert app.state.downstream_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "guarded"),
    [
        ("/api/admin", True),
        ("/api/admin/", True),
        ("/api/admin/users", True),
        ("/api/adminx", False),
        ("/api/administrators", False),
    ],
)
async def test_protected_prefix_boundaries(
    client_for, stub_resolver, path: str, guarded: bool
) -> None:
    app = _app(stub_resolver(None), protected_prefixes=["api/admin/"])
    async with client_for(app) as client:
        r = await client.get(path)

    if guarded:
        assert r.status_code == 401
        assert app.state.downstream_calls == 0
    else:
        assert r.status_code == 202
        assert app.state.downstream_calls == 1
