"""
orderdesk.api.app

FastAPI app factory for the Orderdesk service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Wire the identity resolver shared by the admin guard and route dependencies.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from fastapi import FastAPI

from orderdesk import __version__
from orderdesk.api.errors import register_error_handlers
from orderdesk.api.routers.auth import router as auth_router
from orderdesk.api.routers.dev_auth import router as dev_auth_router
from orderdesk.api.routers.health import router as health_router
from orderdesk.auth.jwt import JwtConfig
from orderdesk.auth.resolver import BearerTokenResolver, IdentityResolver
from orderdesk.middleware.admin import AdminAccessMiddleware
from orderdesk.middleware.status_code import StatusCodeMiddleware
from orderdesk.observability.logging import configure_logging, get_logger
from orderdesk.observability.middleware import RequestContextMiddleware
from orderdesk.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings, resolver: IdentityResolver | None = None) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        fmt=settings.log_format,
    )

    if resolver is None:
        resolver = BearerTokenResolver(JwtConfig.from_settings(settings))

    app = FastAPI(
        title="Orderdesk API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.identity_resolver = resolver

    # add_middleware wraps: the last one added runs first.
    app.add_middleware(
        AdminAccessMiddleware,
        resolver=resolver,
        protected_prefixes=settings.admin_path_prefixes,
    )
    app.add_middleware(
        StatusCodeMiddleware,
        api_prefix=settings.api_path_prefix,
        strict_content_type=settings.json_content_type_strict,
    )
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app, api_prefix=settings.api_path_prefix)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(auth_router)

    log.info("app.created", env=settings.env)
    return app


def app_from_env() -> FastAPI:
    # uvicorn factory target: `uvicorn --factory orderdesk.api.app:app_from_env`.
    return create_app(settings=get_settings())


# --- Module Notes -----------------------------------------------------------
# Product routes are mounted by the embedding application; anything under the
# admin prefixes is covered by AdminAccessMiddleware regardless of router.
