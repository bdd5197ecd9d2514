"""
orderdesk.middleware.status_code

Response post-processing for JSON API routes.

Responsibilities:
- Add a `status_code` field, equal to the HTTP status, to JSON object bodies
  returned from `api/*` routes.
- Leave every other response byte-identical.

The stage is fail-open: bodies that are not valid JSON, or that decode to
something other than an object, pass through untouched. An existing
`status_code` key is never overwritten, whatever its value.
"""

from __future__ import annotations

import json

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from orderdesk.middleware.paths import is_json_content_type, path_matches

STATUS_CODE_KEY = "status_code"


def annotate_status_code(body: bytes, status_code: int) -> bytes | None:
    """
    Return `body` with `status_code` added, or None when nothing should change.
    """

    try:
        data = json.loads(body)
    except ValueError:
        # Covers both JSONDecodeError and non-UTF-8 bodies.
        return None

    if not isinstance(data, dict) or STATUS_CODE_KEY in data:
        return None

    data[STATUS_CODE_KEY] = status_code
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates (`"\ud800"`) decode fine but cannot be written as UTF-8.
        return json.dumps(data, ensure_ascii=True, separators=(",", ":")).encode("ascii")


async def _read_body(response: Response) -> bytes:
    iterator = getattr(response, "body_iterator", None)
    if iterator is None:
        return bytes(response.body)

    chunks: list[bytes] = []
    async for chunk in iterator:
        chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))
    return b"".join(chunks)


def _rebuild(response: Response, body: bytes, *, content_changed: bool) -> Response:
    rebuilt = Response(
        content=body,
        status_code=response.status_code,
        background=response.background,
    )
    if content_changed:
        raw = [(k, v) for k, v in response.raw_headers if k.lower() != b"content-length"]
        raw.append((b"content-length", str(len(body)).encode("latin-1")))
    else:
        raw = list(response.raw_headers)
    rebuilt.raw_headers = raw
    return rebuilt


class StatusCodeMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        api_prefix: str = "api/",
        strict_content_type: bool = True,
    ) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix
        self.strict_content_type = strict_content_type

    def applies_to(self, request: Request, response: Response) -> bool:
        if not path_matches(request.url.path, self.api_prefix):
            return False
        return is_json_content_type(
            response.headers.get("content-type"), strict=self.strict_content_type
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        if not self.applies_to(request, response):
            return response

        # call_next hands back a streaming response; the body has to be drained to inspect it.
        body = await _read_body(response)
        annotated = annotate_status_code(body, response.status_code)
        if annotated is None:
            return _rebuild(response, body, content_changed=False)
        return _rebuild(response, annotated, content_changed=True)


# --- Module Notes -----------------------------------------------------------
# `Content-Type` matching is exact by default: `application/json; charset=utf-8`
# is skipped unless the app is built with `json_content_type_strict=False`.
