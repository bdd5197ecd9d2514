"""
orderdesk.middleware

Request-pipeline stages for the JSON API.

Responsibilities:
- `StatusCodeMiddleware`: guarantee a `status_code` field on JSON API responses.
- `AdminAccessMiddleware`: admin-only authorization for protected routes.
"""

from orderdesk.middleware.admin import AdminAccessMiddleware
from orderdesk.middleware.status_code import StatusCodeMiddleware, annotate_status_code

__all__ = ["AdminAccessMiddleware", "StatusCodeMiddleware", "annotate_status_code"]
