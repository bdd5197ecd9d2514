"""
orderdesk.api

API package for the Orderdesk service.

Responsibilities:
- FastAPI app factory and router modules.
- JSON error rendering for API routes.
"""

# Package marker.
