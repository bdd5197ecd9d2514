"""
orderdesk.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Identity resolvers injected into middleware and routes.
- FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here reads ambient auth state; resolvers are passed in explicitly.
