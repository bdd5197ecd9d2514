"""
orderdesk.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`).
- Define the minimal identity surface the admin guard relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class Identity(Protocol):
    @property
    def is_admin(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    subject: str
    roles: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


# --- Module Notes -----------------------------------------------------------
# Users carry a single role in practice (`admin` or `staff`); a set keeps
# tokens forward compatible with multi-role callers.
