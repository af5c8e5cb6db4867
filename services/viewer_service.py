"""Browser-local viewer preferences: role and display name.

The role only decides which mutation controls the pages render. It is read
from cookies set by the browser and is never checked by the REST API, so it
must not be treated as an access control mechanism.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

ROLE_COOKIE = "userRole"
NAME_COOKIE = "userName"
# Preferences have no server-side expiry; keep the cookies for a year.
COOKIE_MAX_AGE = 365 * 24 * 60 * 60
MAX_NAME_LENGTH = 80


class ViewerRole(StrEnum):
    ADMIN = "admin"
    USER = "user"


DEFAULT_ROLE = ViewerRole.USER


@dataclass(frozen=True)
class ViewerContext:
    """Role and display name of whoever is looking at the page."""

    role: ViewerRole = DEFAULT_ROLE
    user_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ViewerRole.ADMIN

    @property
    def can_manage_projects(self) -> bool:
        return self.is_admin

    @property
    def can_manage_coworkers(self) -> bool:
        return self.is_admin

    @property
    def can_delete_coworkers(self) -> bool:
        return self.is_admin

    @property
    def can_manage_tasks(self) -> bool:
        return True

    @property
    def can_manage_assignments(self) -> bool:
        return True


def parse_role(value: str | None) -> ViewerRole | None:
    """Return the matching role or None for unknown values."""
    if not value:
        return None
    try:
        return ViewerRole(value.strip().lower())
    except ValueError:
        return None


def normalize_user_name(value: str | None) -> str:
    return (value or "").strip()[:MAX_NAME_LENGTH]


def viewer_from_cookies(cookies: Mapping[str, str]) -> ViewerContext:
    role = parse_role(cookies.get(ROLE_COOKIE)) or DEFAULT_ROLE
    return ViewerContext(role=role, user_name=normalize_user_name(cookies.get(NAME_COOKIE)))
