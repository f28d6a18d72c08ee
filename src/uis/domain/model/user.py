"""User: the identity collaborator's view of an acting user.

Users are managed outside this system; the core only needs to check that
an actor exists and to show its username on delivery reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class User:

    id: str
    username: str
    role: UserRole = UserRole.STAFF
