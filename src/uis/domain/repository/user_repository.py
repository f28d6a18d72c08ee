"""Abstract read-only repository for users owned by the identity service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from uis.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every known user."""
