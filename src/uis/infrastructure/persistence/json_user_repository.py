"""JSON-file-backed, read-only implementation of UserRepository.

``users.json`` is maintained by the identity service; this system only
reads it.
"""

from __future__ import annotations

from pathlib import Path

from uis.domain.model.user import User, UserRole
from uis.domain.repository.user_repository import UserRepository
from uis.infrastructure.persistence.json_store import JsonFileStore


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._store.load():
            if str(raw["id"]) == user_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._store.load()]

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=str(raw["id"]),
            username=raw["username"],
            role=UserRole(raw.get("role", "staff")),
        )
