"""Shared JSON-file plumbing for the repositories.

Each data file is guarded by a re-entrant lock per process plus a
``filelock`` lock file shared between processes.  Repositories hold it
across a whole load-check-write cycle, which is what makes their
uniqueness checks and read-modify-write updates atomic.

A file holds ``{"last_id": N, "records": [...]}``.  ``last_id`` is the
highest ID ever handed out, so IDs of deleted records are never reused.
A bare JSON array (as written by hand for ``users.json``) is read too.
Writes go to a temporary file that replaces the original, so a crash
never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import tempfile
import threading
from pathlib import Path

from filelock import FileLock, Timeout

from uis.domain.exceptions import StorageError

LOCK_TIMEOUT_SECONDS = 10.0

_locks: dict[Path, _FileMutex] = {}
_locks_guard = threading.Lock()


class _FileMutex:
    """Thread lock first, then the cross-process lock file."""

    def __init__(self, path: Path) -> None:
        self._thread_lock = threading.RLock()
        self._file_lock = FileLock(
            str(path.with_name(path.name + ".lock")), timeout=LOCK_TIMEOUT_SECONDS
        )

    def __enter__(self) -> _FileMutex:
        self._thread_lock.acquire()
        try:
            self._file_lock.acquire()
        except Timeout as exc:
            self._thread_lock.release()
            raise StorageError(f"Timed out waiting for {exc.lock_file}") from exc
        except OSError as exc:
            self._thread_lock.release()
            raise StorageError(f"Cannot lock {self._file_lock.lock_file}: {exc}") from exc
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            self._file_lock.release()
        finally:
            self._thread_lock.release()


def _lock_for(path: Path) -> _FileMutex:
    with _locks_guard:
        if path not in _locks:
            _locks[path] = _FileMutex(path)
        return _locks[path]


def _highest_numeric_id(records: list[dict]) -> int:
    return max(
        (int(r["id"]) for r in records if str(r.get("id", "")).isdigit()),
        default=0,
    )


class JsonFileStore:
    """The records of one JSON file plus its ID high-water mark."""

    def __init__(self, file_path: Path) -> None:
        self.file_path = file_path.resolve()
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {self.file_path.parent}: {exc}") from exc
        self.lock = _lock_for(self.file_path)
        self._ensure_file()

    def load(self) -> list[dict]:
        with self.lock:
            return self._read()["records"]

    def persist(self, records: list[dict]) -> None:
        with self.lock:
            last_id = max(self._read()["last_id"], _highest_numeric_id(records))
            self._write({"last_id": last_id, "records": records})

    def next_id(self) -> str:
        """The next never-used numeric ID, as a string.

        Call with ``lock`` held and persist the new record before
        releasing it.
        """
        with self.lock:
            return str(self._read()["last_id"] + 1)

    # --- Internal helpers -----------------------------------------------------

    def _read(self) -> dict:
        try:
            document = json.loads(self.file_path.read_text(encoding="utf-8"))
            if isinstance(document, list):
                document = {"last_id": 0, "records": document}
            records = document["records"]
            last_id = max(int(document.get("last_id", 0)), _highest_numeric_id(records))
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
            raise StorageError(f"Cannot read {self.file_path}: {exc}") from exc
        return {"last_id": last_id, "records": records}

    def _write(self, document: dict) -> None:
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", delete=False, encoding="utf-8",
                dir=str(self.file_path.parent), suffix=".tmp",
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(json.dumps(document, indent=2) + "\n")
            tmp_path.replace(self.file_path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self.file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        with self.lock:
            if not self.file_path.exists():
                self._write({"last_id": 0, "records": []})
