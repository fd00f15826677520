# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""File-backed lock store mapping installed skill names to provenance.

The whole document is read on every operation and rewritten on every
mutation. Concurrent writers are not coordinated: the last write wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from skulls.core.constants import LOCK_VERSION
from skulls.core.exceptions import LockWriteError
from skulls.models.lock import LockEntry, LockFile

logger = logging.getLogger("skulls.lock.store")


def utc_timestamp() -> str:
    now = datetime.now(UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LockStore:
    """Read-modify-write access to the lock file at *path*.

    Parameters
    ----------
    path:
        Location of the JSON lock document.
    clock:
        Returns the timestamp recorded on add; injectable for tests.
    """

    def __init__(self, path: Path, clock: Callable[[], str] = utc_timestamp) -> None:
        self.path = path
        self._clock = clock

    def read(self) -> LockFile:
        """Load the lock document.

        Missing, unreadable, or malformed files and any schema version older
        than the current one all read as an empty store.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return LockFile()
        except OSError as exc:
            logger.warning("Cannot read lock file %s: %s", self.path, exc)
            return LockFile()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed lock file %s: %s", self.path, exc)
            return LockFile()

        if not isinstance(data, dict):
            return LockFile()
        version = data.get("version")
        skills = data.get("skills")
        if (
            not isinstance(version, int)
            or isinstance(version, bool)
            or version < LOCK_VERSION
            or not isinstance(skills, dict)
        ):
            logger.info("Discarding lock file %s with schema version %r", self.path, version)
            return LockFile()

        entries: dict[str, LockEntry] = {}
        for name, raw_entry in skills.items():
            try:
                entries[name] = LockEntry.model_validate(raw_entry)
            except ValidationError:
                logger.warning("Dropping invalid lock entry %r", name)
        return LockFile(version=version, skills=entries)

    def write(self, lock: LockFile) -> None:
        """Persist *lock* wholesale.

        Raises
        ------
        LockWriteError
            If the file cannot be written.
        """
        document = lock.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise LockWriteError(f"Cannot write lock file {self.path}: {exc}") from exc

    def add(self, name: str, entry: LockEntry) -> LockEntry:
        """Upsert *entry* under *name*.

        ``installed_at`` survives re-installs; ``updated_at`` is always
        refreshed.
        """
        lock = self.read()
        now = self._clock()
        existing = lock.skills.get(name)
        stored = entry.model_copy(
            update={
                "installed_at": existing.installed_at if existing and existing.installed_at else now,
                "updated_at": now,
            }
        )
        lock.skills[name] = stored
        lock.version = LOCK_VERSION
        self.write(lock)
        return stored

    def remove(self, name: str) -> bool:
        lock = self.read()
        if name not in lock.skills:
            return False
        del lock.skills[name]
        self.write(lock)
        return True

    def get(self, name: str) -> LockEntry | None:
        return self.read().skills.get(name)

    def all(self) -> dict[str, LockEntry]:
        return dict(self.read().skills)

    def all_by_source(self) -> dict[str, list[str]]:
        """Group installed skill names by normalized source."""
        grouped: dict[str, list[str]] = {}
        for name, entry in self.read().skills.items():
            grouped.setdefault(entry.source, []).append(name)
        return grouped
