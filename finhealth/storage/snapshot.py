"""Snapshot persistence collaborators.

A snapshot is a FinancialState serialized as-is, stored under a session
key. Derived state is recomputed on load, so only the collections are
authoritative.
"""

import logging
import os
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from finhealth.core.exceptions import SnapshotError
from finhealth.core.models import FinancialState

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    """Session-scoped key/value persistence for FinancialState snapshots."""

    def load(self, key: str) -> FinancialState | None: ...

    def save(self, key: str, state: FinancialState) -> None: ...

    def delete(self, key: str) -> bool: ...


class InMemorySnapshotStore:
    """Keeps snapshots in a dict. Useful for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._snapshots: dict[str, FinancialState] = {}

    def load(self, key: str) -> FinancialState | None:
        return self._snapshots.get(key)

    def save(self, key: str, state: FinancialState) -> None:
        self._snapshots[key] = state

    def delete(self, key: str) -> bool:
        return self._snapshots.pop(key, None) is not None


class JsonFileSnapshotStore:
    """Stores each snapshot as <directory>/<key>.json."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> FinancialState | None:
        """Read a snapshot.

        Returns:
            The stored state, or None if no snapshot exists for key.

        Raises:
            SnapshotError: If the file cannot be read or is not a valid
                snapshot.
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return FinancialState.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise SnapshotError(key, f"cannot read {path}: {e}") from e
        except ValidationError as e:
            raise SnapshotError(key, f"invalid snapshot in {path}: {e.error_count()} errors") from e

    def save(self, key: str, state: FinancialState) -> None:
        """Write a snapshot, replacing any previous one atomically."""
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise SnapshotError(key, f"cannot write {path}: {e}") from e
        logger.debug("Wrote snapshot %s", path)

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        return True
