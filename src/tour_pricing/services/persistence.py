"""
State backends for the catalog store.

The whole catalog is stored as one record:
    {"packages": [...], "routes": [...], "settings": {...}}
"""
import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol


class StateBackend(Protocol):
    """Where the catalog record is read from and written to."""

    def load(self) -> Optional[dict]:
        """Return the stored record, or None when nothing was stored."""
        ...

    def save(self, state: dict) -> None:
        """Replace the stored record."""
        ...


class JsonFileBackend:
    """Stores the catalog record as a single JSON document."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def save(self, state: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file so a failed write never truncates the record
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(state, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class MemoryBackend:
    """Keeps the last saved record in memory."""

    def __init__(self, initial: Optional[dict] = None):
        self.state = copy.deepcopy(initial)
        self.save_count = 0

    def load(self) -> Optional[dict]:
        return copy.deepcopy(self.state)

    def save(self, state: dict) -> None:
        self.state = copy.deepcopy(state)
        self.save_count += 1
