"""File-backed submission store.

The whole list lives in one JSON file and is rewritten on every append.
Reads never fail: a missing, unreadable, or malformed file yields an
empty list and a warning in the log.
"""

import json
import logging
import threading
from collections.abc import Sequence
from pathlib import Path

from perch.models import Submission

logger = logging.getLogger("perch.store")


class SubmissionStore:
    """Ordered, append-only collection of ``Submission`` records.

    Usage::

        store = SubmissionStore("submissions.json")
        store.load()
        store.append(Submission.from_form(form))
        for entry in store.list():
            ...

    Appends and reads are serialized within one process. Separate
    processes sharing a file are last-writer-wins.
    """

    __slots__ = ("_items", "_lock", "path")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._items: list[Submission] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"SubmissionStore({str(self.path)!r}, {len(self._items)} loaded)"

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> Sequence[Submission]:
        """Replace the in-memory list with the file's contents."""
        with self._lock:
            self._items = self._read()
            return tuple(self._items)

    def append(self, submission: Submission) -> None:
        """Add *submission* and rewrite the backing file.

        Raises:
            OSError: The file could not be written.
        """
        with self._lock:
            items = [*self._items, submission]
            payload = json.dumps([s.to_dict() for s in items], indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload + "\n", encoding="utf-8")
            # memory only follows a successful write
            self._items = items
        logger.info("Stored submission from %s (%d total)", submission.email, len(self._items))

    def _read(self) -> list[Submission]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Could not read submissions from %s: %s", self.path, exc)
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring %s: expected a JSON list, got %s", self.path, type(raw).__name__)
            return []
        try:
            return [Submission.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring malformed submission record in %s: %r", self.path, exc)
            return []

    def list(self) -> Sequence[Submission]:
        """Reload from disk, then return every submission in insertion order."""
        return self.load()
