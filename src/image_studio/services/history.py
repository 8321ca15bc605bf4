"""In-memory history of saved artifacts."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from image_studio.domain.artifacts import HistoryEntry, ImageArtifact


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class HistoryLog:
    """Append-only log of saved artifacts, newest first."""

    clock: Callable[[], datetime] = _utcnow
    _entries: list[HistoryEntry] = field(default_factory=list, init=False)

    def append(self, artifact: ImageArtifact) -> HistoryEntry:
        """Save an artifact and return the new entry."""
        entry = HistoryEntry(
            id=uuid4().hex, thumbnail=artifact, created_at=self.clock()
        )
        self._entries.insert(0, entry)
        return entry

    def list(self) -> list[HistoryEntry]:
        """Return saved entries, most recent first."""
        return list(self._entries)
