"""Domain models for image artifacts and saved history."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ImageArtifact:
    """Image payload plus its declared media type."""

    data: bytes = field(repr=False)
    media_type: str

    @property
    def size(self) -> int:
        """Return the payload size in bytes."""
        return len(self.data)


@dataclass(frozen=True)
class HistoryEntry:
    """Artifact saved to the history log."""

    id: str
    thumbnail: ImageArtifact
    created_at: datetime
