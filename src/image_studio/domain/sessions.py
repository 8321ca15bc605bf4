"""Domain models for editing and conversation sessions."""

from dataclasses import dataclass
from enum import StrEnum

from image_studio.domain.errors import ErrorReason
from image_studio.domain.requests import TransformationKind


@dataclass(frozen=True)
class Idle:
    """No operation in flight."""

    name = "idle"


@dataclass(frozen=True)
class Processing:
    """One operation in flight."""

    kind: TransformationKind

    name = "processing"


@dataclass(frozen=True)
class Failed:
    """Last operation failed; cleared by the next action."""

    reason: ErrorReason
    message: str

    name = "failed"


EditingStatus = Idle | Processing | Failed


class Role(StrEnum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Single transcript entry."""

    id: str
    role: Role
    text: str


class ConversationStatus(StrEnum):
    """Conversation session states."""

    IDLE = "idle"
    AWAITING = "awaiting"
