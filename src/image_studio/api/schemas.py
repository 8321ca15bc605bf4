"""Pydantic models for the HTTP surface."""

from datetime import datetime

from pydantic import BaseModel

from image_studio.domain.artifacts import HistoryEntry
from image_studio.domain.requests import (
    Analyze,
    AspectRatio,
    BackgroundColor,
    BackgroundReplace,
    Enhance,
    FreeformEdit,
    PassportNormalize,
    TransformationKind,
    TransformationRequest,
)
from image_studio.domain.sessions import Failed, Processing
from image_studio.services.codec import to_data_url
from image_studio.services.conversation import ConversationSession
from image_studio.services.editor import EditingSession


class CreateEditorSession(BaseModel):
    """Upload payload: a data URL, or raw base64 with an optional type."""

    image: str | None = None
    data: str | None = None
    media_type: str | None = None


class OperationPayload(BaseModel):
    """Transformation request submitted by the editor."""

    kind: TransformationKind
    color: BackgroundColor | None = None
    prompt: str | None = None
    aspect_ratio: AspectRatio = AspectRatio.SQUARE

    def to_request(self) -> TransformationRequest:
        """Build the domain request for this payload."""
        match self.kind:
            case TransformationKind.BACKGROUND_REPLACE:
                return BackgroundReplace(color=str(self.color or ""))
            case TransformationKind.FREEFORM_EDIT:
                return FreeformEdit(
                    prompt=self.prompt or "", aspect_ratio=self.aspect_ratio
                )
            case TransformationKind.ENHANCE:
                return Enhance()
            case TransformationKind.PASSPORT_NORMALIZE:
                return PassportNormalize()
        return Analyze()


class EditorSessionState(BaseModel):
    """Renderable editing session state."""

    id: str
    image: str
    media_type: str
    status: str
    kind: TransformationKind | None = None
    error: str | None = None
    message: str | None = None
    analysis: str | None = None

    @classmethod
    def from_session(cls, session: EditingSession) -> "EditorSessionState":
        """Render an editing session."""
        status = session.status
        return cls(
            id=str(session.id),
            image=to_data_url(session.current),
            media_type=session.current.media_type,
            status=status.name,
            kind=status.kind if isinstance(status, Processing) else None,
            error=str(status.reason) if isinstance(status, Failed) else None,
            message=status.message if isinstance(status, Failed) else None,
            analysis=session.last_analysis,
        )


class HistoryEntryView(BaseModel):
    """Saved history entry."""

    id: str
    image: str
    media_type: str
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryView":
        """Render a history entry."""
        return cls(
            id=entry.id,
            image=to_data_url(entry.thumbnail),
            media_type=entry.thumbnail.media_type,
            created_at=entry.created_at,
        )


class ChatMessagePayload(BaseModel):
    """User message submitted to the assistant."""

    text: str


class MessageView(BaseModel):
    """Transcript entry."""

    id: str
    role: str
    text: str


class ConversationState(BaseModel):
    """Renderable conversation session state."""

    id: str
    status: str
    notice: str | None = None
    messages: list[MessageView]

    @classmethod
    def from_session(cls, session: ConversationSession) -> "ConversationState":
        """Render a conversation session."""
        return cls(
            id=str(session.id),
            status=str(session.status),
            notice=session.notice,
            messages=[
                MessageView(id=message.id, role=str(message.role), text=message.text)
                for message in session.transcript
            ],
        )
