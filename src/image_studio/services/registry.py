"""In-process registry of open sessions."""

from dataclasses import dataclass, field
from uuid import UUID

from image_studio.domain.artifacts import ImageArtifact
from image_studio.services.conversation import ConversationClient, ConversationSession
from image_studio.services.editor import EditingSession
from image_studio.services.history import HistoryLog
from image_studio.services.transformations import TransformationClient


@dataclass
class SessionRegistry:
    """Owns editing and conversation sessions for the host UI."""

    transformations: TransformationClient
    conversation_client: ConversationClient
    history: HistoryLog = field(default_factory=HistoryLog)
    chat_greeting: str = ""
    _editors: dict[UUID, EditingSession] = field(default_factory=dict, init=False)
    _conversations: dict[UUID, ConversationSession] = field(
        default_factory=dict, init=False
    )

    def open_editor(self, artifact: ImageArtifact) -> EditingSession:
        """Create an editing session for an uploaded image."""
        session = EditingSession(
            current=artifact,
            transformations=self.transformations,
            history=self.history,
        )
        self._editors[session.id] = session
        return session

    def get_editor(self, session_id: UUID) -> EditingSession | None:
        """Return an open editing session, if present."""
        return self._editors.get(session_id)

    def close_editor(self, session_id: UUID) -> bool:
        """Close and forget an editing session."""
        session = self._editors.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def open_conversation(self) -> ConversationSession:
        """Create a conversation session."""
        session = ConversationSession.create(
            self.conversation_client, greeting=self.chat_greeting
        )
        self._conversations[session.id] = session
        return session

    def get_conversation(self, session_id: UUID) -> ConversationSession | None:
        """Return an open conversation session, if present."""
        return self._conversations.get(session_id)

    def close_conversation(self, session_id: UUID) -> bool:
        """Close and forget a conversation session."""
        session = self._conversations.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True
