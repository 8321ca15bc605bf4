"""Assistant chat client and conversation session."""

import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import httpx

from image_studio.adapters.gemini_client import GenerativeClient
from image_studio.domain.errors import ServiceUnavailable
from image_studio.domain.sessions import ConversationStatus, Message, Role
from image_studio.services.transformations import extract_text

_logger = logging.getLogger(__name__)

EMPTY_REPLY_TEXT = "I didn't catch that."
CONNECTION_NOTICE = "Sorry, I'm having trouble connecting to the server."
EMPTY_MESSAGE_NOTICE = "Message cannot be empty."

_PROVIDER_ROLES = {Role.USER: "user", Role.ASSISTANT: "model"}


def to_provider_history(transcript: list[Message]) -> list[dict[str, object]]:
    """Translate a transcript into provider role/parts entries."""
    return [
        {"role": _PROVIDER_ROLES[message.role], "parts": [{"text": message.text}]}
        for message in transcript
    ]


@dataclass
class ConversationClient:
    """Sends chat turns to the conversational model."""

    client: GenerativeClient
    model: str
    system_instruction: str

    async def reply(self, history: list[Message], text: str) -> str:
        """Return the assistant reply to ``text`` given prior ``history``."""
        contents = to_provider_history(history)
        contents.append({"role": "user", "parts": [{"text": text}]})
        try:
            response = await self.client.generate_content(
                model=self.model,
                contents=contents,
                system_instruction=self.system_instruction,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            _logger.exception("Chat request failed")
            raise ServiceUnavailable(CONNECTION_NOTICE) from exc
        return extract_text(response) or EMPTY_REPLY_TEXT


@dataclass
class ConversationSession:
    """Ordered transcript with a single in-flight request."""

    client: ConversationClient
    id: UUID = field(default_factory=uuid4)
    transcript: list[Message] = field(default_factory=list)
    status: ConversationStatus = ConversationStatus.IDLE
    notice: str | None = None
    closed: bool = False

    @classmethod
    def create(
        cls, client: ConversationClient, greeting: str = ""
    ) -> "ConversationSession":
        """Create a session, optionally opening with an assistant greeting."""
        session = cls(client=client)
        if greeting:
            session.transcript.append(_message(Role.ASSISTANT, greeting))
        return session

    async def send(self, text: str) -> bool:
        """Send a user message; return False if it was not accepted."""
        if self.closed or self.status is ConversationStatus.AWAITING:
            return False
        if not text.strip():
            self.notice = EMPTY_MESSAGE_NOTICE
            return False

        history = list(self.transcript)
        self.transcript.append(_message(Role.USER, text))
        self.status = ConversationStatus.AWAITING
        self.notice = None
        try:
            reply = await self.client.reply(history, text)
        except ServiceUnavailable as exc:
            if self._dropped():
                return True
            self.notice = str(exc)
            self.status = ConversationStatus.IDLE
            return True
        except BaseException:
            if not self.closed:
                self.notice = CONNECTION_NOTICE
                self.status = ConversationStatus.IDLE
            _logger.exception("Chat send aborted for session %s", self.id)
            raise

        if self._dropped():
            return True
        self.transcript.append(_message(Role.ASSISTANT, reply))
        self.status = ConversationStatus.IDLE
        return True

    def dismiss_notice(self) -> None:
        """Clear the transient notice."""
        self.notice = None

    def close(self) -> None:
        """Tear down the session; late replies will be ignored."""
        self.closed = True

    def _dropped(self) -> bool:
        if self.closed:
            _logger.warning("Dropped late chat reply for closed session %s", self.id)
        return self.closed


def _message(role: Role, text: str) -> Message:
    return Message(id=uuid4().hex, role=role, text=text)
