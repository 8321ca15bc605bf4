"""Shared test fixtures."""

import asyncio
import base64
from dataclasses import dataclass, field

import pytest

from image_studio.adapters.gemini_client import GenerativeClient
from image_studio.config import Settings
from image_studio.containers import AppContainer
from image_studio.domain.artifacts import ImageArtifact
from image_studio.services.conversation import ConversationClient
from image_studio.services.editor import EditingSession
from image_studio.services.history import HistoryLog
from image_studio.services.registry import SessionRegistry
from image_studio.services.transformations import TransformationClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"original-pixels"


def image_reply(data: bytes, media_type: str = "image/png") -> dict[str, object]:
    """Build a generateContent reply carrying one inline image."""
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": media_type,
                                "data": base64.b64encode(data).decode("ascii"),
                            }
                        }
                    ]
                }
            }
        ]
    }


def text_reply(text: str) -> dict[str, object]:
    """Build a generateContent reply carrying text."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@dataclass
class FakeGenerativeClient(GenerativeClient):
    """Fake generative client returning queued replies in order."""

    replies: list[dict[str, object] | Exception] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate_content(
        self,
        *,
        model: str,
        contents: list[dict[str, object]],
        aspect_ratio: str | None = None,
        system_instruction: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "contents": contents,
                "aspect_ratio": aspect_ratio,
                "system_instruction": system_instruction,
            }
        )
        reply = self.replies.pop(0) if self.replies else image_reply(b"generated")
        if isinstance(reply, Exception):
            raise reply
        return reply


@dataclass
class GatedGenerativeClient(FakeGenerativeClient):
    """Fake client that holds every reply until ``release()`` is called."""

    gate: asyncio.Event | None = None

    def release(self) -> None:
        assert self.gate is not None
        self.gate.set()

    async def generate_content(
        self,
        *,
        model: str,
        contents: list[dict[str, object]],
        aspect_ratio: str | None = None,
        system_instruction: str | None = None,
    ) -> dict[str, object]:
        if self.gate is None:
            self.gate = asyncio.Event()
        gate = self.gate
        self.calls.append(
            {
                "model": model,
                "contents": contents,
                "aspect_ratio": aspect_ratio,
                "system_instruction": system_instruction,
            }
        )
        await gate.wait()
        reply = self.replies.pop(0) if self.replies else image_reply(b"generated")
        if isinstance(reply, Exception):
            raise reply
        return reply


def build_transformations(client: GenerativeClient) -> TransformationClient:
    return TransformationClient(
        client=client, image_model="image-model", text_model="text-model"
    )


def build_conversation_client(client: GenerativeClient) -> ConversationClient:
    return ConversationClient(
        client=client, model="text-model", system_instruction="Be helpful."
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="gemini-key")


@pytest.fixture
def artifact() -> ImageArtifact:
    return ImageArtifact(data=PNG_BYTES, media_type="image/png")


@pytest.fixture
def generative_client() -> FakeGenerativeClient:
    return FakeGenerativeClient()


@pytest.fixture
def transformations(generative_client: FakeGenerativeClient) -> TransformationClient:
    return build_transformations(generative_client)


@pytest.fixture
def history() -> HistoryLog:
    return HistoryLog()


@pytest.fixture
def editor(
    artifact: ImageArtifact,
    transformations: TransformationClient,
    history: HistoryLog,
) -> EditingSession:
    return EditingSession(
        current=artifact, transformations=transformations, history=history
    )


@pytest.fixture
def container(
    settings: Settings, generative_client: FakeGenerativeClient
) -> AppContainer:
    transformations = build_transformations(generative_client)
    conversation_client = build_conversation_client(generative_client)
    history = HistoryLog()
    sessions = SessionRegistry(
        transformations=transformations,
        conversation_client=conversation_client,
        history=history,
        chat_greeting="Hello!",
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        generative_client=generative_client,
        transformations=transformations,
        conversation_client=conversation_client,
        history=history,
        sessions=sessions,
        close_resources=close_resources,
    )
