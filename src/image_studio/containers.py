"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from image_studio.adapters.gemini_client import GenerativeClient, HttpxGeminiClient
from image_studio.config import Settings
from image_studio.services.conversation import ConversationClient
from image_studio.services.history import HistoryLog
from image_studio.services.registry import SessionRegistry
from image_studio.services.transformations import TransformationClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    generative_client: GenerativeClient
    transformations: TransformationClient
    conversation_client: ConversationClient
    history: HistoryLog
    sessions: SessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    gemini_client = HttpxGeminiClient.create(
        api_key=resolved_settings.gemini_api_key,
        base_url=resolved_settings.gemini_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    transformations = TransformationClient(
        client=gemini_client,
        image_model=resolved_settings.gemini_image_model,
        text_model=resolved_settings.gemini_text_model,
    )
    conversation_client = ConversationClient(
        client=gemini_client,
        model=resolved_settings.gemini_text_model,
        system_instruction=resolved_settings.chat_system_instruction,
    )
    history = HistoryLog()
    sessions = SessionRegistry(
        transformations=transformations,
        conversation_client=conversation_client,
        history=history,
        chat_greeting=resolved_settings.chat_greeting,
    )

    async def close_resources() -> None:
        await gemini_client.close()

    return AppContainer(
        settings=resolved_settings,
        generative_client=gemini_client,
        transformations=transformations,
        conversation_client=conversation_client,
        history=history,
        sessions=sessions,
        close_resources=close_resources,
    )
