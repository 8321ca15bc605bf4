"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from image_studio.adapters.gemini_client import DEFAULT_BASE_URL

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are the helpful assistant for the Image Studio background remover app. "
    "You help users remove backgrounds, create passport photos, and enhance images."
)
DEFAULT_GREETING = (
    "Hello! I can help you use the app, suggest background colors, "
    "or explain how the editor works. Ask me anything!"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str
    gemini_base_url: str = DEFAULT_BASE_URL
    gemini_image_model: str = "gemini-2.5-flash-image"
    gemini_text_model: str = "gemini-2.5-flash"
    request_timeout_seconds: float = 60.0
    chat_system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION
    chat_greeting: str = DEFAULT_GREETING
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
