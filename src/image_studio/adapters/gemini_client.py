"""Gemini generateContent REST client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GenerativeClient(Protocol):
    """Interface for the generative image and text service."""

    async def generate_content(
        self,
        *,
        model: str,
        contents: list[dict[str, object]],
        aspect_ratio: str | None = None,
        system_instruction: str | None = None,
    ) -> dict[str, object]:
        """Send one generateContent request and return the raw reply."""


def build_request_body(
    contents: list[dict[str, object]],
    aspect_ratio: str | None = None,
    system_instruction: str | None = None,
) -> dict[str, object]:
    """Assemble a generateContent JSON body."""
    body: dict[str, object] = {"contents": contents}
    if aspect_ratio:
        body["generationConfig"] = {"imageConfig": {"aspectRatio": aspect_ratio}}
    if system_instruction:
        body["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    return body


@dataclass
class HttpxGeminiClient(GenerativeClient):
    """HTTPX-backed Gemini client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 60.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 60.0
    ) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def generate_content(
        self,
        *,
        model: str,
        contents: list[dict[str, object]],
        aspect_ratio: str | None = None,
        system_instruction: str | None = None,
    ) -> dict[str, object]:
        """Call models/{model}:generateContent."""
        url = f"{self.base_url.rstrip('/')}/models/{model}:generateContent"
        response = await self.http_client.post(
            url,
            headers={"x-goog-api-key": self.api_key},
            json=build_request_body(contents, aspect_ratio, system_instruction),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
