"""Transformation client for AI-backed image operations."""

import logging
from dataclasses import dataclass

import httpx

from image_studio.adapters.gemini_client import GenerativeClient
from image_studio.domain.artifacts import ImageArtifact
from image_studio.domain.errors import InvalidInput, NoContent, ServiceUnavailable
from image_studio.domain.requests import (
    Analyze,
    AspectRatio,
    BackgroundReplace,
    Enhance,
    FreeformEdit,
    PassportNormalize,
    TransformationRequest,
)
from image_studio.services import codec

_logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_MEDIA_TYPE = "image/png"

ANALYZE_PROMPT = (
    "Analyze this image. Identify the main subject, the background context, "
    "and suggest the best background color for a professional ID photo based "
    "on the subject's clothing."
)
ENHANCE_PROMPT = (
    "Enhance this image to high definition. Improve clarity, sharpness, and "
    "lighting while preserving the original details and identity of the subject "
    "exactly. Do not alter facial features."
)
PASSPORT_PROMPT = (
    "Transform this into a professional passport photo. Crop to a standard "
    "head-and-shoulders shot. Change background to solid white. Ensure the "
    "subject is centered, facing forward, and lighting is even. Keep the "
    "person's identity exactly the same."
)


def background_prompt(color: str) -> str:
    """Build the background replacement instruction for a color."""
    return (
        f"Replace the background of this image with a solid {color} color. "
        "Keep the main subject exactly as is. Ensure clean edges."
    )


@dataclass
class TransformationClient:
    """Stateless request mapper, one request per operation."""

    client: GenerativeClient
    image_model: str
    text_model: str

    async def apply(
        self, artifact: ImageArtifact, request: TransformationRequest
    ) -> ImageArtifact | str:
        """Dispatch a transformation request to its operation."""
        match request:
            case BackgroundReplace(color=color):
                return await self.replace_background(artifact, color)
            case FreeformEdit(prompt=prompt, aspect_ratio=aspect_ratio):
                return await self.edit_with_prompt(artifact, prompt, aspect_ratio)
            case Enhance():
                return await self.enhance(artifact)
            case PassportNormalize():
                return await self.create_passport_photo(artifact)
            case Analyze():
                return await self.analyze(artifact)
        raise TypeError(f"Unsupported transformation request: {request!r}")

    async def replace_background(
        self, artifact: ImageArtifact, color: str
    ) -> ImageArtifact:
        """Replace the background with a solid color."""
        if not color.strip():
            raise InvalidInput("Choose a background color.")
        return await self._generate_image(
            artifact, background_prompt(color.strip()), action="background"
        )

    async def edit_with_prompt(
        self,
        artifact: ImageArtifact,
        prompt: str,
        aspect_ratio: AspectRatio = AspectRatio.SQUARE,
    ) -> ImageArtifact:
        """Apply a free-form instruction at the requested aspect ratio."""
        if not prompt.strip():
            raise InvalidInput("Enter a prompt describing the edit.")
        return await self._generate_image(
            artifact, prompt, aspect_ratio=aspect_ratio, action="edit"
        )

    async def enhance(self, artifact: ImageArtifact) -> ImageArtifact:
        """Enhance clarity at a square output ratio."""
        return await self._generate_image(
            artifact, ENHANCE_PROMPT, aspect_ratio=AspectRatio.SQUARE, action="enhance"
        )

    async def create_passport_photo(self, artifact: ImageArtifact) -> ImageArtifact:
        """Normalize to a passport portrait at 3:4."""
        return await self._generate_image(
            artifact,
            PASSPORT_PROMPT,
            aspect_ratio=AspectRatio.PORTRAIT,
            action="passport",
        )

    async def analyze(self, artifact: ImageArtifact) -> str:
        """Return a text analysis of the image."""
        reply = await self._request(
            self.text_model, artifact, ANALYZE_PROMPT, None, "analyze"
        )
        text = extract_text(reply)
        if not text:
            _logger.warning("Analysis returned no text")
            raise NoContent("Could not analyze image.")
        return text

    async def _generate_image(
        self,
        artifact: ImageArtifact,
        instruction: str,
        aspect_ratio: AspectRatio | None = None,
        action: str = "image",
    ) -> ImageArtifact:
        reply = await self._request(
            self.image_model, artifact, instruction, aspect_ratio, action
        )
        try:
            result = extract_image(reply)
        except ValueError as exc:
            _logger.exception("Undecodable image in %s reply", action)
            raise ServiceUnavailable("Service returned an unreadable image.") from exc
        if result is None:
            _logger.warning("No image generated for %s", action)
            raise NoContent("No image generated.")
        _logger.info(
            "Generated %s image: media_type=%s bytes=%s",
            action,
            result.media_type,
            result.size,
        )
        return result

    async def _request(
        self,
        model: str,
        artifact: ImageArtifact,
        instruction: str,
        aspect_ratio: AspectRatio | None,
        action: str,
    ) -> dict[str, object]:
        payload, media_type = codec.encode(artifact)
        contents: list[dict[str, object]] = [
            {
                "role": "user",
                "parts": [
                    {"inlineData": {"mimeType": media_type, "data": payload}},
                    {"text": instruction},
                ],
            }
        ]
        try:
            return await self.client.generate_content(
                model=model,
                contents=contents,
                aspect_ratio=str(aspect_ratio) if aspect_ratio else None,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            _logger.exception("Generative service %s request failed", action)
            raise ServiceUnavailable("Generative service unavailable.") from exc


def response_parts(reply: object) -> list[dict[str, object]]:
    """Return content parts of the first candidate."""
    if not isinstance(reply, dict):
        return []
    candidates = reply.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    first = candidates[0]
    if not isinstance(first, dict):
        return []
    content = first.get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def extract_image(reply: object) -> ImageArtifact | None:
    """Decode the first inline image part, if any."""
    for part in response_parts(reply):
        inline = part.get("inlineData")
        if isinstance(inline, dict) and inline.get("data"):
            media_type = inline.get("mimeType") or DEFAULT_OUTPUT_MEDIA_TYPE
            return codec.decode(str(inline["data"]), str(media_type))
    return None


def extract_text(reply: object) -> str:
    """Join the text parts of the first candidate."""
    texts = [
        str(part["text"])
        for part in response_parts(reply)
        if isinstance(part.get("text"), str)
    ]
    return "".join(texts).strip()
