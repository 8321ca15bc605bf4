"""Transfer codec between image artifacts and base64 payloads."""

import base64

from image_studio.domain.artifacts import ImageArtifact

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64"


def encode(artifact: ImageArtifact) -> tuple[str, str]:
    """Return the base64 payload and media type for an artifact."""
    return base64.b64encode(artifact.data).decode("ascii"), artifact.media_type


def decode(payload: str, media_type: str) -> ImageArtifact:
    """Build an artifact from a base64 payload."""
    return ImageArtifact(
        data=base64.b64decode(payload, validate=True), media_type=media_type
    )


def to_data_url(artifact: ImageArtifact) -> str:
    """Render an artifact as a base64 data URL."""
    payload, media_type = encode(artifact)
    return f"{_DATA_URL_PREFIX}{media_type}{_BASE64_MARKER},{payload}"


def from_data_url(url: str) -> ImageArtifact:
    """Parse a base64 data URL into an artifact."""
    if not url.startswith(_DATA_URL_PREFIX) or "," not in url:
        raise ValueError("Expected a data URL")
    header, payload = url[len(_DATA_URL_PREFIX) :].split(",", 1)
    if not header.endswith(_BASE64_MARKER):
        raise ValueError("Only base64 data URLs are supported")
    media_type = header[: -len(_BASE64_MARKER)].split(";")[0].strip()
    if not media_type:
        media_type = detect_media_type(base64.b64decode(payload))
    return decode(payload, media_type)


def detect_media_type(data: bytes) -> str:
    """Infer a basic image media type from file signatures."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
