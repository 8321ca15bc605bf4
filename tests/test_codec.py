"""Tests for the transfer codec."""

import base64

import pytest

from image_studio.domain.artifacts import ImageArtifact
from image_studio.services.codec import (
    decode,
    detect_media_type,
    encode,
    from_data_url,
    to_data_url,
)


def test_encode_decode_round_trip() -> None:
    artifact = ImageArtifact(data=bytes(range(256)), media_type="image/webp")

    payload, media_type = encode(artifact)

    assert media_type == "image/webp"
    assert base64.b64decode(payload) == artifact.data
    assert decode(payload, media_type) == artifact


def test_decode_rejects_malformed_payload() -> None:
    with pytest.raises(ValueError):
        decode("not base64!", "image/png")


def test_data_url_round_trip() -> None:
    artifact = ImageArtifact(data=b"\xff\xd8\xffjpeg", media_type="image/jpeg")

    url = to_data_url(artifact)

    assert url.startswith("data:image/jpeg;base64,")
    assert from_data_url(url) == artifact


def test_from_data_url_sniffs_missing_media_type() -> None:
    encoded = base64.b64encode(b"\x89PNG\r\n\x1a\nrest").decode("ascii")

    artifact = from_data_url(f"data:;base64,{encoded}")

    assert artifact.media_type == "image/png"


@pytest.mark.parametrize(
    "url",
    ["https://example.com/a.png", "data:image/png,plain-text", "data:image/png"],
)
def test_from_data_url_rejects_other_urls(url: str) -> None:
    with pytest.raises(ValueError):
        from_data_url(url)


def test_detect_media_type_signatures() -> None:
    assert detect_media_type(b"\x89PNG\r\n\x1a\nrest") == "image/png"
    assert detect_media_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
    assert detect_media_type(b"RIFF\x00\x00\x00\x00WEBPVP8") == "image/webp"
    assert detect_media_type(b"GIF89a...") == "image/gif"
    assert detect_media_type(b"unknown") == "image/jpeg"


def test_from_data_url_drops_media_type_parameters() -> None:
    encoded = base64.b64encode(b"\x89PNG\r\n\x1a\nrest").decode("ascii")

    artifact = from_data_url(f"data:image/png;charset=utf-8;base64,{encoded}")

    assert artifact.media_type == "image/png"
    assert artifact.data == b"\x89PNG\r\n\x1a\nrest"
