"""Tests for the history log."""

from datetime import UTC, datetime, timedelta

from image_studio.domain.artifacts import ImageArtifact
from image_studio.services.history import HistoryLog


def test_entries_are_listed_newest_first() -> None:
    ticks = iter(
        datetime(2024, 1, 1, tzinfo=UTC) + timedelta(seconds=n) for n in range(3)
    )
    log = HistoryLog(clock=lambda: next(ticks))
    artifacts = [
        ImageArtifact(data=bytes([n]), media_type="image/png") for n in range(3)
    ]

    entries = [log.append(artifact) for artifact in artifacts]

    assert log.list() == list(reversed(entries))
    assert log.list()[0].thumbnail == artifacts[-1]
    assert len(log.list()) == 3


def test_identical_artifacts_get_distinct_entries() -> None:
    log = HistoryLog()
    artifact = ImageArtifact(data=b"same", media_type="image/png")

    first = log.append(artifact)
    second = log.append(artifact)

    assert first.id != second.id
    assert first.created_at <= second.created_at


def test_list_returns_a_copy() -> None:
    log = HistoryLog()
    log.append(ImageArtifact(data=b"x", media_type="image/png"))

    log.list().clear()

    assert len(log.list()) == 1
