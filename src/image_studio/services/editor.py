"""Editing session state machine."""

import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from image_studio.domain.artifacts import HistoryEntry, ImageArtifact
from image_studio.domain.errors import (
    ErrorReason,
    InvalidInput,
    SessionBusy,
    TransformError,
)
from image_studio.domain.requests import (
    TransformationKind,
    TransformationRequest,
)
from image_studio.domain.sessions import EditingStatus, Failed, Idle, Processing
from image_studio.services.history import HistoryLog
from image_studio.services.transformations import TransformationClient

_logger = logging.getLogger(__name__)

FAILURE_MESSAGES: dict[TransformationKind, str] = {
    TransformationKind.BACKGROUND_REPLACE: "Failed to update background.",
    TransformationKind.FREEFORM_EDIT: "Failed to edit image.",
    TransformationKind.ENHANCE: "Failed to enhance image.",
    TransformationKind.PASSPORT_NORMALIZE: "Failed to create passport photo.",
    TransformationKind.ANALYZE: "Failed to analyze image.",
}


@dataclass
class EditingSession:
    """Holds the current image and serializes operations against it.

    Only one operation may be in flight at a time. A failed operation never
    changes ``current``; starting a new one clears the failure. Replies that
    arrive after ``close()`` are dropped.
    """

    current: ImageArtifact
    transformations: TransformationClient
    history: HistoryLog
    id: UUID = field(default_factory=uuid4)
    status: EditingStatus = field(default_factory=Idle)
    last_analysis: str | None = None
    closed: bool = False

    @property
    def is_processing(self) -> bool:
        """Return True while an operation is in flight."""
        return isinstance(self.status, Processing)

    async def start(self, request: TransformationRequest) -> bool:
        """Run a transformation; return False if it was not accepted."""
        if self.closed or self.is_processing:
            _logger.info(
                "Rejected %s for session %s: status=%s closed=%s",
                request.kind,
                self.id,
                self.status.name,
                self.closed,
            )
            return False

        self.status = Processing(request.kind)
        source = self.current
        _logger.info("Session %s started %s", self.id, request.kind)
        try:
            result = await self.transformations.apply(source, request)
        except TransformError as exc:
            if self._dropped(request):
                return True
            message = (
                str(exc)
                if isinstance(exc, InvalidInput)
                else FAILURE_MESSAGES[request.kind]
            )
            self.status = Failed(reason=exc.reason, message=message)
            _logger.info(
                "Session %s %s failed: reason=%s", self.id, request.kind, exc.reason
            )
            return True
        except BaseException:
            if not self.closed:
                self.status = Failed(
                    reason=ErrorReason.SERVICE_UNAVAILABLE,
                    message=FAILURE_MESSAGES[request.kind],
                )
            _logger.exception("Session %s %s aborted", self.id, request.kind)
            raise

        if self._dropped(request):
            return True
        if isinstance(result, str):
            self.last_analysis = result
        else:
            self.current = result
        self.status = Idle()
        _logger.info("Session %s completed %s", self.id, request.kind)
        return True

    def save(self) -> HistoryEntry:
        """Append the current image to the history log."""
        if self.is_processing:
            raise SessionBusy("Cannot save while an operation is in progress.")
        entry = self.history.append(self.current)
        _logger.info("Session %s saved history entry %s", self.id, entry.id)
        return entry

    def dismiss_error(self) -> None:
        """Clear a stored failure."""
        if isinstance(self.status, Failed):
            self.status = Idle()

    def close(self) -> None:
        """Tear down the session; late replies will be ignored."""
        self.closed = True

    def _dropped(self, request: TransformationRequest) -> bool:
        if not self.closed:
            return False
        _logger.warning(
            "Dropped late %s reply for closed session %s", request.kind, self.id
        )
        return True
