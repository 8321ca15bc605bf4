"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, Response, status

from image_studio.api.schemas import (
    ChatMessagePayload,
    ConversationState,
    CreateEditorSession,
    EditorSessionState,
    HistoryEntryView,
    OperationPayload,
)
from image_studio.app_logging import configure_logging
from image_studio.containers import AppContainer
from image_studio.domain.artifacts import ImageArtifact
from image_studio.domain.errors import SessionBusy
from image_studio.domain.sessions import ConversationStatus
from image_studio.services.codec import decode, detect_media_type, from_data_url
from image_studio.services.conversation import ConversationSession
from image_studio.services.editor import EditingSession


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/editor/sessions", status_code=status.HTTP_201_CREATED)
    async def open_editor(
        payload: CreateEditorSession, request: Request
    ) -> EditorSessionState:
        """Start an editing session from an uploaded image."""
        state_container: AppContainer = request.app.state.container
        artifact = _parse_upload(payload)
        session = state_container.sessions.open_editor(artifact)
        logger.info(
            "Opened editor session %s: media_type=%s bytes=%s",
            session.id,
            artifact.media_type,
            artifact.size,
        )
        return EditorSessionState.from_session(session)

    @app.get("/editor/sessions/{session_id}")
    async def editor_state(session_id: UUID, request: Request) -> EditorSessionState:
        """Return the current editing session state."""
        return EditorSessionState.from_session(_editor(request, session_id))

    @app.post("/editor/sessions/{session_id}/operations")
    async def run_operation(
        session_id: UUID, payload: OperationPayload, request: Request
    ) -> EditorSessionState:
        """Run one transformation against the session image."""
        session = _editor(request, session_id)
        accepted = await session.start(payload.to_request())
        if not accepted:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An operation is already in progress.",
            )
        return EditorSessionState.from_session(session)

    @app.post(
        "/editor/sessions/{session_id}/save", status_code=status.HTTP_201_CREATED
    )
    async def save_image(session_id: UUID, request: Request) -> HistoryEntryView:
        """Save the current image to history."""
        session = _editor(request, session_id)
        try:
            entry = session.save()
        except SessionBusy as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return HistoryEntryView.from_entry(entry)

    @app.post("/editor/sessions/{session_id}/dismiss-error")
    async def dismiss_error(session_id: UUID, request: Request) -> EditorSessionState:
        """Clear a stored failure."""
        session = _editor(request, session_id)
        session.dismiss_error()
        return EditorSessionState.from_session(session)

    @app.delete(
        "/editor/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def close_editor(session_id: UUID, request: Request) -> Response:
        """Close an editing session."""
        state_container: AppContainer = request.app.state.container
        if not state_container.sessions.close_editor(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/history")
    async def history(request: Request) -> dict[str, list[HistoryEntryView]]:
        """Return saved images, newest first."""
        state_container: AppContainer = request.app.state.container
        return {
            "entries": [
                HistoryEntryView.from_entry(entry)
                for entry in state_container.history.list()
            ]
        }

    @app.post("/chat/sessions", status_code=status.HTTP_201_CREATED)
    async def open_conversation(request: Request) -> ConversationState:
        """Start a conversation with the assistant."""
        state_container: AppContainer = request.app.state.container
        session = state_container.sessions.open_conversation()
        return ConversationState.from_session(session)

    @app.get("/chat/sessions/{session_id}")
    async def conversation_state(
        session_id: UUID, request: Request
    ) -> ConversationState:
        """Return the conversation transcript."""
        return ConversationState.from_session(_conversation(request, session_id))

    @app.post("/chat/sessions/{session_id}/messages")
    async def send_message(
        session_id: UUID, payload: ChatMessagePayload, request: Request
    ) -> ConversationState:
        """Send a message and wait for the assistant reply."""
        session = _conversation(request, session_id)
        if session.status is ConversationStatus.AWAITING:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Waiting for the assistant to reply.",
            )
        if not await session.send(payload.text):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=session.notice,
            )
        return ConversationState.from_session(session)

    @app.delete("/chat/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def close_conversation(session_id: UUID, request: Request) -> Response:
        """Close a conversation session."""
        state_container: AppContainer = request.app.state.container
        if not state_container.sessions.close_conversation(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def _editor(request: Request, session_id: UUID) -> EditingSession:
    container: AppContainer = request.app.state.container
    session = container.sessions.get_editor(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session


def _conversation(request: Request, session_id: UUID) -> ConversationSession:
    container: AppContainer = request.app.state.container
    session = container.sessions.get_conversation(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session


def _parse_upload(payload: CreateEditorSession) -> ImageArtifact:
    """Decode an uploaded image or reject the request."""
    if not payload.image and not payload.data:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide an image data URL or base64 data.",
        )
    try:
        if payload.image:
            return from_data_url(payload.image)
        raw = decode(payload.data or "", "application/octet-stream").data
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Image must be base64 encoded.",
        ) from exc
    return ImageArtifact(
        data=raw, media_type=payload.media_type or detect_media_type(raw)
    )
