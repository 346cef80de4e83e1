"""Spoken discussion routes."""

import logging

from fastapi import APIRouter, Request, Response, WebSocket

from newsdesk.api.errors import status_for
from newsdesk.api.registry import DiscussionRegistry
from newsdesk.api.schemas import (
    DiscussionClosedOut,
    DiscussionOut,
    DiscussionStatusOut,
    EntryOut,
    PlaybackOut,
    PlaybackRequest,
    StartDiscussionRequest,
    TextAnswerRequest,
    TurnOut,
)
from newsdesk.config import Services
from newsdesk.data import DiscussionTurn
from newsdesk.discussion import DiscussionCoordinator, DiscussionState
from newsdesk.errors import NewsdeskError

logger = logging.getLogger(__name__)

STOP_MESSAGE = "stop"


def _audio_url(discussion_id: str) -> str:
    return f"/api/discussions/{discussion_id}/audio"


def _turn_out(
    discussion_id: str, turn: DiscussionTurn, coordinator: DiscussionCoordinator
) -> TurnOut:
    return TurnOut(
        transcript=turn.transcript,
        acknowledgment=turn.acknowledgment,
        follow_up_question=turn.question,
        audio_url=_audio_url(discussion_id),
        state=coordinator.state.value,
    )


def create_discussions_router(services: Services, registry: DiscussionRegistry) -> APIRouter:
    """Create discussions router."""
    router = APIRouter(prefix="/api/discussions", tags=["discussions"])
    transcription = services.config.transcription

    @router.post("", response_model=DiscussionOut, status_code=201)
    async def start_discussion(request: StartDiscussionRequest) -> DiscussionOut:
        """Open a discussion about an article and speak the first question."""
        coordinator = DiscussionCoordinator(
            source_text=request.article_text,
            highlighted_text=request.highlighted_text,
            subject_id=request.subject_id,
            generator=services.require("generator"),
            synthesizer=services.require("synthesizer"),
            transcriber=services.require("transcriber"),
            archive=services.history,
            chunk_size=transcription.chunk_size,
            finish_timeout=transcription.finish_timeout,
        )
        turn = await coordinator.start()
        discussion_id = registry.add(coordinator)
        logger.info("Discussion %s opened for %s", discussion_id, request.subject_id)
        return DiscussionOut(
            discussion_id=discussion_id,
            question=turn.question,
            discussion=turn.discussion,
            audio_url=_audio_url(discussion_id),
            state=coordinator.state.value,
        )

    @router.get("/{discussion_id}", response_model=DiscussionStatusOut)
    async def get_discussion(discussion_id: str) -> DiscussionStatusOut:
        coordinator = registry.get(discussion_id)
        return DiscussionStatusOut(
            discussion_id=discussion_id,
            state=coordinator.state.value,
            topic=coordinator.session.topic,
            question=coordinator.current_question,
            transcript=coordinator.transcript,
            playing=coordinator.playing,
            entries=[EntryOut.from_entry(e) for e in coordinator.session.entries],
        )

    @router.post("/{discussion_id}/answer", response_model=TurnOut)
    async def submit_answer(discussion_id: str, request: Request) -> TurnOut:
        """Transcribe a recorded answer (raw audio body) and respond to it."""
        coordinator = registry.get(discussion_id)
        turn = await coordinator.submit_audio(await request.body())
        return _turn_out(discussion_id, turn, coordinator)

    @router.post("/{discussion_id}/respond", response_model=TurnOut)
    async def respond(discussion_id: str, request: TextAnswerRequest) -> TurnOut:
        """Respond to a typed answer."""
        coordinator = registry.get(discussion_id)
        turn = await coordinator.respond(request.text)
        return _turn_out(discussion_id, turn, coordinator)

    @router.websocket("/{discussion_id}/speech")
    async def speech(websocket: WebSocket, discussion_id: str) -> None:
        """Relay live microphone audio.

        Binary frames are audio chunks. Each time the transcript grows it is
        pushed back as ``{"type": "transcript"}``. A ``stop`` text frame ends
        the answer; the turn comes back as ``{"type": "turn"}`` and the
        socket closes.
        """
        if discussion_id not in registry:
            await websocket.close(code=4404)
            return
        coordinator = registry.get(discussion_id)
        await websocket.accept()

        try:
            await coordinator.start_recording()
            sent = ""
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    if coordinator.state is DiscussionState.TRANSCRIBING:
                        await coordinator.cancel_recording()
                    return
                if message.get("bytes") is not None:
                    await coordinator.relay_audio(message["bytes"])
                    if coordinator.transcript != sent:
                        sent = coordinator.transcript
                        await websocket.send_json({"type": "transcript", "transcript": sent})
                elif message.get("text") == STOP_MESSAGE:
                    turn = await coordinator.stop_recording()
                    payload = _turn_out(discussion_id, turn, coordinator)
                    await websocket.send_json(
                        {"type": "turn", **payload.model_dump(mode="json", by_alias=True)}
                    )
                    break
        except NewsdeskError as e:
            logger.warning("Speech relay for %s failed: %s", discussion_id, e)
            await websocket.send_json(
                {"type": "error", "error": str(e), "status": status_for(e)}
            )
        await websocket.close()

    @router.post("/{discussion_id}/playback", response_model=PlaybackOut)
    async def playback(discussion_id: str, request: PlaybackRequest) -> PlaybackOut:
        """Report that playback ended, or pause/resume it."""
        coordinator = registry.get(discussion_id)
        if request.event == "ended":
            coordinator.playback_finished()
        else:
            coordinator.toggle_playback()
        return PlaybackOut(state=coordinator.state.value, playing=coordinator.playing)

    @router.get("/{discussion_id}/audio")
    async def get_audio(discussion_id: str) -> Response:
        """Most recent synthesized speech of the discussion."""
        coordinator = registry.get(discussion_id)
        if coordinator.audio is None:
            return Response(status_code=404)
        media_type = getattr(services.synthesizer, "media_type", "audio/mpeg")
        return Response(content=coordinator.audio, media_type=media_type)

    @router.delete("/{discussion_id}", response_model=DiscussionClosedOut)
    async def close_discussion(discussion_id: str) -> DiscussionClosedOut:
        """Reset the discussion, saving its history, and discard it."""
        history_id = await registry.close(discussion_id)
        return DiscussionClosedOut(history_id=history_id)

    return router
