"""Turn-taking for spoken discussions about an article."""

import asyncio
import logging
from collections.abc import AsyncIterable, Iterator
from contextlib import contextmanager

from newsdesk.data import ConversationEntry, DiscussionTurn, EntryKind, Usage, utc_now
from newsdesk.discussion.session import ConversationSession, DiscussionArchive, topic_for
from newsdesk.discussion.state import DiscussionState
from newsdesk.errors import (
    EmptyInputError,
    InvalidTransitionError,
    NoSpeechDetectedError,
    TurnInProgressError,
)
from newsdesk.generation.base import DiscussionGenerator
from newsdesk.speech.base import SpeechSynthesizer
from newsdesk.transcription import (
    DEFAULT_CHUNK_SIZE,
    LiveTranscriber,
    TranscriptBuffer,
    TranscriptionConnection,
    iter_chunks,
    relay,
    relay_stream,
)

logger = logging.getLogger(__name__)


class DiscussionCoordinator:
    """Drives one reader through a spoken discussion.

    The model speaks a short discussion and a question, the reader answers
    out loud, the answer is transcribed, evaluated and answered with an
    acknowledgment plus a follow-up question, and so on until the reader
    resets. Each completed exchange is committed to the session log in one
    step; when the discussion ends the log is flushed to the archive once.

    A collaborator failure never leaves the coordinator in a transient
    state: it returns to the state it was in before the call and the error
    propagates to the caller.
    """

    def __init__(
        self,
        *,
        source_text: str,
        generator: DiscussionGenerator,
        synthesizer: SpeechSynthesizer,
        transcriber: LiveTranscriber,
        archive: DiscussionArchive | None = None,
        subject_id: str = "anonymous",
        highlighted_text: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        finish_timeout: float | None = None,
    ):
        """Initialize the coordinator.

        Args:
            source_text: Full article text.
            generator: Text model that opens and continues the discussion.
            synthesizer: Text-to-speech service.
            transcriber: Live speech-to-text service.
            archive: Where the conversation log is flushed on reset.
            subject_id: Reader the discussion is filed under.
            highlighted_text: Excerpt to discuss instead of the full article.
            chunk_size: Chunk size used when relaying a recorded blob.
            finish_timeout: Seconds to wait for the final transcript after
                the audio stream ends. None waits until the service closes.
        """
        self._source_text = source_text
        self._highlighted_text = highlighted_text or None
        self._generator = generator
        self._synthesizer = synthesizer
        self._transcriber = transcriber
        self._archive = archive
        self._subject_id = subject_id
        self._chunk_size = chunk_size
        self._finish_timeout = finish_timeout

        self._state = DiscussionState.IDLE
        self._session = ConversationSession(topic_for(source_text, self._highlighted_text))
        self._buffer = TranscriptBuffer()
        self._connection: TranscriptionConnection | None = None
        self._reader: asyncio.Task[None] | None = None
        self._question: str | None = None
        self._acknowledgment: str | None = None
        self._audio: bytes | None = None
        self._playing = False
        self._usage = Usage()

    # ---- read-only view ----

    @property
    def state(self) -> DiscussionState:
        return self._state

    @property
    def session(self) -> ConversationSession:
        return self._session

    @property
    def context(self) -> str:
        """Text the discussion is about."""
        return self._highlighted_text or self._source_text

    @property
    def subject_id(self) -> str:
        return self._subject_id

    @property
    def transcript(self) -> str:
        return self._buffer.current()

    @property
    def current_question(self) -> str | None:
        return self._question

    @property
    def acknowledgment(self) -> str | None:
        return self._acknowledgment

    @property
    def audio(self) -> bytes | None:
        """Most recent synthesized speech."""
        return self._audio

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def usage(self) -> Usage:
        return self._usage

    # ---- discussion lifecycle ----

    async def start(self) -> DiscussionTurn:
        """Open a new discussion and speak its first question.

        Any previous session is flushed and discarded first.
        """
        self._require_settled("start a discussion")
        if self._state is DiscussionState.TRANSCRIBING:
            raise InvalidTransitionError("Stop recording before starting a new discussion")
        text = self.context
        if not text.strip():
            raise EmptyInputError("No text provided for discussion")

        await self._flush()
        self._clear()

        with self._pending(DiscussionState.GENERATING, fallback=DiscussionState.IDLE):
            opening, usage = await self._generator.open_discussion(text)
            audio, speech_usage = await self._synthesizer.synthesize(
                f"{opening.discussion} Here's your question: {opening.question}"
            )

        self._usage += usage + speech_usage
        self._session.commit([ConversationEntry(EntryKind.QUESTION, opening.question)])
        self._question = opening.question
        self._speak(audio)
        logger.info("Discussion started for %s: %s", self._subject_id, opening.question)
        return DiscussionTurn(question=opening.question, audio=audio, discussion=opening.discussion)

    async def reset(self) -> str | None:
        """End the discussion.

        Cancels any recording, flushes the session to the archive if it has
        entries, and clears all per-discussion state.

        Returns:
            Archive id of the flushed session, if one was saved.
        """
        if self._state.is_busy:
            raise TurnInProgressError("Wait for the current turn to finish before resetting")
        if self._state is DiscussionState.TRANSCRIBING:
            await self._abort_recording()
        summary_id = await self._flush()
        self._clear()
        self._state = DiscussionState.IDLE
        return summary_id

    # ---- recording ----

    async def start_recording(self) -> None:
        """Open a live transcription connection for the reader's answer."""
        self._require(DiscussionState.AWAITING_USER_SPEECH, action="start recording")
        self._buffer.reset()
        with self._pending(
            DiscussionState.TRANSCRIBING, fallback=DiscussionState.AWAITING_USER_SPEECH
        ):
            connection = await self._transcriber.connect()
        self._connection = connection
        self._reader = asyncio.create_task(self._collect(connection))
        logger.debug("Recording started")

    async def relay_audio(self, chunk: bytes) -> bool:
        """Forward one chunk of captured audio.

        Returns:
            False if the chunk was dropped because the connection is gone.
        """
        self._require(DiscussionState.TRANSCRIBING, action="relay audio")
        return await relay(chunk, self._live_connection("relay audio"))

    async def record(self, chunks: AsyncIterable[bytes]) -> DiscussionTurn:
        """Relay an audio stream, then stop recording and answer."""
        self._require(DiscussionState.TRANSCRIBING, action="record")
        delivered = await relay_stream(chunks, self._live_connection("record"))
        logger.debug("Relayed %d audio bytes", delivered)
        return await self.stop_recording()

    async def submit_audio(self, audio: bytes, *, chunk_size: int | None = None) -> DiscussionTurn:
        """Transcribe a recorded answer in one call and respond to it."""
        if self._state is DiscussionState.AWAITING_USER_SPEECH:
            await self.start_recording()
        self._require(DiscussionState.TRANSCRIBING, action="submit audio")
        for chunk in iter_chunks(audio, chunk_size or self._chunk_size):
            await self.relay_audio(chunk)
        return await self.stop_recording()

    async def stop_recording(self) -> DiscussionTurn:
        """End the recording and respond to whatever was transcribed.

        The accumulated transcript is taken as final even if the connection
        failed along the way.

        Raises:
            NoSpeechDetectedError: Nothing was transcribed.
        """
        self._require(DiscussionState.TRANSCRIBING, action="stop recording")
        with self._pending(
            DiscussionState.PROCESSING, fallback=DiscussionState.AWAITING_USER_SPEECH
        ):
            await self._finish_recording()
        self._state = DiscussionState.AWAITING_USER_SPEECH

        transcript = self._buffer.current()
        if not transcript:
            logger.info("No speech detected")
            raise NoSpeechDetectedError()
        return await self.respond(transcript)

    async def cancel_recording(self) -> None:
        """Drop the recording and its transcript without answering."""
        self._require(DiscussionState.TRANSCRIBING, action="cancel recording")
        with self._pending(
            DiscussionState.PROCESSING, fallback=DiscussionState.AWAITING_USER_SPEECH
        ):
            await self._abort_recording()
        self._buffer.reset()
        self._state = DiscussionState.AWAITING_USER_SPEECH

    # ---- answering ----

    async def respond(self, text: str) -> DiscussionTurn:
        """Evaluate the reader's answer and speak an acknowledgment plus a follow-up."""
        if self._state is DiscussionState.TRANSCRIBING:
            with self._pending(
                DiscussionState.PROCESSING, fallback=DiscussionState.AWAITING_USER_SPEECH
            ):
                await self._abort_recording()
            self._state = DiscussionState.AWAITING_USER_SPEECH
        self._require(DiscussionState.AWAITING_USER_SPEECH, action="respond")
        text = text.strip()
        if not text:
            raise EmptyInputError("Response is empty")
        if self._question is None:
            raise InvalidTransitionError("No question has been asked yet")

        responded_at = utc_now()
        with self._pending(
            DiscussionState.PROCESSING, fallback=DiscussionState.AWAITING_USER_SPEECH
        ):
            evaluation, usage = await self._generator.evaluate_response(
                self._question, text, self.context
            )
            audio, speech_usage = await self._synthesizer.synthesize(
                f"{evaluation.acknowledgment} {evaluation.follow_up_question}"
            )

        self._usage += usage + speech_usage
        answered_at = utc_now()
        self._session.commit(
            [
                ConversationEntry(EntryKind.RESPONSE, text, responded_at),
                ConversationEntry(EntryKind.ACKNOWLEDGMENT, evaluation.acknowledgment, answered_at),
                ConversationEntry(EntryKind.QUESTION, evaluation.follow_up_question, answered_at),
            ]
        )
        self._question = evaluation.follow_up_question
        self._acknowledgment = evaluation.acknowledgment
        self._speak(audio)
        return DiscussionTurn(
            question=evaluation.follow_up_question,
            audio=audio,
            acknowledgment=evaluation.acknowledgment,
            transcript=text,
        )

    # ---- playback ----

    def playback_finished(self) -> None:
        """The reader heard the whole utterance; it is their turn."""
        self._playing = False
        if self._state is DiscussionState.SPEAKING:
            self._state = DiscussionState.AWAITING_USER_SPEECH

    def toggle_playback(self) -> bool:
        """Pause or resume the current utterance. Returns the new playing flag."""
        if self._audio is None:
            raise InvalidTransitionError("Nothing to play")
        self._playing = not self._playing
        if self._state is DiscussionState.SPEAKING:
            self._state = DiscussionState.AWAITING_USER_SPEECH
        return self._playing

    # ---- internals ----

    def _require(self, *allowed: DiscussionState, action: str) -> None:
        if self._state in allowed:
            return
        if self._state.is_busy:
            raise TurnInProgressError(f"Cannot {action} while {self._state.value}")
        raise InvalidTransitionError(f"Cannot {action} while {self._state.value}")

    def _require_settled(self, action: str) -> None:
        if self._state.is_busy:
            raise TurnInProgressError(f"Cannot {action} while {self._state.value}")

    @contextmanager
    def _pending(self, busy: DiscussionState, *, fallback: DiscussionState) -> Iterator[None]:
        self._state = busy
        try:
            yield
        except BaseException:
            self._state = fallback
            raise

    def _live_connection(self, action: str) -> TranscriptionConnection:
        if self._connection is None:
            raise InvalidTransitionError(f"Cannot {action}: recording has ended")
        return self._connection

    def _speak(self, audio: bytes) -> None:
        self._audio = audio
        self._playing = True
        self._state = DiscussionState.SPEAKING

    async def _collect(self, connection: TranscriptionConnection) -> None:
        try:
            async for fragment in connection:
                self._buffer.append(fragment)
        except Exception as e:
            logger.warning("Transcription failed, keeping partial transcript: %s", e)

    async def _finish_recording(self) -> None:
        connection, reader = self._connection, self._reader
        self._connection = None
        self._reader = None
        if connection is None or reader is None:
            return
        if not connection.closed:
            try:
                await connection.finish()
            except Exception as e:
                logger.warning("Could not finish transcription stream: %s", e)
        try:
            await asyncio.wait_for(reader, timeout=self._finish_timeout)
        except TimeoutError:
            logger.warning("Timed out waiting for the final transcript")
            await connection.close()

    async def _abort_recording(self) -> None:
        connection, reader = self._connection, self._reader
        self._connection = None
        self._reader = None
        if reader is not None:
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass
        if connection is not None:
            await connection.close()

    async def _flush(self) -> str | None:
        if not len(self._session):
            return None
        if self._archive is None:
            logger.debug("No archive configured, dropping %d entries", len(self._session))
            return None
        try:
            return await self._archive.save(self._session.to_summary(self._subject_id))
        except Exception as e:
            logger.error("Failed to save discussion history: %s", e)
            return None

    def _clear(self) -> None:
        self._session = ConversationSession(topic_for(self._source_text, self._highlighted_text))
        self._buffer.reset()
        self._question = None
        self._acknowledgment = None
        self._audio = None
        self._playing = False
