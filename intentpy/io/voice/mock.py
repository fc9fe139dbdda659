from __future__ import annotations

from typing import List, Optional, Sequence

from ...core.errors import VoiceInputError
from .base import ErrorCallback, InterimCallback, VoiceInputInterface


class MockVoiceInput(VoiceInputInterface):
    """Voice input that replays scripted transcripts.

    Each call to :meth:`listen` consumes the next transcript, emitting its
    words one by one as interim results. When ``error`` is given, listening
    fails with it instead.
    """

    def __init__(
        self,
        transcripts: Sequence[str] = (),
        error: Optional[Exception] = None,
        on_interim_result: Optional[InterimCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        super().__init__(on_interim_result=on_interim_result, on_error=on_error)
        self._pending: List[str] = list(transcripts)
        self._error = error
        self._current = ""

    async def listen(self) -> str:
        if self._error is not None:
            if self.on_error:
                self.on_error(self._error)
            raise self._error
        if not self._pending:
            error = VoiceInputError("No speech detected")
            if self.on_error:
                self.on_error(error)
            raise error

        transcript = self._pending.pop(0)
        self._current = ""
        for word in transcript.split():
            self._current = f"{self._current} {word}".strip()
            if self.on_interim_result:
                self.on_interim_result(self._current)
        return transcript

    def stop(self) -> str:
        return self._current
