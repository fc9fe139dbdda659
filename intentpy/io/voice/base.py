from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

InterimCallback = Callable[[str], None]
ErrorCallback = Callable[[Exception], None]


class VoiceInputInterface(ABC):
    """Abstract base for speech capture producing a text transcript.

    ``listen`` resolves with the final transcript. Interim transcripts and
    capture errors are reported through the optional callbacks.
    """

    def __init__(
        self,
        language: str = "en-US",
        on_interim_result: Optional[InterimCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self.language = language
        self.on_interim_result = on_interim_result
        self.on_error = on_error

    @abstractmethod
    async def listen(self) -> str:
        """Capture speech until a final result is produced."""
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> str:
        """Stop capturing and return whatever has been transcribed so far."""
        raise NotImplementedError
