"""
ASREngine: abstract interface for Whisper-compatible ASR.

Implementations: LocalWhisperEngine (faster-whisper), CloudflareWhisperEngine.
All run heavy work in executor to avoid blocking the event loop.

Result contract (what the diarization pass consumes):
- flat:        {"text": "..."}
- timestamped: {"chunks": [{"text": "...", "timestamp": [start, end | null]}, ...]}
Chunk order is trusted as chronological.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    import numpy as np

# Called with a fraction in [0, 1] as the engine makes progress
ProgressCallback = Callable[[float], None]


class ASRError(RuntimeError):
    """ASR failed (model missing, remote error, bad response). Message is shown to the user."""


@dataclass
class ASRChunk:
    """One timestamped piece of transcript. end is None when the engine did not close it."""

    text: str
    start: float
    end: Optional[float] = None


@dataclass
class ASRResult:
    """Result of one ASR transcribe call."""

    text: str
    chunks: list[ASRChunk] | None = None

    @property
    def has_chunks(self) -> bool:
        return bool(self.chunks)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ASRResult":
        """Parse the wire format {text} or {chunks: [{text, timestamp: [start, end|null]}]}."""
        chunks: list[ASRChunk] | None = None
        raw_chunks = payload.get("chunks")
        if raw_chunks:
            chunks = []
            for raw in raw_chunks:
                timestamp = raw.get("timestamp") or (0.0, None)
                start = float(timestamp[0] or 0.0)
                end = timestamp[1] if len(timestamp) > 1 else None
                chunks.append(
                    ASRChunk(
                        text=raw.get("text") or "",
                        start=start,
                        end=float(end) if end is not None else None,
                    )
                )
        text = payload.get("text")
        if text is None and chunks:
            text = "".join(c.text for c in chunks)
        return cls(text=text or "", chunks=chunks)


class ASREngine(ABC):
    """
    Abstract ASR engine. Accepts float32 mono audio (normalized [-1, 1]).
    transcribe() is async; implementations may run sync work in executor.
    Failures raise ASRError; they are never swallowed into an empty result.
    """

    @abstractmethod
    async def transcribe(
        self,
        audio: "np.ndarray",
        sample_rate: int,
        on_progress: ProgressCallback | None = None,
    ) -> ASRResult:
        """Transcribe a whole clip. Reports progress in [0, 1] when on_progress is given."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Human-readable model name for API responses."""
        ...
