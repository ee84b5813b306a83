"""
LocalWhisperEngine: Whisper-compatible ASR using faster-whisper.

- Model loaded ONCE by the host (load_whisper_model) and injected at construction.
- Audio is split into ASR_CHUNK_LENGTH_SECONDS windows; progress is reported per window.
- Segment timestamps are shifted by the window offset so chunks are clip-relative.
- Audio: float32 mono [-1, 1]; resampled to 16 kHz when needed.
- Runs in executor so event loop stays responsive.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import numpy as np

from transcribeai.asr.base import ASRChunk, ASREngine, ASRError, ASRResult, ProgressCallback
from transcribeai.audio.pcm import resample_linear, split_into_chunks
from transcribeai.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Type for shared WhisperModel (loaded at startup)
WhisperModelT = Any

WHISPER_SAMPLE_RATE = 16000


def load_whisper_model(settings: Settings | None = None) -> WhisperModelT:
    """Load faster-whisper model once. Called at startup when ASR_BACKEND=local."""
    try:
        from faster_whisper import WhisperModel
    except ImportError as err:
        raise ImportError(
            "faster-whisper is required for ASR_BACKEND=local. "
            "Install with: pip install faster-whisper"
        ) from err
    settings = settings or get_settings()
    logger.info(
        "Loading faster-whisper model %s (device=%s, compute_type=%s)",
        settings.LOCAL_WHISPER_MODEL,
        settings.LOCAL_WHISPER_DEVICE,
        settings.LOCAL_WHISPER_COMPUTE_TYPE,
    )
    return WhisperModel(
        settings.LOCAL_WHISPER_MODEL,
        device=settings.LOCAL_WHISPER_DEVICE,
        compute_type=settings.LOCAL_WHISPER_COMPUTE_TYPE,
    )


class LocalWhisperEngine(ASREngine):
    """
    Local Whisper via faster-whisper. Uses shared model (singleton owned by the host).
    transcribe() is async; heavy work runs in executor.
    """

    def __init__(self, model: WhisperModelT | None = None, settings: Settings | None = None) -> None:
        """
        model: shared WhisperModel instance (loaded at app startup).
        If None, transcribe() raises ASRError.
        """
        self._model = model
        self._settings = settings or get_settings()

    def _transcribe_window(self, audio: np.ndarray, offset: float) -> list[ASRChunk]:
        """Synchronous decode of one window; run from executor."""
        segments, _ = self._model.transcribe(
            audio,
            beam_size=self._settings.LOCAL_WHISPER_BEAM_SIZE,
            condition_on_previous_text=False,
        )
        chunks: list[ASRChunk] = []
        for seg in segments:
            text = seg.text or ""
            if not text.strip():
                continue
            chunks.append(
                ASRChunk(
                    text=text,
                    start=offset + seg.start,
                    end=offset + seg.end if seg.end is not None else None,
                )
            )
        return chunks

    async def transcribe(
        self,
        audio: np.ndarray,
        sample_rate: int,
        on_progress: ProgressCallback | None = None,
    ) -> ASRResult:
        if self._model is None:
            raise ASRError("Whisper model is not loaded")

        if sample_rate != WHISPER_SAMPLE_RATE:
            logger.warning("Audio is %sHz, resampling to %sHz for Whisper", sample_rate, WHISPER_SAMPLE_RATE)
            audio = resample_linear(audio, sample_rate, WHISPER_SAMPLE_RATE)

        windows = split_into_chunks(audio, WHISPER_SAMPLE_RATE, self._settings.ASR_CHUNK_LENGTH_SECONDS)
        loop = asyncio.get_running_loop()
        chunks: list[ASRChunk] = []
        for i, window in enumerate(windows):
            logger.info("Transcribing window %d/%d (offset %.1fs)", i + 1, len(windows), window.timestamp)
            try:
                window_chunks = await loop.run_in_executor(
                    None,
                    self._transcribe_window,
                    window.samples,
                    window.timestamp,
                )
            except Exception as e:
                raise ASRError(f"Whisper transcription failed: {e}") from e
            chunks.extend(window_chunks)
            if on_progress is not None:
                on_progress((i + 1) / len(windows))

        text = "".join(c.text for c in chunks).strip()
        return ASRResult(text=text, chunks=chunks or None)

    @property
    def model_name(self) -> str:
        return f"faster-whisper-{self._settings.LOCAL_WHISPER_MODEL}"
