"""
TranscriptionService: ASR then speaker detection for one clip.

Flow: accept samples (20%) -> ASR (20–80%, scaled from engine progress)
-> speaker detection in executor (100%).

The ASR engine is injected by the host; this service holds no model state.
ASR errors propagate unchanged; speaker detection never runs after one.
"""
from __future__ import annotations

import asyncio
import logging

import numpy as np

from transcribeai.asr.base import ASREngine, ProgressCallback
from transcribeai.config import get_settings
from transcribeai.diarization.models import Transcription
from transcribeai.diarization.speaker_detection import analyze_speakers

logger = logging.getLogger(__name__)

PROGRESS_AUDIO_READY = 0.2
PROGRESS_ASR_SPAN = 0.6
PROGRESS_ASR_DONE = 0.8
PROGRESS_DONE = 1.0


class TranscriptionService:
    def __init__(
        self,
        engine: ASREngine,
        language: str | None = None,
        max_speakers: int | None = None,
    ) -> None:
        settings = get_settings()
        self._engine = engine
        self._language = language or settings.DEFAULT_LANGUAGE
        self._max_speakers = max_speakers or settings.DIARIZATION_MAX_SPEAKERS

    async def transcribe(
        self,
        samples: np.ndarray,
        sample_rate: int,
        on_progress: ProgressCallback | None = None,
    ) -> Transcription:
        """Transcribe and speaker-tag samples. Progress is reported in [0, 1]."""
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")

        def report(value: float) -> None:
            if on_progress is not None:
                on_progress(value)

        samples = np.asarray(samples, dtype=np.float32)
        duration = len(samples) / sample_rate
        report(PROGRESS_AUDIO_READY)

        result = await self._engine.transcribe(
            samples,
            sample_rate,
            on_progress=lambda p: report(PROGRESS_AUDIO_READY + p * PROGRESS_ASR_SPAN),
        )
        report(PROGRESS_ASR_DONE)
        logger.info(
            "ASR (%s) returned %d chars, %d chunks for %.2fs of audio",
            self._engine.model_name,
            len(result.text),
            len(result.chunks or []),
            duration,
        )

        loop = asyncio.get_running_loop()
        segments = await loop.run_in_executor(
            None,
            analyze_speakers,
            samples,
            sample_rate,
            result,
            duration,
            self._max_speakers,
        )
        report(PROGRESS_DONE)
        return Transcription(segments=segments, duration=duration, language=self._language)
