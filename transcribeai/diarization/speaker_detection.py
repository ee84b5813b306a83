"""
Speaker detection: features -> per-chunk classification -> merged segments.

Pure function of (samples, ASR result); safe to run concurrently for
independent clips. Series are built once and only read afterwards.
"""
from __future__ import annotations

import logging

import numpy as np

from transcribeai.asr.base import ASRResult
from transcribeai.audio.features import extract_features
from transcribeai.diarization.classifier import DEFAULT_MAX_SPEAKERS, SpeakerClassifier
from transcribeai.diarization.merger import merge_adjacent_segments
from transcribeai.diarization.models import TranscriptionSegment
from transcribeai.diarization.segment_builder import build_segments

logger = logging.getLogger(__name__)


def analyze_speakers(
    samples: np.ndarray,
    sample_rate: int,
    asr_result: ASRResult,
    duration: float | None = None,
    max_speakers: int = DEFAULT_MAX_SPEAKERS,
) -> list[TranscriptionSegment]:
    """
    Tag ASR output with speakers.
    duration defaults to len(samples) / sample_rate; it only matters for the
    whole-clip fallback when the engine returned no chunks.
    """
    analysis = extract_features(samples, sample_rate)
    if duration is None:
        duration = len(samples) / sample_rate

    classifier = SpeakerClassifier(analysis.pitches, analysis.energy, max_speakers=max_speakers)
    segments = build_segments(asr_result, classifier, duration)
    merged = merge_adjacent_segments(segments)
    logger.info(
        "Speaker detection: %d frames, %d segments, %d after merge",
        len(analysis),
        len(segments),
        len(merged),
    )
    return merged
