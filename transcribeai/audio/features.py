"""
Frame-level features for the speaker heuristic.

All series use the same hop (sample_rate // 100), so frame i starts at
i / 100 seconds regardless of window size:
- voice activity: 512-sample window, RMS > 0.02
- energy envelope: 512-sample window, RMS
- pitch contour: 2048-sample window, autocorrelation estimate (0 = unvoiced)

Windows near the end of the clip are clamped to the samples available, so
the last frames are shorter than nominal.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from transcribeai.audio.pitch import estimate_pitch, frame_rms

logger = logging.getLogger(__name__)

FRAMES_PER_SECOND = 100
VAD_FRAME_SIZE = 512
VAD_THRESHOLD = 0.02
ENERGY_FRAME_SIZE = 512
PITCH_FRAME_SIZE = 2048


@dataclass
class AudioAnalysis:
    """Index-aligned frame series for one clip."""

    vad: list[bool] = field(default_factory=list)
    pitches: list[float] = field(default_factory=list)
    energy: list[float] = field(default_factory=list)
    frame_rate: int = FRAMES_PER_SECOND
    hop_size: int = 0

    def __len__(self) -> int:
        return len(self.energy)


def hop_size_for(sample_rate: int) -> int:
    """Samples between frame starts (10 ms)."""
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    return max(1, sample_rate // FRAMES_PER_SECOND)


def iter_frames(samples: np.ndarray, sample_rate: int, frame_size: int) -> Iterator[np.ndarray]:
    """Yield frame_size windows every hop while frame_index * hop < len(samples)."""
    hop = hop_size_for(sample_rate)
    total = len(samples)
    frame_index = 0
    while frame_index * hop < total:
        start = frame_index * hop
        yield samples[start : min(start + frame_size, total)]
        frame_index += 1


def detect_voice_activity(samples: np.ndarray, sample_rate: int) -> list[bool]:
    return [frame_rms(frame) > VAD_THRESHOLD for frame in iter_frames(samples, sample_rate, VAD_FRAME_SIZE)]


def calculate_energy_envelope(samples: np.ndarray, sample_rate: int) -> list[float]:
    return [frame_rms(frame) for frame in iter_frames(samples, sample_rate, ENERGY_FRAME_SIZE)]


def extract_pitch_contour(samples: np.ndarray, sample_rate: int) -> list[float]:
    return [
        estimate_pitch(frame, sample_rate)
        for frame in iter_frames(samples, sample_rate, PITCH_FRAME_SIZE)
    ]


def extract_features(samples: np.ndarray, sample_rate: int) -> AudioAnalysis:
    """Compute voice activity, pitch and energy series for the whole clip."""
    samples = np.asarray(samples, dtype=np.float32)
    analysis = AudioAnalysis(
        vad=detect_voice_activity(samples, sample_rate),
        pitches=extract_pitch_contour(samples, sample_rate),
        energy=calculate_energy_envelope(samples, sample_rate),
        frame_rate=FRAMES_PER_SECOND,
        hop_size=hop_size_for(sample_rate),
    )
    logger.debug(
        "Extracted %d frames (%d voiced) from %d samples @ %dHz",
        len(analysis),
        sum(analysis.vad),
        len(samples),
        sample_rate,
    )
    return analysis
