"""
Speaker classification from pitch and energy bands.

- Averages the pitch contour (voiced frames only) and the energy envelope over
  the frames of a time range.
- Quantizes each average into three bands and sums them.
- Speaker index = band sum modulo max_speakers. With the default of 2 this is
  a binary split by parity: 9 band combinations collapse onto two labels.

Limitations (MUST be kept in sync with product behavior):
- No clustering and no memory across chunks; each range is classified alone.
- A loud low voice and a quiet high voice can land on the same label.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from transcribeai.audio.features import FRAMES_PER_SECOND
from transcribeai.diarization.models import speaker_label

# Pitch bands (Hz): < 130 | 130–160 | >= 160
PITCH_BAND_EDGES = (130.0, 160.0)
# Energy bands (RMS): < 0.05 | 0.05–0.15 | >= 0.15
ENERGY_BAND_EDGES = (0.05, 0.15)
DEFAULT_MAX_SPEAKERS = 2


@dataclass(frozen=True)
class SpeakerBands:
    """Band indices for one time range, before they are folded onto a speaker."""

    pitch_band: int
    energy_band: int

    @property
    def combined(self) -> int:
        return self.pitch_band + self.energy_band


def _band(value: float, edges: tuple[float, float]) -> int:
    low, high = edges
    if value < low:
        return 0
    if value < high:
        return 1
    return 2


def pitch_band(avg_pitch: float) -> int:
    return _band(avg_pitch, PITCH_BAND_EDGES)


def energy_band(avg_energy: float) -> int:
    return _band(avg_energy, ENERGY_BAND_EDGES)


def frame_range(start_time: float, end_time: float, series_length: int) -> range:
    """Frame indices for [start_time, end_time), saturated at the series bounds."""
    start_frame = max(0, math.floor(start_time * FRAMES_PER_SECOND))
    end_frame = min(series_length, math.floor(end_time * FRAMES_PER_SECOND))
    return range(start_frame, max(start_frame, end_frame))


def average_pitch(pitches: Sequence[float], start_time: float, end_time: float) -> float:
    """Mean of the non-zero pitches in range; 0.0 when none are voiced."""
    voiced = [pitches[i] for i in frame_range(start_time, end_time, len(pitches)) if pitches[i] > 0]
    return sum(voiced) / len(voiced) if voiced else 0.0


def average_energy(energy: Sequence[float], start_time: float, end_time: float) -> float:
    """Mean of every energy value in range; 0.0 for an empty range."""
    frames = frame_range(start_time, end_time, len(energy))
    if len(frames) == 0:
        return 0.0
    return sum(energy[i] for i in frames) / len(frames)


def speaker_bands(
    start_time: float,
    end_time: float,
    pitches: Sequence[float],
    energy: Sequence[float],
) -> SpeakerBands:
    return SpeakerBands(
        pitch_band=pitch_band(average_pitch(pitches, start_time, end_time)),
        energy_band=energy_band(average_energy(energy, start_time, end_time)),
    )


def classify_speaker(
    start_time: float,
    end_time: float,
    pitches: Sequence[float],
    energy: Sequence[float],
    max_speakers: int = DEFAULT_MAX_SPEAKERS,
) -> int:
    """Return the 0-based speaker index for [start_time, end_time)."""
    if max_speakers < 1:
        raise ValueError(f"max_speakers must be >= 1, got {max_speakers}")
    return speaker_bands(start_time, end_time, pitches, energy).combined % max_speakers


class SpeakerClassifier:
    """
    Classifies time ranges against one clip's pitch and energy series.
    Series are read-only; one instance per clip.
    """

    def __init__(
        self,
        pitches: Sequence[float],
        energy: Sequence[float],
        max_speakers: int = DEFAULT_MAX_SPEAKERS,
    ) -> None:
        self._pitches = pitches
        self._energy = energy
        self._max_speakers = max_speakers

    def classify(self, start_time: float, end_time: float) -> int:
        return classify_speaker(start_time, end_time, self._pitches, self._energy, self._max_speakers)

    def label(self, start_time: float, end_time: float) -> str:
        """Speaker label (Speaker 1, Speaker 2, ...) for the range."""
        return speaker_label(self.classify(start_time, end_time))
