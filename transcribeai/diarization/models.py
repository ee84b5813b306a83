"""
Speaker-tagged segment structure for the transcript pipeline.

Each segment includes:
- id: position in the pre-merge sequence (a merged segment keeps its first id)
- start, end (seconds, clip-relative; start <= end)
- text
- speaker ("Speaker 1", "Speaker 2", ...), from the classifier's index + 1
- confidence in [0, 1]

Limitations (heuristic, single channel):
- Speaker labels come from coarse pitch/energy bands; they are not identities.
- Two speakers with similar pitch and loudness get the same label.
"""
from __future__ import annotations

from dataclasses import dataclass, field

SPEAKER_PREFIX = "Speaker "
DEFAULT_CONFIDENCE = 0.85


def speaker_label(index: int) -> str:
    """Stable label for speaker index: Speaker 1, Speaker 2, ..."""
    return f"{SPEAKER_PREFIX}{index + 1}"


@dataclass
class TranscriptionSegment:
    """One speaker-tagged transcript segment."""

    id: int
    start: float
    end: float
    text: str
    speaker: str
    confidence: float = DEFAULT_CONFIDENCE


@dataclass
class Transcription:
    """Final result handed to the caller: merged segments, clip duration, language tag."""

    segments: list[TranscriptionSegment] = field(default_factory=list)
    duration: float = 0.0
    language: str = "en"
