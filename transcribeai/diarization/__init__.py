"""
Speaker-aware transcription (heuristic diarization only).

- No audio separation; no multi-channel input.
- Labels each ASR chunk Speaker 1 / Speaker 2 from pitch and energy bands.
- Adjacent same-speaker chunks are merged into longer segments.

Limitations (see classifier.py and models.py):
- Speaker labels are approximate; no real identity inference.
- Accuracy depends on mic quality and distance.
"""
from __future__ import annotations

from transcribeai.diarization.classifier import SpeakerBands, SpeakerClassifier, classify_speaker
from transcribeai.diarization.merger import merge_adjacent_segments
from transcribeai.diarization.models import Transcription, TranscriptionSegment, speaker_label
from transcribeai.diarization.segment_builder import build_segments
from transcribeai.diarization.speaker_detection import analyze_speakers

__all__ = [
    "SpeakerBands",
    "SpeakerClassifier",
    "Transcription",
    "TranscriptionSegment",
    "analyze_speakers",
    "build_segments",
    "classify_speaker",
    "merge_adjacent_segments",
    "speaker_label",
]
