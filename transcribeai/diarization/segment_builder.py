"""
SegmentBuilder: one speaker-tagged segment per ASR chunk.

- Timestamped chunks: end defaults to start + 5 s, speaker is classified over
  [start, end), text is trimmed, ids count up from 0.
- No chunks (flat transcript): one segment covering the whole clip, Speaker 1.
Every segment starts with confidence 0.85.
"""
from __future__ import annotations

from transcribeai.asr.base import ASRResult
from transcribeai.diarization.classifier import SpeakerClassifier
from transcribeai.diarization.models import DEFAULT_CONFIDENCE, TranscriptionSegment, speaker_label

DEFAULT_CHUNK_DURATION = 5.0


def build_segments(
    asr_result: ASRResult,
    classifier: SpeakerClassifier,
    duration: float,
) -> list[TranscriptionSegment]:
    if not asr_result.has_chunks:
        return [
            TranscriptionSegment(
                id=0,
                start=0.0,
                end=max(0.0, duration),
                text=asr_result.text,
                speaker=speaker_label(0),
                confidence=DEFAULT_CONFIDENCE,
            )
        ]

    segments: list[TranscriptionSegment] = []
    for segment_id, chunk in enumerate(asr_result.chunks):
        start = chunk.start
        end = chunk.end if chunk.end is not None else start + DEFAULT_CHUNK_DURATION
        # Engines occasionally close a chunk before it opens
        end = max(end, start)
        segments.append(
            TranscriptionSegment(
                id=segment_id,
                start=start,
                end=end,
                text=chunk.text.strip(),
                speaker=classifier.label(start, end),
                confidence=DEFAULT_CONFIDENCE,
            )
        )
    return segments
