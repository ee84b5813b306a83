"""
SegmentMerger: coalesces adjacent segments of the same speaker.

Next is folded into the running segment when all hold:
- same speaker label
- next.start - current.end < 1 s (signed; overlaps qualify)
- len(current.text) + len(next.text) < 500
Merging extends end (never shrinks it), joins text with one space and averages confidence.
Input segments are never modified; merged segments are new objects.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from transcribeai.diarization.models import TranscriptionSegment

MAX_MERGE_GAP_SECONDS = 1.0
MAX_MERGED_TEXT_CHARS = 500


def can_merge(current: TranscriptionSegment, nxt: TranscriptionSegment) -> bool:
    return (
        nxt.speaker == current.speaker
        and nxt.start - current.end < MAX_MERGE_GAP_SECONDS
        and len(current.text) + len(nxt.text) < MAX_MERGED_TEXT_CHARS
    )


def _merge_pair(current: TranscriptionSegment, nxt: TranscriptionSegment) -> TranscriptionSegment:
    return replace(
        current,
        end=max(current.end, nxt.end),
        text=f"{current.text} {nxt.text}",
        confidence=(current.confidence + nxt.confidence) / 2,
    )


def merge_adjacent_segments(segments: Sequence[TranscriptionSegment]) -> list[TranscriptionSegment]:
    if not segments:
        return []

    merged: list[TranscriptionSegment] = []
    current = replace(segments[0])
    for nxt in segments[1:]:
        if can_merge(current, nxt):
            current = _merge_pair(current, nxt)
        else:
            merged.append(current)
            current = replace(nxt)
    merged.append(current)
    return merged
