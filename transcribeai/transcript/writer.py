"""
Transcript export: plain-text rendering of a speaker-tagged transcription.

One line per segment:
    [MM:SS - MM:SS] Speaker 1: text
Optionally saved as transcripts/transcription_{unix_ms}.txt.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Optional

from transcribeai.config import get_settings
from transcribeai.diarization.models import Transcription, TranscriptionSegment

logger = logging.getLogger(__name__)


def format_time(seconds: float) -> str:
    """MM:SS with floored minutes and seconds."""
    seconds = max(0.0, seconds)
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins:02d}:{secs:02d}"


def format_segment_line(segment: TranscriptionSegment) -> str:
    return f"[{format_time(segment.start)} - {format_time(segment.end)}] {segment.speaker}: {segment.text}"


def format_transcript_text(transcription: Transcription) -> str:
    return "\n".join(format_segment_line(seg) for seg in transcription.segments)


def transcript_filename(timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"transcription_{timestamp_ms}.txt"


def save_transcript(transcription: Transcription, directory: Optional[str] = None) -> Optional[str]:
    """
    Write the text export when TRANSCRIPT_SAVE_ENABLED is true.
    Returns the file path, or None when disabled or the write failed (logged).
    """
    settings = get_settings()
    if not settings.TRANSCRIPT_SAVE_ENABLED:
        return None
    directory = directory or settings.TRANSCRIPT_DIR
    path = os.path.join(directory, transcript_filename())
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_transcript_text(transcription))
    except OSError as e:
        logger.warning("Transcript save failed for %s: %s", path, e)
        return None
    logger.info("Transcript saved: %s", path)
    return path
