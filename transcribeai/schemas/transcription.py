"""
Schemas for the transcription and diarization API.

TranscriptionResponse mirrors the internal Transcription: merged segments,
clip duration, language tag (set by the caller, never detected).
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from transcribeai.diarization.models import Transcription


class SegmentOut(BaseModel):
    """One speaker-tagged segment."""

    id: int = Field(..., description="Pre-merge sequence id (merged segments keep the first id)")
    start: float = Field(..., description="Start time in seconds")
    end: float = Field(..., description="End time in seconds")
    text: str
    speaker: str = Field(..., description="Speaker 1, Speaker 2, ...")
    confidence: float = Field(..., ge=0.0, le=1.0)


class TranscriptionResponse(BaseModel):
    """Response body for POST /api/transcribe and POST /api/diarize."""

    segments: list[SegmentOut]
    duration: float = Field(..., description="Clip duration in seconds")
    language: str
    model: str | None = Field(None, description="ASR model name; absent for /api/diarize")

    @classmethod
    def from_transcription(cls, transcription: Transcription, model: str | None = None) -> "TranscriptionResponse":
        return cls(
            segments=[
                SegmentOut(
                    id=s.id,
                    start=s.start,
                    end=s.end,
                    text=s.text,
                    speaker=s.speaker,
                    confidence=s.confidence,
                )
                for s in transcription.segments
            ],
            duration=transcription.duration,
            language=transcription.language,
            model=model,
        )


class ASRChunkIn(BaseModel):
    """One ASR chunk in the collaborator wire format."""

    text: str
    timestamp: tuple[float, float | None] = Field(..., description="[start, end]; end may be null")


class ASRPayload(BaseModel):
    """ASR output: flat text, or timestamped chunks."""

    text: str = ""
    chunks: list[ASRChunkIn] | None = None


class DiarizeRequest(BaseModel):
    """Request body for POST /api/diarize: audio plus an existing ASR result."""

    audio_base64: str = Field(..., description="Mono float32 little-endian PCM, base64-encoded")
    sample_rate: int = Field(16000, gt=0, description="Sample rate of audio_base64 in Hz")
    asr: ASRPayload
    language: str | None = Field(None, description="Language tag for the response; defaults to DEFAULT_LANGUAGE")
    duration: float | None = Field(
        None,
        ge=0.0,
        description="Clip duration in seconds; defaults to samples / sample_rate",
    )
