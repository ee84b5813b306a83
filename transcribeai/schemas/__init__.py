"""Pydantic schemas for API request/response."""
from transcribeai.schemas.transcription import (
    ASRChunkIn,
    ASRPayload,
    DiarizeRequest,
    SegmentOut,
    TranscriptionResponse,
)

__all__ = [
    "ASRChunkIn",
    "ASRPayload",
    "DiarizeRequest",
    "SegmentOut",
    "TranscriptionResponse",
]
