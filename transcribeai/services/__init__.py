"""Services: ASR + speaker detection orchestration."""
from transcribeai.services.transcription_service import TranscriptionService

__all__ = ["TranscriptionService"]
