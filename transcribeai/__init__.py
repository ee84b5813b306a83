"""TranscribeAI: ASR transcripts with lightweight pitch/energy speaker labels."""

__version__ = "0.1.0"
