"""ASR: swappable Whisper-compatible engines."""
from .base import ASRChunk, ASREngine, ASRError, ASRResult, ProgressCallback
from .local_whisper import LocalWhisperEngine, load_whisper_model
from .cloudflare import CloudflareWhisperEngine

__all__ = [
    "ASRChunk",
    "ASREngine",
    "ASRError",
    "ASRResult",
    "ProgressCallback",
    "LocalWhisperEngine",
    "CloudflareWhisperEngine",
    "load_whisper_model",
]
