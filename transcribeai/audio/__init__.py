"""Audio pipeline: PCM conversion, frame features (VAD, energy, pitch)."""
from .features import (
    AudioAnalysis,
    calculate_energy_envelope,
    detect_voice_activity,
    extract_features,
    extract_pitch_contour,
)
from .pcm import AudioChunk, pcm16_bytes_to_float32, split_into_chunks
from .pitch import estimate_pitch, frame_rms

__all__ = [
    "AudioAnalysis",
    "AudioChunk",
    "calculate_energy_envelope",
    "detect_voice_activity",
    "estimate_pitch",
    "extract_features",
    "extract_pitch_contour",
    "frame_rms",
    "pcm16_bytes_to_float32",
    "split_into_chunks",
]
