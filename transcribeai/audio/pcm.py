"""
PCM helpers: raw bytes to float32 samples, fixed-length windows for ASR.

- Uploads arrive as PCM 16-bit little-endian mono or raw float32.
- Samples are float32 in [-1.0, 1.0], one channel.
- Decoding container formats (mp3, m4a, ...) is the caller's job.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class AudioChunk:
    """One window of samples and its start time in seconds (clip-relative)."""

    samples: np.ndarray
    timestamp: float


def pcm16_bytes_to_float32(pcm_bytes: bytes) -> np.ndarray:
    """Convert PCM 16-bit mono bytes to float32 [-1.0, 1.0]."""
    if len(pcm_bytes) % 2 != 0:
        raise ValueError(f"PCM16 payload length {len(pcm_bytes)} is not divisible by 2")
    samples = np.frombuffer(pcm_bytes, dtype="<i2")
    return samples.astype(np.float32) / 32768.0


def float32_bytes_to_array(raw: bytes) -> np.ndarray:
    """Interpret raw little-endian float32 bytes as a sample array."""
    if len(raw) % 4 != 0:
        raise ValueError(f"float32 payload length {len(raw)} is not divisible by 4")
    return np.frombuffer(raw, dtype="<f4").astype(np.float32)


def float32_to_pcm16_bytes(audio: np.ndarray) -> bytes:
    """Convert float32 [-1, 1] to PCM 16-bit mono bytes."""
    samples = (np.asarray(audio, dtype=np.float32) * 32767).clip(-32768, 32767).astype("<i2")
    return samples.tobytes()


def split_into_chunks(
    samples: np.ndarray,
    sample_rate: int,
    chunk_seconds: float = 30,
) -> list[AudioChunk]:
    """
    Split samples into consecutive, non-overlapping windows of chunk_seconds.
    The last window holds whatever is left. Empty input gives no windows.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    chunk_samples = max(1, int(chunk_seconds * sample_rate))
    chunks: list[AudioChunk] = []
    for start in range(0, len(samples), chunk_samples):
        chunks.append(
            AudioChunk(
                samples=samples[start : start + chunk_samples],
                timestamp=start / sample_rate,
            )
        )
    return chunks


def resample_linear(samples: np.ndarray, from_rate: int, to_rate: int) -> np.ndarray:
    """Linear-interpolation resample. Good enough to feed ASR; not used by the feature extractor."""
    if from_rate == to_rate or len(samples) == 0:
        return np.asarray(samples, dtype=np.float32)
    target_len = max(1, int(len(samples) * to_rate / from_rate))
    indices = np.linspace(0, len(samples) - 1, target_len)
    return np.interp(indices, np.arange(len(samples)), samples).astype(np.float32)
