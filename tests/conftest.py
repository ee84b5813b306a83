"""Shared fixtures: synthetic audio and a scripted ASR engine."""

import numpy as np
import pytest

from transcribeai.asr.base import ASRChunk, ASREngine, ASRError, ASRResult

SAMPLE_RATE = 16000


def make_sine(
    frequency: float = 100.0,
    amplitude: float = 0.5,
    duration: float = 1.0,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Sine wave as float32 samples."""
    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


def make_silence(duration: float = 1.0, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    return np.zeros(int(sample_rate * duration), dtype=np.float32)


class FakeEngine(ASREngine):
    """Returns a fixed result and reports the scripted progress values."""

    def __init__(self, result=None, progress=(0.5, 1.0), error=None):
        self.result = result or ASRResult(text="")
        self.progress = progress
        self.error = error
        self.calls = []

    async def transcribe(self, audio, sample_rate, on_progress=None):
        self.calls.append((len(audio), sample_rate))
        if self.error is not None:
            raise self.error
        for p in self.progress:
            if on_progress is not None:
                on_progress(p)
        return self.result

    @property
    def model_name(self):
        return "fake-whisper"


@pytest.fixture
def chunked_result():
    """Two short chunks with a 0.3 s gap."""
    return ASRResult(
        text=" hello world again",
        chunks=[
            ASRChunk(text=" hello world", start=0.0, end=2.0),
            ASRChunk(text=" again", start=2.3, end=4.0),
        ],
    )


@pytest.fixture
def fake_engine(chunked_result):
    return FakeEngine(result=chunked_result)


@pytest.fixture
def failing_engine():
    return FakeEngine(error=ASRError("Whisper model is not loaded"))
