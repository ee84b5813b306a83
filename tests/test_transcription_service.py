"""
Tests for TranscriptionService: progress mapping and error propagation.
"""

import asyncio

import numpy as np
import pytest

from transcribeai.asr.base import ASRError, ASRResult
from transcribeai.services.transcription_service import TranscriptionService

from conftest import SAMPLE_RATE, FakeEngine, make_silence


def run(coro):
    return asyncio.run(coro)


class TestTranscribe:
    def test_segments_and_metadata(self, fake_engine):
        service = TranscriptionService(fake_engine, language="de")
        transcription = run(service.transcribe(make_silence(4.0), SAMPLE_RATE))
        assert transcription.duration == pytest.approx(4.0)
        assert transcription.language == "de"
        assert [(s.speaker, s.text) for s in transcription.segments] == [("Speaker 1", "hello world again")]
        assert fake_engine.calls == [(4 * SAMPLE_RATE, SAMPLE_RATE)]

    def test_default_language(self, fake_engine, monkeypatch):
        monkeypatch.setenv("DEFAULT_LANGUAGE", "en")
        transcription = run(TranscriptionService(fake_engine).transcribe(make_silence(1.0), SAMPLE_RATE))
        assert transcription.language == "en"

    def test_progress_mapping(self, fake_engine):
        seen = []
        run(TranscriptionService(fake_engine).transcribe(make_silence(4.0), SAMPLE_RATE, on_progress=seen.append))
        assert seen == pytest.approx([0.2, 0.5, 0.8, 0.8, 1.0])

    def test_progress_is_monotonic(self):
        engine = FakeEngine(progress=(0.1, 0.4, 0.7, 1.0))
        seen = []
        run(TranscriptionService(engine).transcribe(make_silence(1.0), SAMPLE_RATE, on_progress=seen.append))
        assert seen == sorted(seen)
        assert seen[-1] == 1.0

    def test_flat_result_becomes_single_segment(self):
        engine = FakeEngine(result=ASRResult(text="just text"))
        transcription = run(TranscriptionService(engine).transcribe(make_silence(2.5), SAMPLE_RATE))
        assert len(transcription.segments) == 1
        assert transcription.segments[0].end == pytest.approx(2.5)
        assert transcription.segments[0].speaker == "Speaker 1"

    def test_empty_audio(self):
        transcription = run(
            TranscriptionService(FakeEngine()).transcribe(np.array([], dtype=np.float32), SAMPLE_RATE)
        )
        assert transcription.duration == 0.0
        assert len(transcription.segments) == 1


class TestErrors:
    def test_asr_error_propagates(self, failing_engine):
        seen = []
        with pytest.raises(ASRError, match="not loaded"):
            run(
                TranscriptionService(failing_engine).transcribe(
                    make_silence(1.0), SAMPLE_RATE, on_progress=seen.append
                )
            )
        assert seen == [0.2]

    def test_invalid_sample_rate(self, fake_engine):
        with pytest.raises(ValueError):
            run(TranscriptionService(fake_engine).transcribe(make_silence(1.0), 0))
        assert fake_engine.calls == []
