"""
Tests for frame-level feature extraction.

Tests cover:
- Series length ~ ceil(samples / hop) and shared across VAD, pitch, energy
- Silent audio: VAD all false, pitch all zero
- Loud tone: VAD true, energy ~ amplitude / sqrt(2)
- Partial trailing frames and empty input
"""

import math

import numpy as np
import pytest

from transcribeai.audio.features import (
    AudioAnalysis,
    calculate_energy_envelope,
    detect_voice_activity,
    extract_features,
    frame_rms,
    hop_size_for,
    iter_frames,
)

from conftest import SAMPLE_RATE, make_silence, make_sine


class TestFrameRms:
    def test_empty(self):
        assert frame_rms(np.array([], dtype=np.float32)) == 0.0

    def test_constant(self):
        assert frame_rms(np.full(100, -0.3, dtype=np.float32)) == pytest.approx(0.3, rel=1e-6)


class TestFraming:
    def test_hop_is_ten_ms(self):
        assert hop_size_for(16000) == 160
        assert hop_size_for(44100) == 441

    def test_invalid_sample_rate(self):
        with pytest.raises(ValueError):
            hop_size_for(0)

    def test_trailing_frames_are_clamped(self):
        samples = np.ones(1000, dtype=np.float32)
        frames = list(iter_frames(samples, SAMPLE_RATE, 512))
        # starts at 0, 160, ..., 960
        assert len(frames) == 7
        assert len(frames[0]) == 512
        assert len(frames[-1]) == 40


class TestExtractFeatures:
    @pytest.mark.parametrize("n_samples", [1, 159, 160, 161, 16000, 16050])
    def test_series_length(self, n_samples):
        samples = np.zeros(n_samples, dtype=np.float32)
        analysis = extract_features(samples, SAMPLE_RATE)
        expected = math.ceil(n_samples / 160)
        assert abs(len(analysis.vad) - expected) <= 1
        assert len(analysis.vad) == len(analysis.pitches) == len(analysis.energy)
        assert analysis.frame_rate == 100
        assert analysis.hop_size == 160

    def test_empty_input(self):
        analysis = extract_features(np.array([], dtype=np.float32), SAMPLE_RATE)
        assert isinstance(analysis, AudioAnalysis)
        assert analysis.vad == []
        assert analysis.pitches == []
        assert analysis.energy == []
        assert len(analysis) == 0

    def test_silence(self):
        analysis = extract_features(make_silence(1.0), SAMPLE_RATE)
        assert len(analysis) == 100
        assert not any(analysis.vad)
        assert all(p == 0.0 for p in analysis.pitches)
        assert all(e == 0.0 for e in analysis.energy)

    def test_tone(self):
        analysis = extract_features(make_sine(frequency=100.0, amplitude=0.5, duration=0.5), SAMPLE_RATE)
        assert all(analysis.vad)
        assert analysis.energy[0] == pytest.approx(0.5 / math.sqrt(2), rel=0.05)
        assert analysis.pitches[0] == pytest.approx(200.0)
        assert all(p == 0.0 or 50.0 < p < 400.0 for p in analysis.pitches)


class TestVoiceActivity:
    def test_threshold(self):
        quiet = make_sine(amplitude=0.02, duration=0.2)  # RMS ~0.014
        loud = make_sine(amplitude=0.1, duration=0.2)  # RMS ~0.07
        assert not any(detect_voice_activity(quiet, SAMPLE_RATE))
        assert all(detect_voice_activity(loud, SAMPLE_RATE))

    def test_energy_matches_vad_window(self):
        samples = make_sine(amplitude=0.1, duration=0.2)
        energy = calculate_energy_envelope(samples, SAMPLE_RATE)
        vad = detect_voice_activity(samples, SAMPLE_RATE)
        assert [e > 0.02 for e in energy] == vad
