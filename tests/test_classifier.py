"""
Tests for the pitch/energy band speaker classifier.

Tests cover:
- Band edges for pitch and energy
- Unvoiced frames excluded from the pitch average, energy averaged over all
- Parity of the summed bands as speaker index
- Ranges clamped to the series bounds
- Pre-modulo band combination and custom speaker counts
"""

import pytest

from transcribeai.diarization.classifier import (
    SpeakerClassifier,
    average_energy,
    average_pitch,
    classify_speaker,
    energy_band,
    frame_range,
    pitch_band,
    speaker_bands,
)


class TestBands:
    @pytest.mark.parametrize(
        "pitch,band",
        [(0.0, 0), (129.9, 0), (130.0, 1), (159.9, 1), (160.0, 2), (390.0, 2)],
    )
    def test_pitch_band(self, pitch, band):
        assert pitch_band(pitch) == band

    @pytest.mark.parametrize(
        "energy,band",
        [(0.0, 0), (0.049, 0), (0.05, 1), (0.149, 1), (0.15, 2), (0.9, 2)],
    )
    def test_energy_band(self, energy, band):
        assert energy_band(energy) == band


class TestFrameRange:
    def test_floor_of_hundredths(self):
        assert frame_range(0.019, 0.051, 100) == range(1, 5)

    def test_end_clamped(self):
        assert frame_range(0.5, 10.0, 80) == range(50, 80)

    def test_start_past_series_is_empty(self):
        assert len(frame_range(5.0, 6.0, 100)) == 0

    def test_negative_start_clamped(self):
        assert frame_range(-1.0, 0.03, 100) == range(0, 3)

    def test_inverted_range_is_empty(self):
        assert len(frame_range(0.5, 0.2, 100)) == 0


class TestAverages:
    def test_pitch_ignores_unvoiced(self):
        pitches = [0.0, 100.0, 200.0, 0.0]
        assert average_pitch(pitches, 0.0, 0.04) == pytest.approx(150.0)

    def test_pitch_all_unvoiced(self):
        assert average_pitch([0.0] * 10, 0.0, 0.1) == 0.0

    def test_energy_includes_zeros(self):
        energy = [0.0, 0.2, 0.4, 0.0]
        assert average_energy(energy, 0.0, 0.04) == pytest.approx(0.15)

    def test_empty_range(self):
        assert average_energy([0.3] * 10, 1.0, 2.0) == 0.0
        assert average_pitch([150.0] * 10, 1.0, 2.0) == 0.0


class TestClassifySpeaker:
    def test_silence_is_speaker_zero(self):
        assert classify_speaker(0.0, 2.0, [0.0] * 200, [0.0] * 200) == 0

    def test_parity_of_bands(self):
        # pitch band 2 + energy band 1 = 3 -> odd
        assert classify_speaker(0.0, 1.0, [200.0] * 100, [0.1] * 100) == 1
        # pitch band 2 + energy band 2 = 4 -> even
        assert classify_speaker(0.0, 1.0, [200.0] * 100, [0.3] * 100) == 0
        # pitch band 1 + energy band 0 = 1 -> odd
        assert classify_speaker(0.0, 1.0, [140.0] * 100, [0.01] * 100) == 1

    def test_out_of_range_window(self):
        assert classify_speaker(10.0, 12.0, [200.0] * 100, [0.1] * 100) == 0

    def test_band_combination_exposed(self):
        bands = speaker_bands(0.0, 1.0, [200.0] * 100, [0.1] * 100)
        assert (bands.pitch_band, bands.energy_band, bands.combined) == (2, 1, 3)

    def test_custom_speaker_count(self):
        assert classify_speaker(0.0, 1.0, [200.0] * 100, [0.1] * 100, max_speakers=3) == 0
        assert classify_speaker(0.0, 1.0, [200.0] * 100, [0.1] * 100, max_speakers=5) == 3

    def test_invalid_speaker_count(self):
        with pytest.raises(ValueError):
            classify_speaker(0.0, 1.0, [], [], max_speakers=0)


class TestSpeakerClassifier:
    def test_labels(self):
        classifier = SpeakerClassifier([200.0] * 100, [0.1] * 100)
        assert classifier.classify(0.0, 1.0) == 1
        assert classifier.label(0.0, 1.0) == "Speaker 2"
        assert classifier.label(5.0, 6.0) == "Speaker 1"
