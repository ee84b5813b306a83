"""
Autocorrelation pitch estimate for one analysis frame.

A cheap proxy for the speaker's fundamental frequency, only used to tell
"lower" and "higher" voices apart. Not a pitch tracker.
"""
from __future__ import annotations

import numpy as np

# Frames quieter than this (RMS) are treated as unvoiced
PITCH_MIN_RMS = 0.01
# Lag search covers periods for roughly 50–500 Hz
LAG_MIN_DIVISOR = 500
LAG_MAX_DIVISOR = 50
# Accepted fundamental range (exclusive), typical for speech
PITCH_MIN_HZ = 50.0
PITCH_MAX_HZ = 400.0


def frame_rms(frame: np.ndarray) -> float:
    """Root-mean-square amplitude of frame; 0.0 for an empty frame."""
    if len(frame) == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(frame, dtype=np.float64))))


def _lagged_sum(magnitudes: np.ndarray, lag: int) -> float:
    """Sum of |x[i] * x[i + lag]| over the valid overlap."""
    if lag >= len(magnitudes):
        return 0.0
    return float(np.dot(magnitudes[: len(magnitudes) - lag], magnitudes[lag:]))


def estimate_pitch(frame: np.ndarray, sample_rate: int) -> float:
    """
    Return the estimated fundamental frequency of frame in Hz, or 0.0 when
    the frame is too quiet or no lag gives a pitch inside (50, 400) Hz.

    Lags are scanned in ascending order and only a strictly larger score
    replaces the best one, so the shortest lag wins ties.
    """
    frame = np.asarray(frame, dtype=np.float64)
    if frame_rms(frame) < PITCH_MIN_RMS:
        return 0.0

    magnitudes = np.abs(frame)
    best_score = 0.0
    best_lag = 0
    for lag in range(sample_rate // LAG_MIN_DIVISOR, sample_rate // LAG_MAX_DIVISOR):
        score = _lagged_sum(magnitudes, lag)
        if score > best_score:
            best_score = score
            best_lag = lag

    if best_lag == 0:
        return 0.0
    pitch = sample_rate / best_lag
    return pitch if PITCH_MIN_HZ < pitch < PITCH_MAX_HZ else 0.0
