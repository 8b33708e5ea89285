"""Amplitude envelope: full-wave rectification and one-pole smoothing."""

import numpy as np
from scipy.signal import lfilter

SMOOTHING_FACTOR = 0.1


def rectify(signal: np.ndarray) -> np.ndarray:
    """Full-wave rectify a mono signal."""
    return np.abs(np.asarray(signal, dtype=np.float32))


def smooth(rectified: np.ndarray, alpha: float = SMOOTHING_FACTOR) -> np.ndarray:
    """Apply the one-pole low-pass ``y[n] = alpha*x[n] + (1-alpha)*y[n-1]``.

    Single forward pass. The first sample passes through untouched and
    seeds the filter state for the rest.
    """
    x = np.asarray(rectified, dtype=np.float32)
    if len(x) < 2:
        return x.copy()

    decay = np.float32(1.0 - alpha)
    b = np.array([alpha], dtype=np.float32)
    a = np.array([1.0, -decay], dtype=np.float32)
    zi = np.array([decay * x[0]], dtype=np.float32)
    tail, _ = lfilter(b, a, x[1:], zi=zi)
    return np.concatenate([x[:1], tail.astype(np.float32, copy=False)])


def build_envelope(signal: np.ndarray, alpha: float = SMOOTHING_FACTOR) -> np.ndarray:
    """Return the smoothed magnitude envelope of *signal*.

    Same length as the input and non-negative everywhere.
    """
    return smooth(rectify(signal), alpha=alpha)
