"""Tempo estimation from inter-peak intervals."""

import numpy as np

# Fixed scaling of the raw inter-peak rate; part of the reported output.
BPM_SCALE_DIVISOR = 35.0


def inter_peak_intervals(peaks: np.ndarray, sr: int) -> np.ndarray:
    """Seconds between consecutive peaks, in float32."""
    gaps = np.diff(np.asarray(peaks, dtype=np.int64)).astype(np.float32)
    return gaps / np.float32(sr)


def raw_bpm(peaks: np.ndarray, sr: int) -> float:
    """60 over the mean inter-peak interval, or 0 with fewer than two peaks."""
    if len(peaks) < 2:
        return 0.0

    intervals = inter_peak_intervals(peaks, sr)
    # Sequential float32 sum, left to right.
    total = np.cumsum(intervals, dtype=np.float32)[-1]
    mean_interval = np.float32(total / np.float32(len(intervals)))
    return float(np.float32(60.0) / mean_interval)


def estimate_bpm(peaks: np.ndarray, sr: int, divisor: float = BPM_SCALE_DIVISOR) -> float:
    """Reported tempo: the raw inter-peak rate divided by *divisor*.

    Returns exactly 0.0 when fewer than two peaks were found.
    """
    raw = raw_bpm(peaks, sr)
    if raw == 0.0:
        return 0.0
    return float(np.float32(raw) / np.float32(divisor))
