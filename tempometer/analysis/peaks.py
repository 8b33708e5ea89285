"""Peak picking with an amplitude threshold and a refractory gap."""

import numpy as np

PEAK_THRESHOLD = 0.05
MIN_PEAK_GAP = 500  # samples


def local_maxima(envelope: np.ndarray, threshold: float = PEAK_THRESHOLD) -> np.ndarray:
    """Indices of strict local maxima above *threshold*.

    Both neighbours must be strictly lower, so the first and last samples
    and flat-topped plateaus never qualify.
    """
    e = np.asarray(envelope)
    if len(e) < 3:
        return np.empty(0, dtype=np.int64)

    centre = e[1:-1]
    mask = (centre > e[:-2]) & (centre > e[2:]) & (centre > threshold)
    return np.flatnonzero(mask).astype(np.int64) + 1


def pick_peaks(
    envelope: np.ndarray,
    threshold: float = PEAK_THRESHOLD,
    min_gap: int = MIN_PEAK_GAP,
) -> np.ndarray:
    """Select envelope peaks.

    A candidate is accepted only if it lies more than *min_gap* samples
    after the last accepted peak. Candidates are scanned left to right,
    so a rejected maximum never blocks a later one.

    Returns
    -------
    np.ndarray
        Strictly increasing int64 sample indices.
    """
    peaks: list[int] = []
    for i in local_maxima(envelope, threshold):
        if not peaks or i - peaks[-1] > min_gap:
            peaks.append(int(i))
    return np.array(peaks, dtype=np.int64)
