"""Audio preprocessing utilities."""

from __future__ import annotations

import numpy as np


def mix_to_mono(samples: np.ndarray, channels: int) -> np.ndarray:
    """Downmix interleaved PCM to a single channel.

    Mono input is returned unchanged. With two or more channels each frame
    becomes the average of its first two channels; any further channels
    are ignored. A trailing partial frame is dropped.
    """
    samples = np.asarray(samples, dtype=np.float32)
    if channels == 1:
        return samples

    n_frames = len(samples) // channels
    frames = samples[: n_frames * channels].reshape(n_frames, channels)
    return (frames[:, 0] + frames[:, 1]) / np.float32(2.0)
