"""Core data models for the tempo pipeline."""

from dataclasses import dataclass

import numpy as np


@dataclass
class AudioBuffer:
    """Decoded interleaved PCM."""
    samples: np.ndarray  # float32, frame-major interleaved
    sample_rate: int
    channels: int

    @property
    def frames(self) -> int:
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate


@dataclass
class TempoResult:
    """Tempo estimate for one signal."""
    bpm: float  # reported value (raw / 35)
    raw_bpm: float  # 60 / mean inter-peak interval
    peaks: np.ndarray  # sample indices into the envelope
    sample_rate: int
    duration: float = 0.0  # seconds

    @property
    def peak_count(self) -> int:
        return len(self.peaks)


@dataclass
class FileReport:
    """Outcome of analyzing one file in a batch."""
    path: str
    bpm: float | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
