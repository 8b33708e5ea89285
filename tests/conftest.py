"""Shared test fixtures for tempo pipeline tests."""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf
from fastapi.testclient import TestClient

from tempometer.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def generate_impulse_train(
    interval_seconds: float = 0.5,
    duration_seconds: float = 10.0,
    sr: int = 44100,
    amplitude: float = 1.0,
    offset_seconds: float = 0.0,
) -> np.ndarray:
    """Unit impulses every *interval_seconds*, starting at *offset_seconds*."""
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)
    step = int(round(interval_seconds * sr))
    start = int(round(offset_seconds * sr))
    audio[start::step] = amplitude
    return audio


def generate_click_track(
    bpm: float,
    duration_seconds: float = 10.0,
    sr: int = 44100,
) -> np.ndarray:
    """Generate a synthetic click track (short decaying sine bursts).

    Returns mono audio at the given sample rate, peak-normalized.
    """
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    beat_interval = 60.0 / bpm
    click_samples = int(0.02 * sr)  # 20ms click

    t_click = np.arange(click_samples) / sr
    click = np.sin(2 * np.pi * 1000 * t_click) * np.exp(-t_click * 100)

    time = beat_interval / 2
    while time < duration_seconds:
        sample_pos = int(time * sr)
        end = min(sample_pos + click_samples, n_samples)
        audio[sample_pos:end] += click[:end - sample_pos]
        time += beat_interval

    peak = np.max(np.abs(audio))
    if peak > 0:
        audio = audio / peak
    return audio.astype(np.float32)


def write_wav(path: Path, audio: np.ndarray, sr: int = 44100) -> Path:
    """Write float audio (1-D mono or frames x channels) as a float WAV."""
    sf.write(str(path), audio, sr, subtype="FLOAT")
    return path


@pytest.fixture
def impulse_120():
    """10 s of impulses every 0.5 s at 44.1 kHz."""
    return generate_impulse_train(interval_seconds=0.5, duration_seconds=10.0, sr=44100)


@pytest.fixture
def silence():
    return np.zeros(5 * 44100, dtype=np.float32)
