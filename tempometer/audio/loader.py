"""Audio file loading utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf

from tempometer.analysis.models import AudioBuffer

logger = logging.getLogger(__name__)


class AudioLoadError(Exception):
    """A file could not be turned into PCM. Non-fatal to a batch."""

    kind = "Error"

    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(message)
        self.path = str(path)


class AudioNotFoundError(AudioLoadError):
    kind = "NotFound"


class AudioOpenError(AudioLoadError):
    kind = "OpenFailed"


class InvalidAudioError(AudioLoadError):
    kind = "InvalidAudio"


class AudioReadError(AudioLoadError):
    kind = "ReadFailed"


class AudioDecoder:
    """Read-only view of an audio file backed by libsndfile.

    Exposes the header (sample rate, channel count, frame count) and reads
    the whole file as interleaved float32 samples.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._file = sf.SoundFile(str(path), mode="r")

    @property
    def sample_rate(self) -> int:
        return self._file.samplerate

    @property
    def channels(self) -> int:
        return self._file.channels

    @property
    def frames(self) -> int:
        return self._file.frames

    def read_interleaved(self) -> np.ndarray:
        data = self._file.read(self.frames, dtype="float32", always_2d=True)
        return np.ascontiguousarray(data).ravel()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> AudioDecoder:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def load_audio(file_path: Union[str, Path]) -> AudioBuffer:
    """Decode an audio file without resampling or downmixing.

    Raises
    ------
    AudioNotFoundError
        The path does not exist.
    AudioOpenError
        The decoder rejected the file.
    InvalidAudioError
        The header reports zero frames or zero channels.
    AudioReadError
        Fewer (or more) frames were decoded than the header announced.
    """
    path = Path(file_path)
    if not path.exists():
        raise AudioNotFoundError(path, f"File not found: {path}")

    try:
        decoder = AudioDecoder(path)
    except RuntimeError as e:
        raise AudioOpenError(path, f"Error opening file: {path} ({e})") from e

    with decoder:
        logger.info(f"Processing file: {path}")
        if decoder.frames == 0 or decoder.channels == 0:
            raise InvalidAudioError(
                path, f"Invalid file: {path} (frames or channels is zero)"
            )

        samples = decoder.read_interleaved()
        frames_read = len(samples) // decoder.channels
        if frames_read != decoder.frames:
            raise AudioReadError(
                path,
                f"Error reading samples from {path} "
                f"({frames_read} of {decoder.frames} frames)",
            )

        return AudioBuffer(
            samples=samples,
            sample_rate=decoder.sample_rate,
            channels=decoder.channels,
        )
