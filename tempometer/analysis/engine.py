"""Analysis orchestrator: file -> PCM -> mono -> envelope -> peaks -> BPM."""

import logging
from pathlib import Path
from typing import Union

from tempometer.analysis.envelope import SMOOTHING_FACTOR, build_envelope
from tempometer.analysis.models import AudioBuffer, TempoResult
from tempometer.analysis.peaks import MIN_PEAK_GAP, PEAK_THRESHOLD, pick_peaks
from tempometer.analysis.tempo import BPM_SCALE_DIVISOR, estimate_bpm, raw_bpm
from tempometer.audio.loader import load_audio
from tempometer.audio.preprocessing import mix_to_mono

logger = logging.getLogger(__name__)


class TempoEngine:
    """Runs the envelope tempo pipeline.

    Stateless between calls; one engine may be shared across threads.
    """

    def analyze_file(self, file_path: Union[str, Path]) -> TempoResult:
        """Decode and analyze an audio file.

        Any ``AudioLoadError`` from decoding propagates to the caller.
        """
        buffer = load_audio(file_path)
        return self.analyze_audio(buffer)

    def analyze_audio(self, buffer: AudioBuffer) -> TempoResult:
        """Analyze already-decoded PCM."""
        sr = buffer.sample_rate
        logger.info(f"Analyzing {buffer.duration:.1f}s of audio at {sr}Hz, "
                    f"{buffer.channels} channel(s)")

        mono = mix_to_mono(buffer.samples, buffer.channels)
        logger.debug(f"  mono: {len(mono)} samples")

        envelope = build_envelope(mono, alpha=SMOOTHING_FACTOR)
        logger.debug(f"  envelope max: {float(envelope.max()) if len(envelope) else 0.0:.4f}")

        peaks = pick_peaks(envelope, threshold=PEAK_THRESHOLD, min_gap=MIN_PEAK_GAP)
        logger.debug(f"  peaks: {len(peaks)}")

        result = TempoResult(
            bpm=estimate_bpm(peaks, sr, divisor=BPM_SCALE_DIVISOR),
            raw_bpm=raw_bpm(peaks, sr),
            peaks=peaks,
            sample_rate=sr,
            duration=buffer.duration,
        )
        if result.peak_count < 2:
            logger.info(f"Too few peaks ({result.peak_count}) for a tempo estimate")
        else:
            logger.info(f"BPM {result.bpm:.4f} (raw {result.raw_bpm:.1f}) "
                        f"from {result.peak_count} peaks")
        return result


def analyze(file_path: Union[str, Path]) -> float:
    """Return the BPM of an audio file (0.0 when too few peaks are found)."""
    return TempoEngine().analyze_file(file_path).bpm
