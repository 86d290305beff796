"""
Voice authenticity heuristic.

Scores a single analysis window of recorded audio from its byte frequency
spectrum (the 0-255 magnitudes a browser analyser node reports).  Three
features are derived from the spectrum and averaged into a confidence:

  1. Naturalness      : spread of the magnitude distribution
  2. Pitch variation  : bin-to-bin magnitude movement
  3. Rhythm           : mean energy across 8 contiguous bands

This is a fixed heuristic, not a trained detector.  A recording is judged
real when the confidence is strictly above 0.7.
"""

import concurrent.futures
import io
import logging
import wave
from typing import Sequence, Tuple

import numpy as np
from scipy.fft import rfft
from scipy.signal import get_window

from .types import AudioFeatures, VoiceVerdict

logger = logging.getLogger(__name__)

NATURALNESS_SCALE = 10000.0
RHYTHM_SEGMENTS = 8
MAX_MAGNITUDE = 255.0
REAL_VOICE_THRESHOLD = 0.7


class InvalidSpectrumError(ValueError):
    """Raised when a spectrum or sample buffer breaks the input contract."""


# ---------------------------------------------------------------------------
# WAV decoder
# ---------------------------------------------------------------------------

def _decode_wav(audio_bytes: bytes) -> Tuple[np.ndarray, int]:
    """Decode WAV bytes to mono float32 samples + sample rate.

    Supports 8-bit, 16-bit, 24-bit, and 32-bit PCM WAV files.
    """
    buf = io.BytesIO(audio_bytes)
    with wave.open(buf, 'rb') as wf:
        sr = wf.getframerate()
        n_channels = wf.getnchannels()
        sampwidth = wf.getsampwidth()
        raw = wf.readframes(wf.getnframes())

    if sampwidth == 1:
        samples = np.frombuffer(raw, dtype=np.uint8).astype(np.float32) / 128.0 - 1.0
    elif sampwidth == 2:
        samples = np.frombuffer(raw, dtype=np.int16).astype(np.float32) / 32768.0
    elif sampwidth == 3:
        # 24-bit little-endian, sign-extended by hand
        raw_arr = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3)
        samples = (raw_arr[:, 0].astype(np.int32)
                   | (raw_arr[:, 1].astype(np.int32) << 8)
                   | (raw_arr[:, 2].astype(np.int32) << 16))
        samples = np.where(samples >= 0x800000, samples - 0x1000000, samples)
        samples = samples.astype(np.float32) / 8388608.0
    elif sampwidth == 4:
        samples = np.frombuffer(raw, dtype=np.int32).astype(np.float32) / 2147483648.0
    else:
        raise ValueError(f"Unsupported sample width: {sampwidth}")

    if n_channels > 1:
        samples = samples.reshape(-1, n_channels).mean(axis=1)

    return samples, sr


# ---------------------------------------------------------------------------
# Spectrum capture
# ---------------------------------------------------------------------------

def spectrum_from_samples(samples: np.ndarray, fft_size: int = 2048,
                          min_decibels: float = -100.0,
                          max_decibels: float = -30.0) -> np.ndarray:
    """Byte frequency spectrum of one window taken from the middle of `samples`.

    Mirrors an analyser node: Blackman window, magnitude normalised by the
    FFT size, converted to dB and mapped linearly from
    [min_decibels, max_decibels] onto [0, 255].

    Returns:
        uint8 array of fft_size // 2 bins.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim != 1 or samples.size == 0:
        raise InvalidSpectrumError("Expected a non-empty 1-D sample buffer")
    if fft_size < 2 * RHYTHM_SEGMENTS:
        raise InvalidSpectrumError(f"FFT size too small: {fft_size}")

    if samples.size >= fft_size:
        start = (samples.size - fft_size) // 2
        frame = samples[start:start + fft_size]
    else:
        frame = np.zeros(fft_size)
        frame[:samples.size] = samples

    windowed = frame * get_window('blackman', fft_size)
    magnitude = np.abs(rfft(windowed))[:fft_size // 2] / fft_size

    with np.errstate(divide='ignore'):
        decibels = 20.0 * np.log10(magnitude)

    scaled = (decibels - min_decibels) * (MAX_MAGNITUDE / (max_decibels - min_decibels))
    return np.clip(np.floor(scaled), 0, MAX_MAGNITUDE).astype(np.uint8)


# ---------------------------------------------------------------------------
# Features and scoring
# ---------------------------------------------------------------------------

def _clamp(value: float) -> float:
    return float(min(max(value, 0.0), 1.0))


def _as_spectrum(spectrum: Sequence[float]) -> np.ndarray:
    try:
        arr = np.asarray(spectrum, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidSpectrumError(f"Spectrum is not numeric: {e}") from e

    if arr.ndim != 1:
        raise InvalidSpectrumError(f"Spectrum must be 1-D, got shape {arr.shape}")
    if arr.size < RHYTHM_SEGMENTS:
        raise InvalidSpectrumError(
            f"Spectrum needs at least {RHYTHM_SEGMENTS} bins, got {arr.size}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidSpectrumError("Spectrum contains non-finite values")
    if arr.min() < 0 or arr.max() > MAX_MAGNITUDE:
        raise InvalidSpectrumError("Spectrum magnitudes must lie in [0, 255]")
    return arr


def naturalness(spectrum: np.ndarray) -> float:
    """Population variance of the magnitudes, scaled into [0, 1]."""
    return _clamp(float(np.var(spectrum)) / NATURALNESS_SCALE)


def pitch_variation(spectrum: np.ndarray) -> float:
    """Summed absolute bin-to-bin change over length * 255."""
    variations = float(np.sum(np.abs(np.diff(spectrum))))
    return _clamp(variations / (spectrum.size * MAX_MAGNITUDE))


def rhythm(spectrum: np.ndarray) -> float:
    """Sum of the 8 segment means over 8 * 255; leftover bins are ignored."""
    segment_size = spectrum.size // RHYTHM_SEGMENTS
    segments = spectrum[:segment_size * RHYTHM_SEGMENTS].reshape(RHYTHM_SEGMENTS, segment_size)
    return _clamp(float(np.sum(segments.mean(axis=1))) / (RHYTHM_SEGMENTS * MAX_MAGNITUDE))


def extract_features(spectrum: Sequence[float]) -> AudioFeatures:
    """Derive the three heuristic features from a magnitude spectrum.

    Raises:
        InvalidSpectrumError: if the spectrum is empty, not 1-D, shorter
            than 8 bins, or holds values outside [0, 255].
    """
    arr = _as_spectrum(spectrum)
    return AudioFeatures(
        naturalness=naturalness(arr),
        pitch_variation=pitch_variation(arr),
        rhythm=rhythm(arr),
    )


def score(features: AudioFeatures) -> VoiceVerdict:
    """Average the features into a confidence and a real/synthetic call."""
    confidence = (features.naturalness + features.pitch_variation + features.rhythm) / 3
    return VoiceVerdict(
        is_real=confidence > REAL_VOICE_THRESHOLD,
        confidence=confidence,
        features=features,
    )


def _suspicious(error: str) -> VoiceVerdict:
    return VoiceVerdict(is_real=False, confidence=0.0, features=AudioFeatures(), error=error)


# ---------------------------------------------------------------------------
# VoiceAnalyzer
# ---------------------------------------------------------------------------

class VoiceAnalyzer:
    """Fail-safe entry points for the voice heuristic.

    Every failure along the way (undecodable audio, malformed spectrum,
    failed capture) is reported as a non-authentic verdict with zero
    confidence instead of an exception.
    """

    FFT_SIZE = 2048
    MIN_DECIBELS = -100.0
    MAX_DECIBELS = -30.0

    def analyze_spectrum(self, spectrum: Sequence[float]) -> VoiceVerdict:
        """Score a ready-made byte frequency spectrum."""
        try:
            features = extract_features(spectrum)
        except InvalidSpectrumError as e:
            logger.error(f"Voice feature extraction failed: {e}")
            return _suspicious(f'Feature extraction failed: {e}')
        return score(features)

    def analyze_audio(self, audio_bytes: bytes) -> VoiceVerdict:
        """Decode a WAV recording and score one analysis window of it."""
        try:
            samples, _ = _decode_wav(audio_bytes)
            spectrum = spectrum_from_samples(
                samples,
                fft_size=self.FFT_SIZE,
                min_decibels=self.MIN_DECIBELS,
                max_decibels=self.MAX_DECIBELS,
            )
        except Exception as e:
            logger.error(f"Failed to decode audio: {e}")
            return _suspicious(f'Audio decode failed: {e}')
        return self.analyze_spectrum(spectrum)

    def analyze_capture(self, capture: concurrent.futures.Future) -> VoiceVerdict:
        """Wait for a capture to deliver its spectrum, then score it.

        The future is consumed once; a failed capture is terminal for
        this attempt and the caller may start a new one.
        """
        try:
            spectrum = capture.result()
        except Exception as e:
            logger.error(f"Audio capture failed: {e}")
            return _suspicious(f'Audio capture failed: {e}')
        return self.analyze_spectrum(spectrum)
