"""Shared pytest fixtures for CardGuard tests."""

import io
import wave
from datetime import date

import numpy as np
import pytest

from cardguard import CardGuard, CardSubmission, RiskEngine


FIXED_TODAY = date(2025, 6, 15)


def make_wav(samples: np.ndarray, sr: int = 16000) -> bytes:
    """Encode float mono samples to 16-bit PCM WAV."""
    pcm = (np.clip(samples, -1, 1) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sr)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """RiskEngine with the clock pinned to FIXED_TODAY."""
    return RiskEngine(today=lambda: FIXED_TODAY)


@pytest.fixture()
def guard():
    """CardGuard with the clock pinned to FIXED_TODAY."""
    return CardGuard(today=lambda: FIXED_TODAY)


@pytest.fixture()
def clean_submission():
    """Luhn-valid submission that triggers no rule."""
    return CardSubmission(
        number="4242424242424242",
        holder_name="JANE DOE",
        expiry="12/30",
        cvv="256",
    )


@pytest.fixture()
def approved_submission():
    """The single pre-approved card."""
    return CardSubmission(
        number="378282246310005",
        holder_name="JAIAKASH MURALI",
        expiry="02/29",
        cvv="256",
    )


# ---------------------------------------------------------------------------
# Audio fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_wav_bytes():
    """0.5 s mono 16-bit PCM WAV at 16 kHz (440 Hz sine)."""
    sr = 16000
    t = np.arange(int(sr * 0.5)) / sr
    return make_wav(0.5 * np.sin(2 * np.pi * 440 * t), sr)


@pytest.fixture()
def silent_wav_bytes():
    """1 s of digital silence."""
    return make_wav(np.zeros(16000))


@pytest.fixture()
def alternating_spectrum():
    """Spectrum alternating 0/255; scores as a real voice."""
    return [0, 255] * 512


@pytest.fixture()
def make_wav_bytes():
    """Factory encoding float samples as WAV bytes."""
    return make_wav
