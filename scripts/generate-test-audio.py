#!/usr/bin/env python3
"""
Generate sample voice recordings for CardGuard testing.
"""
import os
import wave

import numpy as np

SAMPLE_RATE = 16000


def write_wav(samples, filename, sr=SAMPLE_RATE):
    """Write float samples in [-1, 1] as 16-bit mono PCM."""
    pcm = (np.clip(samples, -1, 1) * 32767).astype(np.int16)
    with wave.open(filename, 'wb') as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sr)
        wf.writeframes(pcm.tobytes())
    print(f"Created {filename}")


def create_voice_like(duration, filename):
    """Harmonic tone with pitch jitter, amplitude shimmer and breath noise."""
    n_samples = int(SAMPLE_RATE * duration)
    rng = np.random.default_rng(42)

    f0 = 120.0 * (1 + 0.01 * np.cumsum(rng.standard_normal(n_samples) * 0.005))
    phase = 2 * np.pi * np.cumsum(f0 / SAMPLE_RATE)

    signal = np.zeros(n_samples)
    for h in range(1, 12):
        amp = (1.0 / h) * (1 + 0.05 * rng.standard_normal(n_samples))
        signal += amp * np.sin(h * phase)

    signal += rng.standard_normal(n_samples) * 0.02
    write_wav(signal / (np.max(np.abs(signal)) + 1e-10) * 0.7, filename)


def create_pure_tone(freq, duration, filename):
    """Single sine tone, clearly synthetic."""
    t = np.arange(int(SAMPLE_RATE * duration)) / SAMPLE_RATE
    write_wav(0.5 * np.sin(2 * np.pi * freq * t), filename)


def create_silence(duration, filename):
    write_wav(np.zeros(int(SAMPLE_RATE * duration)), filename)


os.makedirs('test-data/voice', exist_ok=True)

print("Generating sample voice recordings...")
print("=" * 50)

create_voice_like(2.0, 'test-data/voice/voice-like.wav')
create_pure_tone(440.0, 2.0, 'test-data/voice/pure-tone.wav')
create_silence(1.0, 'test-data/voice/silence.wav')

print("=" * 50)
print("✓ All sample recordings created successfully!")
print("\nYou can now:")
print("  1. Analyze a recording: cardguard voice test-data/voice/voice-like.wav")
print("  2. Screen a card with audio: cardguard screen -n 4242424242424242 --name 'JANE DOE' "
      "-e 12/30 -c 256 -a test-data/voice/voice-like.wav")
