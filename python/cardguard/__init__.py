"""
CardGuard - Python Implementation

Heuristic card fraud screening with a voice authenticity check.
"""

from .screening import CardGuard
from .types import (
    AllowListEntry,
    AudioFeatures,
    CardBrand,
    CardSubmission,
    RiskTier,
    RiskVerdict,
    ScreeningReport,
    VoiceVerdict,
)
from .checksum import classify, validate_checksum
from .engine import RiskEngine
from .rules import RULES, Rule
from .audio import InvalidSpectrumError, VoiceAnalyzer, extract_features, score

__version__ = "0.1.0"
__all__ = [
    "CardGuard",
    "AllowListEntry",
    "AudioFeatures",
    "CardBrand",
    "CardSubmission",
    "RiskTier",
    "RiskVerdict",
    "ScreeningReport",
    "VoiceVerdict",
    "classify",
    "validate_checksum",
    "RiskEngine",
    "RULES",
    "Rule",
    "InvalidSpectrumError",
    "VoiceAnalyzer",
    "extract_features",
    "score",
]
