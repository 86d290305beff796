"""Type definitions for CardGuard."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class RiskTier(Enum):
    """Ordinal fraud-risk classification."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _TIER_RANKS[self]


_TIER_RANKS = {RiskTier.LOW: 0, RiskTier.MEDIUM: 1, RiskTier.HIGH: 2}


class CardBrand(Enum):
    """Card brands recognised from the number prefix."""
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CardSubmission:
    """Card details as entered in the form.

    Fields are expected pre-normalised: digits only in ``number``, an
    upper-cased ``holder_name`` and an ``MM/YY`` ``expiry``.
    """
    number: str
    holder_name: str
    expiry: str
    cvv: str

    @property
    def expiry_parts(self) -> Optional[Tuple[int, int]]:
        """(month, two-digit year), or None when expiry is not MM/YY."""
        parts = self.expiry.split("/")
        if len(parts) != 2:
            return None
        month, year = parts
        if len(month) != 2 or len(year) != 2:
            return None
        if not (month.isascii() and year.isascii()):
            return None
        if not (month.isdigit() and year.isdigit()):
            return None
        return int(month), int(year)

    @property
    def last4(self) -> str:
        return self.number[-4:]


@dataclass(frozen=True)
class AllowListEntry:
    """A pre-approved submission, matched exactly on all four fields."""
    number: str
    holder_name: str
    expiry: str
    cvv: str

    def matches(self, submission: CardSubmission) -> bool:
        return (
            submission.number == self.number
            and submission.holder_name == self.holder_name
            and submission.expiry == self.expiry
            and submission.cvv == self.cvv
        )


@dataclass(frozen=True)
class RiskVerdict:
    """Result of evaluating one card submission."""
    is_valid: bool
    risk_tier: RiskTier
    messages: Tuple[str, ...] = ()
    triggered: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AudioFeatures:
    """Spectral features, each in [0, 1]."""
    naturalness: float = 0.0
    pitch_variation: float = 0.0
    rhythm: float = 0.0


@dataclass(frozen=True)
class VoiceVerdict:
    """Result of the voice authenticity heuristic."""
    is_real: bool
    confidence: float
    features: AudioFeatures = field(default_factory=AudioFeatures)
    error: Optional[str] = None


@dataclass(frozen=True)
class ScreeningReport:
    """Card and voice verdicts reported side by side."""
    card: RiskVerdict
    brand: CardBrand
    voice: Optional[VoiceVerdict] = None
