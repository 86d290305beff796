"""Main CardGuard implementation.

Runs the card risk engine and the voice heuristic for one form submission
and reports both verdicts side by side.
"""
from datetime import date
from typing import Callable, Iterable, Optional, Sequence, Union

from .audio import VoiceAnalyzer
from .checksum import classify
from .engine import RiskEngine
from .types import (
    AllowListEntry,
    CardBrand,
    CardSubmission,
    RiskVerdict,
    ScreeningReport,
    VoiceVerdict,
)


class CardGuard:
    """Main class for screening a card submission."""

    def __init__(
        self,
        allow_list: Optional[Iterable[AllowListEntry]] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize CardGuard instance.

        Args:
            allow_list: Pre-approved submissions (engine default if None)
            today: Clock used by the expiry rule
        """
        self.engine = RiskEngine(allow_list=allow_list, today=today)
        self.voice = VoiceAnalyzer()

    def evaluate(self, submission: CardSubmission) -> RiskVerdict:
        return self.engine.evaluate(submission)

    def classify(self, number: str) -> CardBrand:
        return classify(number)

    def analyze_voice(self, audio: Union[bytes, Sequence[float]]) -> VoiceVerdict:
        """Score a voice sample given as WAV bytes or a ready spectrum."""
        if isinstance(audio, (bytes, bytearray)):
            return self.voice.analyze_audio(bytes(audio))
        return self.voice.analyze_spectrum(audio)

    def screen(
        self,
        submission: CardSubmission,
        audio: Optional[Union[bytes, Sequence[float]]] = None,
    ) -> ScreeningReport:
        """Screen a submission and, when given, its voice sample.

        Args:
            submission: Pre-normalised card details
            audio: Optional WAV bytes or byte frequency spectrum

        Returns:
            ScreeningReport holding the card and voice verdicts separately
        """
        return ScreeningReport(
            card=self.evaluate(submission),
            brand=self.classify(submission.number),
            voice=None if audio is None else self.analyze_voice(audio),
        )
