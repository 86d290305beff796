"""Risk aggregation over the card checksum and heuristic rules."""
import logging
from datetime import date
from typing import Callable, Dict, Iterable, Optional

from .checksum import validate_checksum
from .rules import RULES, Rule
from .types import AllowListEntry, CardSubmission, RiskTier, RiskVerdict

logger = logging.getLogger(__name__)

DEFAULT_ALLOW_LIST = (
    AllowListEntry(
        number='378282246310005',
        holder_name='JAIAKASH MURALI',
        expiry='02/29',
        cvv='256',
    ),
)


class RiskEngine:
    """Deterministic rule engine producing a RiskVerdict per submission.

    Evaluation order:
        1. Allow-list exact match  -> LOW, nothing else runs
        2. Structural gate         -> HIGH and invalid on bad checksum, expiry or CVV format
        3. Heuristic rules         -> tier from the number of triggered rules
    """

    MESSAGES = {
        'allow_listed': 'Pre-approved verified card',
        'invalid_checksum': 'Invalid card number (failed checksum)',
        'invalid_cvv': 'Invalid CVV format',
        'invalid_expiry': 'Invalid expiry date format',
        'no_findings': 'No suspicious patterns detected',
    }

    def __init__(
        self,
        allow_list: Optional[Iterable[AllowListEntry]] = None,
        rules: Optional[Dict[str, Rule]] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize RiskEngine.

        Args:
            allow_list: Pre-approved submissions (defaults to DEFAULT_ALLOW_LIST)
            rules: Rule table, evaluated in insertion order (defaults to RULES)
            today: Clock used by the expiry rule
        """
        self.allow_list = tuple(DEFAULT_ALLOW_LIST if allow_list is None else allow_list)
        self.rules = dict(RULES if rules is None else rules)
        self._today = today

    def evaluate(self, submission: CardSubmission) -> RiskVerdict:
        """Evaluate a pre-normalised card submission.

        Args:
            submission: Card details; never mutated

        Returns:
            RiskVerdict with validity, tier and ordered messages
        """
        if any(entry.matches(submission) for entry in self.allow_list):
            logger.debug(f"Card ending {submission.last4} is allow-listed")
            return RiskVerdict(
                is_valid=True,
                risk_tier=RiskTier.LOW,
                messages=(self.MESSAGES['allow_listed'],),
            )

        if not validate_checksum(submission.number):
            return self._invalid(submission, 'invalid_checksum')

        if not _is_expiry_format(submission):
            return self._invalid(submission, 'invalid_expiry')

        if not _is_cvv_format(submission.cvv):
            return self._invalid(submission, 'invalid_cvv')

        today = self._today()
        triggered = [
            rule for rule in self.rules.values()
            if rule.check(submission, today)
        ]

        tier = self.tier_for(len(triggered))
        messages = tuple(rule.message for rule in triggered) or (self.MESSAGES['no_findings'],)

        logger.debug(
            f"Card ending {submission.last4}: {tier.value} risk, "
            f"{len(triggered)} rule(s) triggered"
        )
        return RiskVerdict(
            is_valid=True,
            risk_tier=tier,
            messages=messages,
            triggered=tuple(rule.name for rule in triggered),
        )

    @staticmethod
    def tier_for(trigger_count: int) -> RiskTier:
        """Map the number of triggered rules to a risk tier."""
        if trigger_count == 0:
            return RiskTier.LOW
        if trigger_count == 1:
            return RiskTier.MEDIUM
        return RiskTier.HIGH

    def _invalid(self, submission: CardSubmission, reason: str) -> RiskVerdict:
        logger.debug(f"Card ending {submission.last4} rejected: {reason}")
        return RiskVerdict(
            is_valid=False,
            risk_tier=RiskTier.HIGH,
            messages=(self.MESSAGES[reason],),
        )


def _is_expiry_format(submission: CardSubmission) -> bool:
    parts = submission.expiry_parts
    return parts is not None and 1 <= parts[0] <= 12


def _is_cvv_format(cvv: str) -> bool:
    return 3 <= len(cvv) <= 4 and cvv.isascii() and cvv.isdigit()
