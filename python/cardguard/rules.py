"""
Heuristic suspicion rules for card submissions.

Each rule is an independent predicate over one field of the submission.
The rule table below is the single source of truth for rule order,
names and messages; every surface evaluates the same table.

Rules (in declaration order):
  1. known_test_number           : publicly documented sample numbers
  2. expired_or_malformed_expiry : MM/YY format and not in the past
  3. repeating_digits            : 4+ identical consecutive digits
  4. high_risk_prefix            : flagged 6-digit issuer prefixes
  5. suspicious_holder_name      : too short, digits, or repeated letters
  6. suspicious_cvv              : sequential or repeated digits
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Optional, Tuple

from .types import CardSubmission

# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------

KNOWN_TEST_NUMBERS: Dict[str, frozenset] = {
    'visa': frozenset({'4111111111111111', '4012888888881881'}),
    'mastercard': frozenset({'5555555555554444', '5105105105105100'}),
    'amex': frozenset({'371449635398431', '378734493671000', '378282246310005'}),
    'discover': frozenset({'6011111111111117'}),
}

HIGH_RISK_PREFIXES = frozenset({
    '372781', '372782', '372783',
    '412345', '512345', '601134',
})

SEQUENTIAL_CVVS = frozenset({
    '123', '234', '345', '456', '567', '678', '789',
    '987', '876', '765', '654', '543', '432', '321',
})

MIN_HOLDER_NAME_LENGTH = 3

# Two-digit years are read as 20YY
EXPIRY_CENTURY = 2000

_REPEATING_DIGITS = re.compile(r'(\d)\1{3,}')
_REPEATING_CHARS = re.compile(r'(.)\1{2,}')
_REPEATING_CVV_DIGITS = re.compile(r'(\d)\1{2}')
_DIGIT = re.compile(r'\d')


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_known_test_number(number: str) -> bool:
    normalized = "".join(number.split())
    return any(normalized in numbers for numbers in KNOWN_TEST_NUMBERS.values())


def is_expired_or_malformed(expiry_parts: Optional[Tuple[int, int]], today: date) -> bool:
    """True when the expiry is malformed or earlier than the current month.

    Args:
        expiry_parts: (month, two-digit year) as parsed from MM/YY, or None
        today: Current date
    """
    if expiry_parts is None:
        return True
    month, year = expiry_parts
    if not 1 <= month <= 12:
        return True
    return (EXPIRY_CENTURY + year, month) < (today.year, today.month)


def has_repeating_digits(number: str) -> bool:
    return _REPEATING_DIGITS.search(number) is not None


def is_high_risk_prefix(number: str) -> bool:
    return number[:6] in HIGH_RISK_PREFIXES


def is_suspicious_name(name: str) -> bool:
    if len(name.strip()) < MIN_HOLDER_NAME_LENGTH:
        return True
    if _DIGIT.search(name):
        return True
    return _REPEATING_CHARS.search(name) is not None


def is_suspicious_cvv(cvv: str) -> bool:
    if cvv in SEQUENTIAL_CVVS:
        return True
    return _REPEATING_CVV_DIGITS.search(cvv) is not None


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """A named suspicion check and the message reported when it fires."""
    name: str
    check: Callable[[CardSubmission, date], bool]
    message: str


RULES: Dict[str, Rule] = {
    rule.name: rule
    for rule in (
        Rule(
            'known_test_number',
            lambda s, today: is_known_test_number(s.number),
            'Test card number detected',
        ),
        Rule(
            'expired_or_malformed_expiry',
            lambda s, today: is_expired_or_malformed(s.expiry_parts, today),
            'Card is expired or has an invalid expiry date',
        ),
        Rule(
            'repeating_digits',
            lambda s, today: has_repeating_digits(s.number),
            'Suspicious card number pattern',
        ),
        Rule(
            'high_risk_prefix',
            lambda s, today: is_high_risk_prefix(s.number),
            'High-risk card issuer',
        ),
        Rule(
            'suspicious_holder_name',
            lambda s, today: is_suspicious_name(s.holder_name),
            'Suspicious cardholder name',
        ),
        Rule(
            'suspicious_cvv',
            lambda s, today: is_suspicious_cvv(s.cvv),
            'Suspicious CVV pattern',
        ),
    )
}
