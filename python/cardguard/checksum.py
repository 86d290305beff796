"""Card number checksum and brand detection."""
from .types import CardBrand

MIN_NUMBER_LENGTH = 13
MAX_NUMBER_LENGTH = 19


def validate_checksum(digits: str) -> bool:
    """Validate a card number with the Luhn algorithm.

    Whitespace is ignored. Anything that is not 13-19 decimal digits
    returns False.
    """
    cleaned = "".join(digits.split())
    if not (MIN_NUMBER_LENGTH <= len(cleaned) <= MAX_NUMBER_LENGTH):
        return False
    if not (cleaned.isascii() and cleaned.isdigit()):
        return False

    total = 0
    alternate = False
    for char in reversed(cleaned):
        digit = int(char)
        if alternate:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        alternate = not alternate

    return total % 10 == 0


def classify(digits: str) -> CardBrand:
    """Detect the card brand from the number prefix."""
    if digits[:2] in ("34", "37"):
        return CardBrand.AMEX
    if digits[:1] == "4":
        return CardBrand.VISA
    if digits[:2] in ("51", "52", "53", "54", "55"):
        return CardBrand.MASTERCARD
    return CardBrand.UNKNOWN
