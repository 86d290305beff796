"""Tests for the heuristic rule set."""

from datetime import date

import pytest

from cardguard.rules import (
    RULES,
    has_repeating_digits,
    is_expired_or_malformed,
    is_high_risk_prefix,
    is_known_test_number,
    is_suspicious_cvv,
    is_suspicious_name,
)
from cardguard.types import CardSubmission

TODAY = date(2025, 6, 15)


class TestKnownTestNumber:
    @pytest.mark.parametrize("number", [
        "4111111111111111",
        "5555555555554444",
        "371449635398431",
        "6011111111111117",
        "4111 1111 1111 1111",
    ])
    def test_documented_numbers(self, number):
        assert is_known_test_number(number) is True

    def test_ordinary_number(self):
        assert is_known_test_number("4242424242424242") is False


class TestExpiry:
    def test_current_month_not_expired(self):
        assert is_expired_or_malformed((6, 25), TODAY) is False

    def test_previous_month_expired(self):
        assert is_expired_or_malformed((5, 25), TODAY) is True

    def test_previous_year_expired(self):
        assert is_expired_or_malformed((12, 24), TODAY) is True

    def test_future(self):
        assert is_expired_or_malformed((1, 26), TODAY) is False
        assert is_expired_or_malformed((12, 99), TODAY) is False

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_out_of_range(self, month):
        assert is_expired_or_malformed((month, 30), TODAY) is True

    def test_unparsed_expiry(self):
        assert is_expired_or_malformed(None, TODAY) is True

    @pytest.mark.parametrize("expiry", ["1/30", "01-30", "0130", "01/2030", "ab/cd", ""])
    def test_malformed_strings_do_not_parse(self, expiry):
        submission = CardSubmission("4242424242424242", "JANE DOE", expiry, "256")
        assert submission.expiry_parts is None


class TestRepeatingDigits:
    def test_four_in_a_row(self):
        assert has_repeating_digits("4012888888881881") is True
        assert has_repeating_digits("4000012345678901") is True

    def test_three_in_a_row_allowed(self):
        assert has_repeating_digits("4000123456789012") is False

    def test_no_run(self):
        assert has_repeating_digits("4242424242424242") is False


class TestHighRiskPrefix:
    @pytest.mark.parametrize("number", ["4123456789012349", "3727810000000000", "6011340000000000"])
    def test_flagged(self, number):
        assert is_high_risk_prefix(number) is True

    def test_not_flagged(self):
        assert is_high_risk_prefix("4242424242424242") is False

    def test_short_number(self):
        assert is_high_risk_prefix("41234") is False


class TestSuspiciousName:
    @pytest.mark.parametrize("name", ["JO", "", "  A  ", "J4NE DOE", "AAAB SMITH", "JANE   DOE"])
    def test_suspicious(self, name):
        assert is_suspicious_name(name) is True

    @pytest.mark.parametrize("name", ["BOB", "ANNA SMITH", "JAIAKASH MURALI"])
    def test_plausible(self, name):
        assert is_suspicious_name(name) is False


class TestSuspiciousCVV:
    @pytest.mark.parametrize("cvv", ["123", "789", "321", "987", "456"])
    def test_sequences(self, cvv):
        assert is_suspicious_cvv(cvv) is True

    @pytest.mark.parametrize("cvv", ["111", "000", "1112"])
    def test_repeated_digits(self, cvv):
        assert is_suspicious_cvv(cvv) is True

    @pytest.mark.parametrize("cvv", ["124", "256", "1234", "907"])
    def test_ordinary(self, cvv):
        assert is_suspicious_cvv(cvv) is False


class TestRuleTable:
    def test_declaration_order(self):
        assert list(RULES) == [
            "known_test_number",
            "expired_or_malformed_expiry",
            "repeating_digits",
            "high_risk_prefix",
            "suspicious_holder_name",
            "suspicious_cvv",
        ]

    def test_keys_match_rule_names(self):
        for name, rule in RULES.items():
            assert rule.name == name
            assert rule.message

    def test_rules_run_independently(self):
        submission = CardSubmission("4242424242424242", "JO", "12/30", "123")
        fired = [name for name, rule in RULES.items() if rule.check(submission, TODAY)]
        assert fired == ["suspicious_holder_name", "suspicious_cvv"]
        # second pass sees no leftover state
        fired_again = [name for name, rule in RULES.items() if rule.check(submission, TODAY)]
        assert fired_again == fired
