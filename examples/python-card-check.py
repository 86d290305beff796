import os
import sys
import json
from dataclasses import asdict

# Add python directory to path to import cardguard
sys.path.append(os.path.join(os.path.dirname(__file__), '../python'))

from cardguard import CardGuard, CardSubmission

SAMPLES = [
    CardSubmission("378282246310005", "JAIAKASH MURALI", "02/29", "256"),
    CardSubmission("4242424242424242", "JANE DOE", "12/30", "256"),
    CardSubmission("4242424242424242", "JANE DOE", "12/30", "123"),
    CardSubmission("4111111111111111", "J0HN", "01/20", "111"),
    CardSubmission("4111111111111112", "JANE DOE", "12/30", "256"),
]


def main():
    print("--- Card Fraud Screening (Python) ---")

    guard = CardGuard()
    for submission in SAMPLES:
        report = guard.screen(submission)
        print(f"\nCard ending {submission.last4} ({report.brand.value})")
        print(f"Risk: {report.card.risk_tier.value}, valid: {report.card.is_valid}")
        for message in report.card.messages:
            print(f"  - {message}")

    print("\n[Voice Check: synthetic spectrum]")
    verdict = guard.analyze_voice([0, 255] * 512)
    print(json.dumps(asdict(verdict), indent=2))


if __name__ == "__main__":
    main()
