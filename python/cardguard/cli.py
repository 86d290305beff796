"""Command-line interface for CardGuard."""
import argparse
import json
import logging
import re
import sys
from dataclasses import asdict
from pathlib import Path

from .screening import CardGuard
from .types import CardSubmission, RiskTier, RiskVerdict, VoiceVerdict

_RISK_LABELS = {
    RiskTier.LOW: "Low Risk",
    RiskTier.MEDIUM: "Medium Risk",
    RiskTier.HIGH: "High Risk",
}


def format_expiry(value: str) -> str:
    """Turn typed expiry digits into MM/YY."""
    digits = re.sub(r"\D", "", value)
    if len(digits) >= 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits


def build_submission(args) -> CardSubmission:
    """Normalise raw form input the way the entry form does."""
    return CardSubmission(
        number=re.sub(r"\s", "", args.number),
        holder_name=args.name.strip().upper(),
        expiry=format_expiry(args.expiry),
        cvv=args.cvv.strip(),
    )


def _read_audio(path_arg: str) -> bytes:
    audio_path = Path(path_arg)
    if not audio_path.is_file():
        print(f"Error: File not found: {path_arg}", file=sys.stderr)
        sys.exit(1)
    return audio_path.read_bytes()


def _card_dict(verdict: RiskVerdict, brand) -> dict:
    return {
        "brand": brand.value,
        "is_valid": verdict.is_valid,
        "risk_tier": verdict.risk_tier.value,
        "messages": list(verdict.messages),
        "triggered": list(verdict.triggered),
    }


def _voice_dict(verdict: VoiceVerdict) -> dict:
    return {
        "is_real": verdict.is_real,
        "confidence": verdict.confidence,
        "features": asdict(verdict.features),
        "error": verdict.error,
    }


def _print_card(verdict: RiskVerdict, brand) -> None:
    print("Card Check:")
    print(f"  Brand: {brand.value.upper()}")
    print(f"  Valid: {'yes' if verdict.is_valid else 'no'}")
    print(f"  Risk: {_RISK_LABELS[verdict.risk_tier]}")
    if not verdict.is_valid:
        icon = "✗"
    elif verdict.risk_tier is RiskTier.LOW:
        icon = "✓"
    else:
        icon = "⚠"
    for message in verdict.messages:
        print(f"  {icon} {message}")


def _print_voice(verdict: VoiceVerdict) -> None:
    print("Voice Check:")
    label = "Real voice" if verdict.is_real else "Possibly synthetic"
    print(f"  {'✓' if verdict.is_real else '✗'} {label} ({verdict.confidence * 100:.0f}% confidence)")
    print(f"  Naturalness: {verdict.features.naturalness * 100:.0f}%")
    print(f"  Pitch variation: {verdict.features.pitch_variation * 100:.0f}%")
    print(f"  Rhythm: {verdict.features.rhythm * 100:.0f}%")
    if verdict.error:
        print(f"  Error: {verdict.error}")


def _banner(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def card_command(args):
    """Evaluate card details command."""
    guard = CardGuard()
    submission = build_submission(args)
    verdict = guard.evaluate(submission)
    brand = guard.classify(submission.number)

    if args.json:
        print(json.dumps(_card_dict(verdict, brand), indent=2))
    else:
        _banner("Card Fraud Check")
        _print_card(verdict, brand)
        print(f"\n{'='*60}\n")

    sys.exit(0 if verdict.risk_tier is RiskTier.LOW else 1)


def voice_command(args):
    """Analyze voice sample command."""
    guard = CardGuard()
    verdict = guard.analyze_voice(_read_audio(args.file))

    if args.json:
        print(json.dumps(_voice_dict(verdict), indent=2))
    else:
        _banner("Voice Authenticity Check")
        print(f"File: {Path(args.file).resolve()}")
        _print_voice(verdict)
        print(f"\n{'='*60}\n")

    sys.exit(0 if verdict.is_real else 1)


def screen_command(args):
    """Card and voice check side by side."""
    guard = CardGuard()
    audio = _read_audio(args.audio) if args.audio else None
    report = guard.screen(build_submission(args), audio)

    if args.json:
        print(json.dumps({
            "card": _card_dict(report.card, report.brand),
            "voice": _voice_dict(report.voice) if report.voice else None,
        }, indent=2))
    else:
        _banner("Fraud Screening Report")
        _print_card(report.card, report.brand)
        if report.voice:
            print()
            _print_voice(report.voice)
        print(f"\n{'='*60}\n")

    passed = report.card.risk_tier is RiskTier.LOW
    if report.voice is not None:
        passed = passed and report.voice.is_real
    sys.exit(0 if passed else 1)


def _add_card_arguments(parser):
    parser.add_argument("-n", "--number", required=True, help="Card number (spaces allowed)")
    parser.add_argument("--name", required=True, help="Cardholder name")
    parser.add_argument("-e", "--expiry", required=True, help="Expiry date, MM/YY")
    parser.add_argument("-c", "--cvv", required=True, help="Card verification value")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cardguard",
        description="Heuristic card fraud screening with a voice authenticity check"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Card command
    card_parser = subparsers.add_parser("card", help="Evaluate card details")
    _add_card_arguments(card_parser)
    card_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    card_parser.set_defaults(func=card_command)

    # Voice command
    voice_parser = subparsers.add_parser("voice", help="Analyze a WAV voice sample")
    voice_parser.add_argument("file", help="WAV file to analyze")
    voice_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    voice_parser.set_defaults(func=voice_command)

    # Screen command
    screen_parser = subparsers.add_parser("screen", help="Card and voice check together")
    _add_card_arguments(screen_parser)
    screen_parser.add_argument("-a", "--audio", help="Optional WAV voice sample")
    screen_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    screen_parser.set_defaults(func=screen_command)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        )

    args.func(args)


if __name__ == "__main__":
    main()
