from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from spam_email_classifier.analyze import ClassificationService
from spam_email_classifier.config import load_settings
from spam_email_classifier.email_parser import ensure_text, load_email_text
from spam_email_classifier.errors import ConfigurationError, InputError
from spam_email_classifier.examples import EXAMPLES, get_example
from spam_email_classifier.models import ClassificationResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spam Email Classifier")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Email text to classify")
    source.add_argument("--input", help="Path to an email file (.eml or .txt)")
    source.add_argument("--example", choices=sorted(EXAMPLES), help="Classify a built-in example")
    parser.add_argument(
        "--ai",
        action="store_true",
        help="Classify with the remote AI model (needs an API key)",
    )
    parser.add_argument(
        "--no-ai",
        action="store_false",
        dest="ai",
        help="Use the local keyword heuristic",
    )
    parser.set_defaults(ai=None)
    parser.add_argument("--api-key", help="Anthropic API key (default: ANTHROPIC_API_KEY)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    return parser


def format_result(result: ClassificationResult) -> str:
    lines = [
        f"Classification: {result.classification.value}",
        f"Confidence: {result.confidence:.0%}",
        f"Risk level: {result.risk_level.value}",
        f"Method: {result.method.value}",
        f"Analyzed at: {result.timestamp}",
        "Reasons:",
    ]
    lines.extend(f"  - {reason}" for reason in result.reasons)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    # -------------------------------------------------
    # 1. Read the email text
    # -------------------------------------------------
    try:
        if args.example:
            text = get_example(args.example)
        elif args.input:
            text = load_email_text(args.input)
        else:
            text = args.text
        text = ensure_text(text)
    except InputError as e:
        print(f"Nothing to classify: {e}", file=sys.stderr)
        return 1

    # -------------------------------------------------
    # 2. Classify
    # -------------------------------------------------
    use_ai = settings.use_ai if args.ai is None else args.ai
    api_key = args.api_key or settings.api_key

    service = ClassificationService.from_settings(settings)
    result = service.analyze(text, use_remote=use_ai, credential=api_key)
    if result is None:
        print("Nothing to classify: email text is empty", file=sys.stderr)
        return 1

    # -------------------------------------------------
    # 3. Report
    # -------------------------------------------------
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(format_result(result))

    return 3 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
