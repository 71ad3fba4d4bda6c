"""Canned demo emails, one obvious spam and one ordinary work message."""

from __future__ import annotations

SPAM_EXAMPLE = (
    "CONGRATULATIONS!!! You've WON $1,000,000 in our lottery! Click here NOW to claim "
    "your prize before it expires! Send your bank account details to process the "
    "payment immediately!"
)

HAM_EXAMPLE = (
    "Hi Sarah, I hope this email finds you well. I wanted to follow up on our meeting "
    "last week about the Q2 project timeline. Could you send me the updated schedule "
    "when you have a moment? Thanks!"
)

EXAMPLES = {"spam": SPAM_EXAMPLE, "ham": HAM_EXAMPLE}


def get_example(kind: str) -> str:
    try:
        return EXAMPLES[kind.lower()]
    except KeyError:
        raise KeyError(f"Unknown example {kind!r}; expected one of {sorted(EXAMPLES)}") from None
