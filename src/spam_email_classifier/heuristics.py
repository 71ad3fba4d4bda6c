from __future__ import annotations

from typing import List

from .models import RiskLevel, Verdict

# Checked in this order; reasons follow the same order.
SPAM_TRIGGERS = [
    "won",
    "lottery",
    "prize",
    "urgent",
    "bank account",
    "click here",
    "password",
    "social security",
    "verify your account",
    "inheritance",
    "million dollars",
    "congratulations",
]

HAM_REASONS = (
    "No suspicious keywords found",
    "Tone appears natural",
    "No urgent tracking links identified",
)

_BASE_SPAM_CONFIDENCE = 0.8
_PER_TRIGGER_BONUS = 0.05
_MAX_COUNTED_TRIGGERS = 4
_HAM_CONFIDENCE = 0.9


class HeuristicClassifier:
    """Keyword-based spam scorer.

    Matching is a plain case-insensitive substring test, so "won" also fires
    inside "wonderful".
    """

    def __init__(self, triggers: List[str] | None = None):
        self.triggers = list(triggers) if triggers is not None else list(SPAM_TRIGGERS)

    def matched_phrases(self, text: str) -> List[str]:
        text_lower = (text or "").lower()
        hits: List[str] = []
        for phrase in self.triggers:
            if phrase in text_lower and phrase not in hits:
                hits.append(phrase)
        return hits

    def classify(self, text: str) -> Verdict:
        hits = self.matched_phrases(text)

        if not hits:
            return Verdict(
                classification="ham",
                confidence=_HAM_CONFIDENCE,
                reasons=HAM_REASONS,
                risk_level=RiskLevel.LOW,
            )

        confidence = _BASE_SPAM_CONFIDENCE + _PER_TRIGGER_BONUS * min(len(hits), _MAX_COUNTED_TRIGGERS)
        return Verdict(
            classification="spam",
            confidence=round(min(confidence, 1.0), 4),
            reasons=tuple(f'Contains suspicious phrase: "{phrase}"' for phrase in hits),
            risk_level=RiskLevel.HIGH if len(hits) > 2 else RiskLevel.MEDIUM,
        )
