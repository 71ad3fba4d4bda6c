"""Spam/ham email classifier with a local heuristic and a remote LLM strategy."""

from .analyze import ClassificationService, select_strategy
from .examples import HAM_EXAMPLE, SPAM_EXAMPLE, get_example
from .heuristics import HeuristicClassifier
from .history import HistoryStore
from .llm import RemoteClassifier
from .models import (
    Classification,
    ClassificationResult,
    LocalStrategy,
    Method,
    RemoteStrategy,
    RiskLevel,
    Verdict,
)

__all__ = [
    "ClassificationService",
    "select_strategy",
    "HeuristicClassifier",
    "RemoteClassifier",
    "HistoryStore",
    "Classification",
    "ClassificationResult",
    "LocalStrategy",
    "Method",
    "RemoteStrategy",
    "RiskLevel",
    "Verdict",
    "SPAM_EXAMPLE",
    "HAM_EXAMPLE",
    "get_example",
]
