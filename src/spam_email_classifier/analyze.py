from __future__ import annotations

import time
from typing import Optional

from pydantic import SecretStr

from .config import Settings
from .errors import ClassificationError, ConfigurationError
from .heuristics import HeuristicClassifier
from .history import HistoryStore
from .llm import RemoteClassifier
from .logger import get_logger
from .models import ClassificationResult, LocalStrategy, Method, RemoteStrategy, Strategy

logger = get_logger(__name__)


def select_strategy(use_remote: bool, credential: Optional[str] = None) -> Strategy:
    """Map the "use AI" flag and optional API key onto a strategy.

    Asking for remote classification without a key is a configuration error,
    not a silent switch to the local heuristic.
    """
    if not use_remote:
        return LocalStrategy()
    if credential is None or not credential.strip():
        raise ConfigurationError("AI mode is enabled but no API key was provided")
    return RemoteStrategy(credential=SecretStr(credential))


class ClassificationService:
    def __init__(
        self,
        heuristic: HeuristicClassifier | None = None,
        remote: RemoteClassifier | None = None,
        history: HistoryStore | None = None,
        local_delay: float = 0.0,
    ):
        self.heuristic = heuristic or HeuristicClassifier()
        self.remote = remote or RemoteClassifier()
        self.history = history if history is not None else HistoryStore()
        self.local_delay = local_delay

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClassificationService":
        return cls(
            remote=RemoteClassifier(
                api_url=settings.api_url,
                model=settings.model,
                timeout=settings.timeout,
            ),
            history=HistoryStore(max_entries=settings.history_size),
            local_delay=settings.local_delay,
        )

    def analyze(
        self,
        text: str,
        use_remote: bool = False,
        credential: Optional[str] = None,
    ) -> Optional[ClassificationResult]:
        """Classify ``text`` and record spam/ham outcomes in history.

        Returns None for blank text. Every failure comes back as an
        ``error`` result instead of an exception.
        """
        if not text or not text.strip():
            return None

        try:
            strategy = select_strategy(use_remote, credential)
        except ConfigurationError as e:
            logger.warning("Cannot classify: %s", e)
            return ClassificationResult.failure(str(e), email=text)

        return self.run(text, strategy)

    def run(self, text: str, strategy: Strategy) -> Optional[ClassificationResult]:
        if not text or not text.strip():
            return None

        try:
            result = self._classify(text, strategy)
        except ClassificationError as e:
            logger.error("Classification failed (%s): %s", type(e).__name__, e)
            return ClassificationResult.failure(str(e), email=text)
        except Exception as e:
            logger.exception("Unexpected classification failure")
            return ClassificationResult.failure(str(e), email=text)

        self.history.append(result)
        logger.info(
            "Classified email %s as %s (confidence=%.2f, risk=%s, method=%s)",
            result.email_hash,
            result.classification.value,
            result.confidence,
            result.risk_level.value,
            result.method.value,
        )
        return result

    def _classify(self, text: str, strategy: Strategy) -> ClassificationResult:
        if isinstance(strategy, RemoteStrategy):
            verdict = self.remote.classify(text, strategy.credential.get_secret_value())
            return ClassificationResult.from_verdict(verdict, email=text, method=Method.REMOTE)

        if self.local_delay:
            # latency parity with the remote path, purely cosmetic
            time.sleep(self.local_delay)
        verdict = self.heuristic.classify(text)
        return ClassificationResult.from_verdict(verdict, email=text, method=Method.LOCAL)
