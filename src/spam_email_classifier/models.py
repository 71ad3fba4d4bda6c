from __future__ import annotations

import hashlib
from datetime import datetime
from enum import Enum
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, computed_field, field_validator


class Classification(str, Enum):
    SPAM = "spam"
    HAM = "ham"
    ERROR = "error"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Method(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"
    ERROR = "error"


class Verdict(BaseModel):
    """Raw classifier output, before the service attaches email/timestamp/method."""

    model_config = ConfigDict(frozen=True)

    classification: Literal["spam", "ham"]
    confidence: float
    reasons: Tuple[str, ...] = Field(min_length=1)
    risk_level: RiskLevel

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, v: float) -> float:
        return min(1.0, max(0.0, v))


def _now() -> str:
    return datetime.now().strftime("%c")


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    classification: Classification
    confidence: float = Field(ge=0.0, le=1.0)
    reasons: Tuple[str, ...] = Field(min_length=1)
    risk_level: RiskLevel = RiskLevel.MEDIUM
    email: str = ""
    timestamp: str = Field(default_factory=_now)
    method: Method

    @computed_field  # type: ignore[misc]
    @property
    def email_hash(self) -> str:
        # short, display-only fingerprint of the input
        return hashlib.sha256(self.email.encode("utf-8")).hexdigest()[:12]

    @property
    def is_error(self) -> bool:
        return self.classification is Classification.ERROR

    @classmethod
    def from_verdict(cls, verdict: Verdict, *, email: str, method: Method) -> "ClassificationResult":
        return cls(
            classification=verdict.classification,
            confidence=verdict.confidence,
            reasons=tuple(verdict.reasons),
            risk_level=verdict.risk_level,
            email=email,
            method=method,
        )

    @classmethod
    def failure(cls, message: str, *, email: str = "") -> "ClassificationResult":
        return cls(
            classification=Classification.ERROR,
            confidence=0.0,
            reasons=(f"Error: {message}. Try disabling AI mode or checking your API Key.",),
            risk_level=RiskLevel.MEDIUM,
            email=email,
            method=Method.ERROR,
        )


class LocalStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["local"] = "local"


class RemoteStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["remote"] = "remote"
    credential: SecretStr

    @field_validator("credential")
    @classmethod
    def _require_credential(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("credential must not be blank")
        return v


Strategy = Union[LocalStrategy, RemoteStrategy]
