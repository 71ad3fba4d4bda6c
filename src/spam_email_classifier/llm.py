from __future__ import annotations

import json
import re
from typing import Any, Dict

import requests
from pydantic import ValidationError

from .config import API_VERSION, DEFAULT_API_URL, DEFAULT_MODEL, MAX_TOKENS
from .errors import ParseError, TransportError
from .logger import get_logger
from .models import Verdict

logger = get_logger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

PROMPT_TEMPLATE = (
    "Analyze this email and determine if it's spam or legitimate (ham).\n"
    'Email: "{email}"\n'
    "Respond ONLY with a JSON object in this exact format: "
    '{{ "classification": "spam"|"ham", "confidence": number, '
    '"reasons": string[], "risk_level": "low"|"medium"|"high" }}'
)


def build_prompt(email_text: str) -> str:
    return PROMPT_TEMPLATE.format(email=email_text)


def _strip_code_fences(text: str) -> str:
    return _CODE_FENCE_RE.sub("", text or "").strip()


def _first_text_block(data: Any) -> str:
    content = data.get("content") if isinstance(data, dict) else None
    for block in content or []:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text") or ""
    return ""


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"API Error: {response.status_code}"


class RemoteClassifier:
    """Delegates classification to the Anthropic Messages API.

    One POST per call, no retries. The API key is only placed in the request
    header and never logged.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self._http = session or requests

    def build_request(self, text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": build_prompt(text)}],
        }

    def classify(self, text: str, credential: str) -> Verdict:
        headers = {
            "content-type": "application/json",
            "x-api-key": credential,
            "anthropic-version": API_VERSION,
        }

        logger.debug("Requesting remote classification from %s (model=%s)", self.api_url, self.model)
        try:
            response = self._http.post(
                self.api_url,
                headers=headers,
                json=self.build_request(text),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if not response.ok:
            raise TransportError(_error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Response body is not JSON: {e}") from e

        return self.parse_reply(_first_text_block(data))

    @staticmethod
    def parse_reply(text: str) -> Verdict:
        cleaned = _strip_code_fences(text)
        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ParseError(f"Reply is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ParseError("Reply JSON is not an object")

        try:
            return Verdict.model_validate(payload)
        except ValidationError as e:
            raise ParseError(f"Reply JSON has an unexpected shape: {e.error_count()} invalid field(s)") from e
