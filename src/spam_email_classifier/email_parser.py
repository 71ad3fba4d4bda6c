from __future__ import annotations

import email
import email.policy
from email.message import EmailMessage
from pathlib import Path
from typing import List

from .errors import InputError


def _decoded_text(part: EmailMessage) -> str:
    try:
        return part.get_content() or ""
    except LookupError:
        # unknown charset
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


def eml_to_text(raw: bytes) -> str:
    """Flatten an RFC 822 message into the text block the classifier reads.

    Subject and From lead, followed by the plain-text body (or the html body
    when there is no plain part). Attachments are skipped.
    """
    msg = email.message_from_bytes(raw, policy=email.policy.default)
    body_part = msg.get_body(preferencelist=("plain", "html"))
    body = _decoded_text(body_part) if body_part is not None else ""

    lines: List[str] = []
    if msg.get("Subject"):
        lines.append(f"Subject: {msg['Subject']}")
    if msg.get("From"):
        lines.append(f"From: {msg['From']}")
    lines.extend(["", body])
    return "\n".join(lines).strip()


def load_email_text(path: str | Path) -> str:
    p = Path(path)
    if not p.exists():
        raise InputError(f"Input file does not exist: {p}")

    if p.suffix.lower() == ".eml":
        return eml_to_text(p.read_bytes())
    return p.read_text(encoding="utf-8", errors="replace")


def ensure_text(text: str | None) -> str:
    if not text or not text.strip():
        raise InputError("Email text is empty")
    return text
