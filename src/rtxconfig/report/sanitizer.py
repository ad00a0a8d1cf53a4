"""Redaction of secrets in configuration commands."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEYWORDS = (
    "password",
    "pre-shared-key",
    "secret",
    "community",
    "token",
    "auth",
    "credential",
)

SENSITIVE_FIELDS = {
    "password",
    "pre_shared_key",
    "secret",
    "community",
    "token",
    "api_key",
    "credential",
}

# Each pattern captures the command prefix in group 1 and the secret in group 2.
SECRET_PATTERNS = (
    re.compile(r"^(login\s+password\s+)(\S.*)$"),
    re.compile(r"^(administrator\s+password\s+)(\S.*)$"),
    re.compile(r"^(login\s+user\s+\S+\s+(?:encrypted\s+)?)(\S+)"),
    re.compile(r"^(ipsec\s+ike\s+pre-shared-key\s+\d+\s+text\s+)(\S+)"),
    re.compile(r"^(pp\s+auth\s+username\s+\S+\s+)(\S+)"),
    re.compile(r"^(pp\s+auth\s+myname\s+\S+\s+)(\S+)"),
    re.compile(r"^(l2tp\s+tunnel\s+auth\s+on\s+)(\S+)"),
    re.compile(r"^(snmp\s+community\s+read-(?:only|write)\s+)(\S+)"),
)


def sanitize_line(text: str) -> str:
    """Replace the secret value of a known credential command."""
    for pattern in SECRET_PATTERNS:
        m = pattern.match(text)
        if m:
            return text[:m.end(1)] + REDACTED + text[m.end(2):]
    return text


def contains_sensitive(text: str) -> bool:
    if not text:
        return False
    lower = text.lower()
    return any(keyword in lower for keyword in SENSITIVE_KEYWORDS)


def sanitize_mapping(data: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``data`` with values of sensitive keys redacted."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_FIELDS:
            result[key] = REDACTED
        elif isinstance(value, str):
            result[key] = sanitize_line(value)
        else:
            result[key] = value
    return result
