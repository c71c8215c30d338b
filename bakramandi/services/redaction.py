from __future__ import annotations
from typing import Any

SENSITIVE_KEYS = frozenset({
    "password", "new_password", "confirm_password",
    "token", "account_number", "accountNumber",
})

REDACTED = "**********"


def mask_token(token: str | None) -> str:
    # enough of the token to correlate log lines, not enough to replay it
    if not token:
        return "<none>"
    return token[:4] + "..."


def redact(value: Any, *, keys: frozenset[str] = SENSITIVE_KEYS) -> Any:
    if isinstance(value, dict):
        return {k: REDACTED if k in keys else redact(v, keys=keys) for k, v in value.items()}
    if isinstance(value, list):
        return [redact(v, keys=keys) for v in value]
    return value
