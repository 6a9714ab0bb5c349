"""Detection of exhausted remote API quotas."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"

MESSAGE_PREFIX = "GitHub API rate limit exceeded."
MESSAGE_SUFFIX = "Configure a GitHub token via BOOKFROMHUB_GITHUB_TOKEN to raise the limit."


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def format_reset_time(value: str | None) -> str | None:
    seconds = _parse_int(value)
    if seconds is None:
        return None
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.strftime("%H:%M:%S UTC")


def is_rate_limited(status_code: int, headers: Mapping[str, str]) -> bool:
    if status_code == 429:
        return True
    if status_code == 403:
        return _parse_int(_header(headers, REMAINING_HEADER)) == 0
    return False


def detect_rate_limit(status_code: int, headers: Mapping[str, str]) -> str | None:
    """Return the operator message when the response signals quota exhaustion."""

    if not is_rate_limited(status_code, headers):
        return None
    parts = [MESSAGE_PREFIX]
    reset = format_reset_time(_header(headers, RESET_HEADER))
    if reset:
        parts.append(f"The limit resets at {reset}.")
    parts.append(MESSAGE_SUFFIX)
    return " ".join(parts)


__all__ = ["detect_rate_limit", "is_rate_limited", "format_reset_time"]
