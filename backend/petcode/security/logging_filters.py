"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|(?:access_token|id_token)\"\s*:\s*\"[^\"]+\"|eyJ[\w-]+\.[\w-]+\.[\w-]+)",
    re.IGNORECASE,
)


def _scrub(value: object) -> object:
    if isinstance(value, str):
        return _SENSITIVE_PATTERN.sub("**REDACTED**", value)
    return value


class SensitiveFilter(logging.Filter):
    """Replace bearer and identity tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_scrub(arg) for arg in record.args)
        return True


__all__ = ["SensitiveFilter"]
