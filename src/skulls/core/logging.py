# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with credential redaction.

Records about one skill carry ``extra={"skill": ..., "source": ...}``.
Both formatters render those fields next to the message; source strings
are redacted like the message itself since clone URLs may embed tokens.
"""

import json
import logging
import re
import sys
from typing import Any

REDACT_PATTERNS = [
    re.compile(r"(github_pat_[A-Za-z0-9]{4})[A-Za-z0-9_]{20,}"),
    re.compile(r"(gh[pousr]_[A-Za-z0-9]{4})[A-Za-z0-9_]{20,}"),
    re.compile(r"(glpat-[A-Za-z0-9\-_]{4})[A-Za-z0-9\-_]{10,}"),
    re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]{4})[a-zA-Z0-9\-._~+/]*"),
    re.compile(r"(https?://[^:/\s]+:)[^@\s]+(@)"),
]

CONTEXT_FIELDS = ("skill", "source")


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        if pattern.groups == 2:
            text = pattern.sub(r"\1[REDACTED]\2", text)
        else:
            text = pattern.sub(r"\1[REDACTED]", text)
    return text


def _context(record: logging.LogRecord) -> dict[str, str]:
    context: dict[str, str] = {}
    for field in CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value:
            context[field] = redact_sensitive(str(value))
    return context


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
            **_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_sensitive(str(record.exc_info[1]))
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    """Plain lines with a trailing ``[skill=... source=...]`` when present."""

    def format(self, record: logging.LogRecord) -> str:
        msg = redact_sensitive(super().format(record))
        context = _context(record)
        if context:
            msg += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return msg


def setup_logging(level: str = "WARNING", fmt: str = "text") -> None:
    """Attach one stderr handler to the ``skulls`` logger.

    The CLI keeps WARNING by default so progress stays on the rich console;
    ``--verbose`` lowers it to INFO.
    """
    root = logging.getLogger("skulls")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)
