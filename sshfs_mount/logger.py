"""Module containing utilities for logging, along with a standard logger."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional, Tuple


class _ContextFilter(logging.Filter):
    """Render the structured context of a record so that the formatter can show it."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = getattr(record, "context", None)

        if context:
            fields = ", ".join(f"{k}={v}" for k, v in context.items())
            record.context_text = f" ({fields})"
        else:
            record.context_text = ""

        return True


class ContextAdapter(logging.LoggerAdapter):
    """
    Logger that attaches structured fields to every record it emits.

    The fields end up in record.context as a dict, for example:

        log = get_logger("sshfs mount").bind(target="/mnt/foo")
        log.debug("creating mount target")  # record.context["target"] == "/mnt/foo"
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra

        return msg, kwargs

    def bind(self, **fields: Any) -> ContextAdapter:
        """Return a logger with additional structured fields."""
        return ContextAdapter(self.logger, {**self.extra, **fields})


def _get_logger(name: Optional[str] = "sshfs_mount") -> logging.Logger:
    stderrOutput = logging.StreamHandler()
    stderrOutput.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s%(context_text)s"
    )
    stderrOutput.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.addHandler(stderrOutput)

    return logger


def get_logger(component: str, **fields: Any) -> ContextAdapter:
    """Return a logger for a component of sshfs-mount with optional extra fields."""
    return ContextAdapter(log, {"component": component, **fields})


def summarize(obj: Any, max_length: int = 255) -> str:
    """Return a stringified representation of the object up to the given length."""
    stringified_obj = str(obj)

    if len(stringified_obj) <= max_length:
        return stringified_obj
    else:
        return stringified_obj[: max_length - 3] + "..."


# Default logger
log = _get_logger()
