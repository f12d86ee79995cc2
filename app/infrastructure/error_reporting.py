"""Structured reporting of failures raised while relaying records."""

from __future__ import annotations

import logging
from collections import Counter

from app.domain.entities import DispatchResult

logger = logging.getLogger(__name__)

TOKEN_INVALIDATED = "token_invalidated"


class ErrorReporter:
    """Log dispatch failures with context and count them by category."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def report_failure(self, context: str, result: DispatchResult) -> None:
        category = result.reason.split(":", 1)[0]
        self.counts[category] += 1
        level = logging.INFO if category == TOKEN_INVALIDATED else logging.ERROR
        logger.log(
            level,
            "Push for %s not delivered: %s",
            context,
            result.reason,
            extra={"record_path": result.record_path, "reason": result.reason},
        )

    def report_exception(self, context: str, exc: BaseException) -> None:
        self.counts[exc.__class__.__name__] += 1
        logger.error(
            "Unhandled error while %s",
            context,
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={"context": context},
        )


__all__ = ["ErrorReporter"]
