"""Bounded fixed-interval retry for remote operations."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from privnet.clients.base import NetworkClientError
from privnet.config import (
    CAPABILITY_ENABLE_INTERVAL_SECONDS,
    CAPABILITY_ENABLE_MAX_ATTEMPTS,
)

T = TypeVar("T")
Sleeper = Callable[[float], None]

logger = logging.getLogger(__name__)


def call_with_retry(
    operation: Callable[[], T],
    *,
    max_attempts: int = CAPABILITY_ENABLE_MAX_ATTEMPTS,
    interval_seconds: float = CAPABILITY_ENABLE_INTERVAL_SECONDS,
    sleep: Sleeper = time.sleep,
    description: str = "remote operation",
) -> T:
    """Call ``operation`` until it succeeds or ``max_attempts`` calls have failed.

    Conflict failures mean the remote side already holds the requested state,
    so they are raised on the first attempt for the caller to absorb. Every
    other ``NetworkClientError`` is retried after ``interval_seconds``; the
    last one is raised once the attempt budget is spent.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1 (received {max_attempts})")

    attempt = 1
    while True:
        try:
            return operation()
        except NetworkClientError as exc:
            if exc.is_conflict:
                raise
            if attempt >= max_attempts:
                logger.warning(
                    "%s failed after %d attempts: %s", description, attempt, exc
                )
                raise
            logger.warning(
                "%s failed (attempt %d/%d, kind=%s): %s; retrying in %.1fs",
                description,
                attempt,
                max_attempts,
                exc.kind.value,
                exc,
                interval_seconds,
            )
        sleep(interval_seconds)
        attempt += 1
