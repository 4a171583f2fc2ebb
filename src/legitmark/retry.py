"""Retry avec backoff exponentiel pour opérations asynchrones."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, TypeVar

from legitmark.errors import LegitmarkError
from legitmark.utils.aio import maybe_await

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_S = 1.0
RETRY_BACKOFF_MULTIPLIER = 2

RetryPredicate = Callable[[BaseException], bool]
RetryCallback = Callable[[BaseException, int], Any]  # error, attempt (sync ou async)


def is_retryable_error(error: BaseException) -> bool:
    """Prédicat par défaut : seules les LegitmarkError marquées relançables sont retentées."""
    return isinstance(error, LegitmarkError) and error.retryable


@dataclass(frozen=True)
class RetryOptions:
    """Configuration de with_retry."""

    attempts: int = DEFAULT_RETRY_ATTEMPTS
    """Nombre maximal de tentatives (>= 1)."""
    delay_s: float = DEFAULT_RETRY_DELAY_S
    """Délai initial entre deux tentatives (secondes)."""
    exponential_backoff: bool = True
    """Double le délai à chaque nouvelle tentative."""
    should_retry: RetryPredicate = is_retryable_error
    on_retry: RetryCallback | None = None

    def wait_for(self, attempt: int) -> float:
        """Délai à attendre après l'échec de la tentative `attempt` (1-based)."""
        base = max(0.0, float(self.delay_s))
        if not self.exponential_backoff:
            return base
        return base * (RETRY_BACKOFF_MULTIPLIER ** (attempt - 1))


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    options: RetryOptions | None = None,
    **overrides: Any,
) -> T:
    """
    Exécute `fn` et la relance en cas d'échec relançable.

    Args:
        fn: fabrique de coroutine, rappelée à chaque tentative.
        options: configuration (RetryOptions) ; les mots-clés surchargent ses champs.

    Returns:
        Résultat de la première tentative réussie.

    Raises:
        La dernière erreur, inchangée, si les tentatives sont épuisées ou si
        `should_retry` la refuse.
    """
    opts = options or RetryOptions()
    if overrides:
        opts = replace(opts, **overrides)
    attempts = max(1, int(opts.attempts))

    attempt = 1
    while True:
        try:
            return await fn()
        except Exception as exc:
            if attempt >= attempts or not opts.should_retry(exc):
                raise
            if opts.on_retry is not None:
                await maybe_await(opts.on_retry(exc, attempt))
            wait_s = opts.wait_for(attempt)
            logger.warning(
                "Attempt %s/%s failed (%s), retrying in %.2fs", attempt, attempts, exc, wait_s
            )
            if wait_s > 0:
                await asyncio.sleep(wait_s)
            attempt += 1
