# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Companion card-order service.

Calling layer around the card-ordering engine. It fetches activity facts
through an ActivityFactsProvider, runs the engine and caches the result
per student until the card order expires.

Upstream failures never reach the caller. An authentication failure, a
network error or a fetch that exceeds ``fetch_timeout_seconds`` is logged
and answered with the fixed default order. Fallback orders are not
cached, so the next call retries the fetch.

Concurrent calls for the same student are independent; whichever
finishes last owns the cache entry.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from studycompanion.core.config.settings import CompanionSettings, get_settings
from studycompanion.core.ordering import compute_card_order, default_card_order
from studycompanion.models.activity import ActivityFacts
from studycompanion.models.card_order import CardOrder
from studycompanion.utils.datetime import is_expired, utc_now

logger = logging.getLogger(__name__)


class CompanionServiceError(Exception):
    """Base exception for companion service errors."""

    pass


class FetchErrorCode(str, Enum):
    """Why the activity facts could not be fetched."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"


class ActivityFetchError(CompanionServiceError):
    """Raised by providers when activity facts cannot be fetched."""

    def __init__(self, code: FetchErrorCode, message: str | None = None) -> None:
        """Initialize ActivityFetchError.

        Args:
            code: Failure category.
            message: Optional detail for logs.
        """
        self.code = code
        super().__init__(message or code.value)


class ActivityFactsProvider(ABC):
    """Source of activity facts, typically an RPC client."""

    @abstractmethod
    async def get_activity_facts(self, student_id: str) -> ActivityFacts:
        """Fetch the activity snapshot for a student.

        Raises:
            ActivityFetchError: On authentication or transport failure.
        """
        ...


@dataclass(frozen=True)
class CardOrderResult:
    """Card order plus how it was obtained."""

    card_order: CardOrder
    is_fallback: bool = False
    error_code: FetchErrorCode | None = None
    error: str | None = None
    from_cache: bool = False


class CardOrderService:
    """Service that resolves card orders for students.

    Attributes:
        _provider: Activity facts source.
        _settings: Fetch timeout and cache switch.
        _clock: Returns the current UTC time.
        _cache: Last computed order per student.

    Example:
        >>> service = CardOrderService(provider)
        >>> result = await service.get_card_order("student-1")
        >>> result.card_order.order
    """

    def __init__(
        self,
        provider: ActivityFactsProvider,
        settings: CompanionSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the card order service.

        Args:
            provider: Activity facts source.
            settings: Service settings (defaults to application settings).
            clock: Time source, injectable for tests.
        """
        self._provider = provider
        self._settings = settings or get_settings().companion
        self._clock = clock
        self._cache: dict[str, CardOrder] = {}

    async def get_card_order(self, student_id: str, refresh: bool = False) -> CardOrderResult:
        """Get the card order for a student.

        Args:
            student_id: The student's ID.
            refresh: Ignore any cached order and fetch again.

        Returns:
            CardOrderResult. On fetch failure ``is_fallback`` is set and
            ``card_order`` is the default order.
        """
        now = self._clock()

        if self._settings.cache_enabled and not refresh:
            cached = self._cache.get(student_id)
            if cached is not None and not is_expired(cached.expires_at, now):
                logger.debug("Card order cache hit: student=%s", student_id)
                return CardOrderResult(card_order=cached, from_cache=True)

        try:
            facts = await asyncio.wait_for(
                self._provider.get_activity_facts(student_id),
                timeout=self._settings.fetch_timeout_seconds,
            )
        except ActivityFetchError as e:
            return self._fallback(student_id, e.code, str(e))
        except asyncio.TimeoutError:
            return self._fallback(
                student_id,
                FetchErrorCode.TIMEOUT,
                f"Activity fetch exceeded {self._settings.fetch_timeout_seconds}s",
            )
        except OSError as e:
            return self._fallback(student_id, FetchErrorCode.NETWORK_ERROR, str(e))

        card_order = compute_card_order(facts, self._clock())

        if self._settings.cache_enabled:
            self._prune_expired(now)
            self._cache[student_id] = card_order

        logger.info(
            "Card order computed: student=%s, state=%s, order=%s",
            student_id,
            card_order.context.student_state.value,
            [card.value for card in card_order.order],
        )
        return CardOrderResult(card_order=card_order)

    def invalidate(self, student_id: str | None = None) -> None:
        """Drop cached orders for one student, or for everyone."""
        if student_id is None:
            self._cache.clear()
        else:
            self._cache.pop(student_id, None)

    def _prune_expired(self, now: datetime) -> None:
        expired = [
            student_id
            for student_id, order in self._cache.items()
            if is_expired(order.expires_at, now)
        ]
        for student_id in expired:
            del self._cache[student_id]

    def _fallback(
        self,
        student_id: str,
        code: FetchErrorCode,
        error: str,
    ) -> CardOrderResult:
        logger.warning(
            "Activity fetch failed, using default card order: student=%s, code=%s, error=%s",
            student_id,
            code.value,
            error,
        )
        return CardOrderResult(
            card_order=default_card_order(self._clock()),
            is_fallback=True,
            error_code=code,
            error=error,
        )
