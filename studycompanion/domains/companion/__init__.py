# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Companion domain: card-order resolution for the dashboard."""

from studycompanion.domains.companion.service import (
    ActivityFactsProvider,
    ActivityFetchError,
    CardOrderResult,
    CardOrderService,
    CompanionServiceError,
    FetchErrorCode,
)

__all__ = [
    "ActivityFactsProvider",
    "ActivityFetchError",
    "CardOrderResult",
    "CardOrderService",
    "CompanionServiceError",
    "FetchErrorCode",
]
