"""
Fleet Core Policy — Validation Thresholds
=========================================
Per-tenant limits that parameterize the fuel-event rules.

Doctrine: limits are tenant configuration, never hardcoded in rules.
Resolution order:
    1. ThresholdSource.get_thresholds(company_id)
    2. settings.FLEET_VALIDATION_DEFAULTS (when Django is configured)
    3. DEFAULT_THRESHOLDS {max 200 L, min 5 L, photos required}

A failing source never fails validation: it logs and falls back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Protocol

from fleetcore.policy.exceptions import ThresholdConfigError

logger = logging.getLogger("fleet.policy")

SETTINGS_NAME = "FLEET_VALIDATION_DEFAULTS"


@dataclass(frozen=True)
class ValidationThresholds:
    """
    Limits applied by FUEL-002/003/004.

    Fields:
        max_liters:     Loads above this are flagged as excessive.
        min_liters:     Positive loads below this are flagged as small.
        require_photos: Zero evidence items blocks validation.
    """

    max_liters: float = 200
    min_liters: float = 5
    require_photos: bool = True

    def __post_init__(self):
        for name in ("max_liters", "min_liters"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ValueError(f"{name} must be a number, got {value!r}.")
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}.")

        if self.min_liters > self.max_liters:
            raise ValueError(
                f"min_liters ({self.min_liters}) cannot exceed "
                f"max_liters ({self.max_liters})."
            )

        if not isinstance(self.require_photos, bool):
            raise ValueError("require_photos must be a bool.")

    def to_dict(self) -> dict:
        return {
            "max_liters": self.max_liters,
            "min_liters": self.min_liters,
            "require_photos": self.require_photos,
        }

    @classmethod
    def from_dict(cls, data: dict, *, base: Optional["ValidationThresholds"] = None):
        """Build from a partial dict; missing keys come from base."""
        base = base or DEFAULT_THRESHOLDS
        unknown = set(data) - set(base.to_dict())
        if unknown:
            raise ValueError(f"Unknown threshold keys: {sorted(unknown)}")
        merged: dict[str, Any] = {**base.to_dict(), **data}
        return cls(**merged)


DEFAULT_THRESHOLDS = ValidationThresholds()


def default_thresholds() -> ValidationThresholds:
    """Defaults, overridden by settings.FLEET_VALIDATION_DEFAULTS if set."""
    from django.conf import settings

    if not settings.configured:
        return DEFAULT_THRESHOLDS

    overrides = getattr(settings, SETTINGS_NAME, None)
    if not overrides:
        return DEFAULT_THRESHOLDS
    if not isinstance(overrides, dict):
        raise ThresholdConfigError(
            f"settings.{SETTINGS_NAME}", "expected a dict"
        )

    try:
        return ValidationThresholds.from_dict(overrides)
    except (TypeError, ValueError) as exc:
        raise ThresholdConfigError(f"settings.{SETTINGS_NAME}", str(exc)) from exc


# ══════════════════════════════════════════════════════════════
# THRESHOLD SOURCE PROTOCOL
# ══════════════════════════════════════════════════════════════

class ThresholdSource(Protocol):
    """
    Tenant configuration collaborator.

    Returns None when the tenant has no explicit configuration.
    """

    def get_thresholds(self, company_id: int) -> Optional[ValidationThresholds]:
        ...  # pragma: no cover


class InMemoryThresholdSource:
    """Simple in-memory threshold source for testing and bootstrap."""

    def __init__(self) -> None:
        self._by_company: dict[int, ValidationThresholds] = {}

    def set_thresholds(
        self, company_id: int, thresholds: ValidationThresholds
    ) -> None:
        if not isinstance(thresholds, ValidationThresholds):
            raise TypeError("thresholds must be ValidationThresholds.")
        self._by_company[company_id] = thresholds

    def get_thresholds(self, company_id: int) -> Optional[ValidationThresholds]:
        return self._by_company.get(company_id)


def resolve_thresholds(
    source: Optional[ThresholdSource],
    company_id: Optional[int],
) -> ValidationThresholds:
    """Tenant thresholds, or the defaults when unavailable."""
    if source is None or company_id is None:
        return default_thresholds()

    try:
        found = source.get_thresholds(company_id)
    except Exception as exc:
        logger.warning(
            f"Threshold source failed for company {company_id}; "
            f"using defaults: {exc}",
            exc_info=True,
        )
        return default_thresholds()

    if found is None:
        logger.debug(f"No thresholds configured for company {company_id}")
        return default_thresholds()

    if not isinstance(found, ValidationThresholds):
        logger.warning(
            f"Threshold source returned {type(found).__name__} for company "
            f"{company_id}; using defaults"
        )
        return default_thresholds()

    return found
