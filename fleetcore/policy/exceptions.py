"""
Fleet Core Policy — Exceptions
==============================
Configuration errors only. Validation findings are data and flow
through RuleResult → ValidationResult.
"""

from __future__ import annotations


class PolicyError(Exception):
    """Base error for validation policy operations."""
    pass


class ThresholdConfigError(PolicyError):
    """FLEET_VALIDATION_DEFAULTS (or a threshold payload) is invalid."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid validation thresholds from {source}: {detail}")
