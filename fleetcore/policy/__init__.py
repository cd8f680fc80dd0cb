"""
Fleet Core Policy — Public API
==============================
Fuel-event validation: thresholds, rules, evaluator and results.
"""

from fleetcore.policy.exceptions import PolicyError, ThresholdConfigError
from fleetcore.policy.result import (
    ALL_CHECKS_PASSED,
    RuleResult,
    Severity,
    ValidationResult,
    summarize_validation,
)
from fleetcore.policy.thresholds import (
    DEFAULT_THRESHOLDS,
    InMemoryThresholdSource,
    ThresholdSource,
    ValidationThresholds,
    default_thresholds,
    resolve_thresholds,
)
from fleetcore.policy.contracts import BaseRule, RuleContext
from fleetcore.policy.rules import FUEL_EVENT_RULES
from fleetcore.policy.evaluator import evaluate

__all__ = [
    "PolicyError",
    "ThresholdConfigError",
    "ALL_CHECKS_PASSED",
    "RuleResult",
    "Severity",
    "ValidationResult",
    "summarize_validation",
    "DEFAULT_THRESHOLDS",
    "InMemoryThresholdSource",
    "ThresholdSource",
    "ValidationThresholds",
    "default_thresholds",
    "resolve_thresholds",
    "BaseRule",
    "RuleContext",
    "FUEL_EVENT_RULES",
    "evaluate",
]
