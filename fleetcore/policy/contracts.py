"""
Fleet Core Policy — Rule Contract
=================================
Abstract base class for fuel-event validation rules.

Every rule must:
- Be pure (no side effects, no I/O)
- Be deterministic (same event + context → same result)
- Read time only from RuleContext.now
- Declare its severity (BLOCK / WARN)

Contract validation enforced at class creation time:
- rule_id: non-empty string
- version: semantic version (X.Y.Z)
- severity: BLOCK | WARN
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fleetcore.policy.result import RuleResult, Severity
from fleetcore.policy.thresholds import ValidationThresholds

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may read besides the event itself."""

    thresholds: ValidationThresholds
    evidence_count: int
    now: datetime

    def __post_init__(self):
        if not isinstance(self.thresholds, ValidationThresholds):
            raise TypeError("thresholds must be ValidationThresholds.")
        if (
            isinstance(self.evidence_count, bool)
            or not isinstance(self.evidence_count, int)
            or self.evidence_count < 0
        ):
            raise ValueError(
                f"evidence_count must be an int >= 0, got {self.evidence_count!r}."
            )
        if not isinstance(self.now, datetime) or self.now.tzinfo is None:
            raise ValueError("now must be a timezone-aware datetime.")


class BaseRule(ABC):
    """
    Abstract base for fuel-event rules.

    Subclasses must:
    - Set rule_id (unique identifier, e.g. 'FUEL-001')
    - Set version (semver string, e.g. '1.0.0')
    - Set severity (BLOCK | WARN)
    - Implement evaluate()
    """

    rule_id: str = ""
    version: str = ""
    domain: str = "fuel"
    severity: str = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if getattr(cls, "__abstractmethods__", None):
            return

        if not cls.rule_id or not isinstance(cls.rule_id, str):
            raise TypeError(
                f"Rule class {cls.__name__} must declare "
                f"rule_id as non-empty string."
            )

        if not cls.version or not SEMVER_PATTERN.match(str(cls.version)):
            raise TypeError(
                f"Rule class {cls.__name__} version '{cls.version}' "
                f"must be semantic version format X.Y.Z."
            )

        if cls.severity not in Severity.ALL:
            raise TypeError(
                f"Rule class {cls.__name__} severity "
                f"'{cls.severity}' must be one of: {sorted(Severity.ALL)}"
            )

    @abstractmethod
    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        """
        Evaluate this rule against a fuel event.

        Args:
            event:   Object exposing liters and occurred_at.
            context: Thresholds, evidence count and evaluation time.

        Returns:
            RuleResult — passed=True (ok) or passed=False (issue).
        """
        ...

    def pass_rule(self, message: str = "Rule passed.") -> RuleResult:
        return RuleResult(
            rule_id=self.rule_id,
            passed=True,
            severity=self.severity,
            message=message,
        )

    def fail(self, message: str, metadata: dict = None) -> RuleResult:
        return RuleResult(
            rule_id=self.rule_id,
            passed=False,
            severity=self.severity,
            message=message,
            metadata=metadata or {},
        )
