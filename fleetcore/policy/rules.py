"""
Fleet Core Policy — Fuel Event Rules
====================================
Rules, in evaluation order:

1. FUEL-001: Non-positive load (BLOCK)
2. FUEL-002: Load above max_liters (WARN)
3. FUEL-003: Positive load below min_liters (WARN)
4. FUEL-004: Photos required but no evidence (BLOCK)
5. FUEL-005: Fewer than 2 evidence items (WARN)
6. FUEL-006: Event dated in the future (BLOCK)

FUEL-004 and FUEL-005 both fire when evidence is absent.
All rules are pure. No I/O. No clock reads.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from fleetcore.policy.contracts import BaseRule, RuleContext
from fleetcore.policy.result import RuleResult, Severity

RECOMMENDED_EVIDENCE = 2


def format_liters(value) -> str:
    return f"{value:g}"


# ══════════════════════════════════════════════════════════════
# LOAD SIZE
# ══════════════════════════════════════════════════════════════

class NonPositiveLoadBlock(BaseRule):
    rule_id = "FUEL-001"
    version = "1.0.0"
    severity = Severity.BLOCK

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        if event.liters <= 0:
            return self.fail(
                "liters must be > 0",
                metadata={"liters": event.liters},
            )
        return self.pass_rule()


class ExcessiveLoadWarn(BaseRule):
    rule_id = "FUEL-002"
    version = "1.0.0"
    severity = Severity.WARN

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        limit = context.thresholds.max_liters
        if event.liters > limit:
            return self.fail(
                f"excessive load detected (> {format_liters(limit)} L)",
                metadata={"liters": event.liters, "max_liters": limit},
            )
        return self.pass_rule()


class SmallLoadWarn(BaseRule):
    """Only positive loads; a non-positive one already fails FUEL-001."""

    rule_id = "FUEL-003"
    version = "1.0.0"
    severity = Severity.WARN

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        limit = context.thresholds.min_liters
        if 0 < event.liters < limit:
            return self.fail(
                f"unusually small load (< {format_liters(limit)} L)",
                metadata={"liters": event.liters, "min_liters": limit},
            )
        return self.pass_rule()


# ══════════════════════════════════════════════════════════════
# EVIDENCE
# ══════════════════════════════════════════════════════════════

class MissingPhotoEvidenceBlock(BaseRule):
    rule_id = "FUEL-004"
    version = "1.0.0"
    severity = Severity.BLOCK

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        if context.thresholds.require_photos and context.evidence_count == 0:
            return self.fail("missing required photographic evidence")
        return self.pass_rule()


class LowEvidenceWarn(BaseRule):
    rule_id = "FUEL-005"
    version = "1.0.0"
    severity = Severity.WARN

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        if context.evidence_count < RECOMMENDED_EVIDENCE:
            return self.fail(
                f"recommend at least {RECOMMENDED_EVIDENCE} evidence items",
                metadata={"evidence_count": context.evidence_count},
            )
        return self.pass_rule()


# ══════════════════════════════════════════════════════════════
# DATE
# ══════════════════════════════════════════════════════════════

def is_future(occurred_at, now: datetime) -> bool:
    """
    date     → compared with now's UTC calendar day
    datetime → compared with now (naive read as UTC)
    """
    now_utc = now.astimezone(timezone.utc)
    if isinstance(occurred_at, datetime):
        if occurred_at.tzinfo is None:
            occurred_at = occurred_at.replace(tzinfo=timezone.utc)
        return occurred_at > now_utc
    if isinstance(occurred_at, date):
        return occurred_at > now_utc.date()
    raise TypeError(
        f"occurred_at must be a date or datetime, got {type(occurred_at).__name__}."
    )


class FutureDateBlock(BaseRule):
    rule_id = "FUEL-006"
    version = "1.0.0"
    severity = Severity.BLOCK

    def evaluate(self, event: Any, context: RuleContext) -> RuleResult:
        if is_future(event.occurred_at, context.now):
            return self.fail(
                "date cannot be in the future",
                metadata={"occurred_at": event.occurred_at.isoformat()},
            )
        return self.pass_rule()


FUEL_EVENT_RULES: tuple[BaseRule, ...] = (
    NonPositiveLoadBlock(),
    ExcessiveLoadWarn(),
    SmallLoadWarn(),
    MissingPhotoEvidenceBlock(),
    LowEvidenceWarn(),
    FutureDateBlock(),
)
