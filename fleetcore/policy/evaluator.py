"""
Fleet Core Policy — Evaluator
=============================
Pure, deterministic, fail-safe fuel-event validation.

    evaluate(event, thresholds, evidence_count, now) → ValidationResult

Guarantees:
- Rules run in their declared order; all of them run
- Same inputs → equal result, messages in the same order
- Time is read only from `now` (default clock when omitted)
- Never raises for a rule failure: a raising rule becomes a BLOCK
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from fleetcore.policy.contracts import BaseRule, RuleContext
from fleetcore.policy.result import RuleResult, Severity, ValidationResult
from fleetcore.policy.rules import FUEL_EVENT_RULES
from fleetcore.policy.thresholds import ValidationThresholds, default_thresholds
from fleetcore.time.clock import now_utc

logger = logging.getLogger("fleet.policy")


def evaluate(
    event: Any,
    thresholds: Optional[ValidationThresholds] = None,
    evidence_count: int = 0,
    now: Optional[datetime] = None,
    rules: Iterable[BaseRule] = FUEL_EVENT_RULES,
) -> ValidationResult:
    """
    Classify the issues of a fuel event.

    Args:
        event:          Object exposing liters and occurred_at.
        thresholds:     Tenant limits. Defaults when None.
        evidence_count: Evidence items attached to the event (>= 0).
        now:            Evaluation time. System clock when None.
        rules:          Ordered rule set.

    Returns:
        ValidationResult — valid iff no BLOCK rule failed.
    """
    context = RuleContext(
        thresholds=thresholds if thresholds is not None else default_thresholds(),
        evidence_count=evidence_count,
        now=now if now is not None else now_utc(),
    )

    results = [_execute_rule_safe(rule, event, context) for rule in rules]
    result = ValidationResult.from_rule_results(results)

    logger.debug(
        f"Evaluated event {getattr(event, 'event_id', '?')}: "
        f"valid={result.valid}, failed={list(result.failed_rule_ids)}"
    )
    return result


def _execute_rule_safe(
    rule: BaseRule, event: Any, context: RuleContext
) -> RuleResult:
    """Run one rule; any exception or bad return becomes a BLOCK."""
    try:
        result = rule.evaluate(event, context)
        if not isinstance(result, RuleResult):
            logger.error(
                f"Rule {rule.rule_id} returned {type(result).__name__}, "
                f"expected RuleResult"
            )
            return RuleResult(
                rule_id=rule.rule_id,
                passed=False,
                severity=Severity.BLOCK,
                message=f"rule {rule.rule_id} could not be evaluated",
                metadata={
                    "error_type": "INVALID_RETURN_TYPE",
                    "returned_type": type(result).__name__,
                },
            )
        return result
    except Exception as exc:
        logger.error(
            f"Rule {rule.rule_id} v{rule.version} failed: "
            f"{type(exc).__name__}: {exc}",
            exc_info=True,
        )
        return RuleResult(
            rule_id=rule.rule_id,
            passed=False,
            severity=Severity.BLOCK,
            message=f"rule {rule.rule_id} could not be evaluated",
            metadata={
                "error_type": type(exc).__name__,
                "exception": str(exc),
                "rule_version": rule.version,
            },
        )
