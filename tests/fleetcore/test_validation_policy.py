"""
Tests for fleetcore.policy — fuel-event validation rules and evaluator.
"""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from fleetcore.lifecycle import FuelEvent
from fleetcore.policy import (
    ALL_CHECKS_PASSED,
    BaseRule,
    FUEL_EVENT_RULES,
    RuleResult,
    Severity,
    ValidationResult,
    ValidationThresholds,
    evaluate,
    summarize_validation,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()
DEFAULTS = ValidationThresholds()


def _event(liters, occurred_at=TODAY):
    return FuelEvent(event_id=1, liters=liters, occurred_at=occurred_at)


# ── Scenarios ────────────────────────────────────────────────

def test_zero_liters_without_evidence():
    result = evaluate(_event(0), DEFAULTS, evidence_count=0, now=NOW)
    assert result.errors == (
        "liters must be > 0",
        "missing required photographic evidence",
    )
    assert result.warnings == ("recommend at least 2 evidence items",)
    assert result.valid is False


def test_normal_load_passes_cleanly():
    thresholds = ValidationThresholds(max_liters=200, min_liters=5)
    result = evaluate(_event(50), thresholds, evidence_count=2, now=NOW)
    assert result == ValidationResult(valid=True)
    assert summarize_validation(result) == ALL_CHECKS_PASSED


def test_excessive_load_is_only_a_warning():
    result = evaluate(_event(220), DEFAULTS, evidence_count=3, now=NOW)
    assert result.valid
    assert result.errors == ()
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("excessive load detected")
    assert "200" in result.warnings[0]


# ── Individual rules ─────────────────────────────────────────

def test_small_load_warning_uses_threshold():
    thresholds = ValidationThresholds(min_liters=7.5)
    result = evaluate(_event(3), thresholds, evidence_count=2, now=NOW)
    assert result.valid
    assert result.warnings == ("unusually small load (< 7.5 L)",)


def test_negative_load_gets_error_but_no_small_load_warning():
    result = evaluate(_event(-4), DEFAULTS, evidence_count=2, now=NOW)
    assert result.errors == ("liters must be > 0",)
    assert result.warnings == ()


def test_photos_not_required():
    thresholds = ValidationThresholds(require_photos=False)
    result = evaluate(_event(40), thresholds, evidence_count=0, now=NOW)
    assert result.valid
    assert result.warnings == ("recommend at least 2 evidence items",)


def test_single_evidence_item_warns():
    result = evaluate(_event(40), DEFAULTS, evidence_count=1, now=NOW)
    assert result.valid
    assert result.warnings == ("recommend at least 2 evidence items",)


class TestFutureDate:
    def test_tomorrow_is_blocked(self):
        result = evaluate(_event(40, TODAY + timedelta(days=1)), DEFAULTS, 2, NOW)
        assert result.errors == ("date cannot be in the future",)

    def test_today_is_allowed(self):
        assert evaluate(_event(40, TODAY), DEFAULTS, 2, NOW).valid

    def test_later_today_datetime_is_blocked(self):
        later = NOW + timedelta(hours=2)
        result = evaluate(_event(40, later), DEFAULTS, 2, NOW)
        assert result.errors == ("date cannot be in the future",)

    def test_naive_datetime_is_read_as_utc(self):
        earlier = datetime(2026, 3, 10, 11, 0)
        assert evaluate(_event(40, earlier), DEFAULTS, 2, NOW).valid

    def test_system_clock_is_used_when_now_is_omitted(self):
        past = date(2020, 1, 1)
        assert evaluate(_event(40, past), DEFAULTS, 2).valid


def test_all_rules_report_in_order():
    thresholds = ValidationThresholds(max_liters=10, min_liters=5)
    result = evaluate(_event(0, TODAY + timedelta(days=3)), thresholds, 0, NOW)
    assert result.failed_rule_ids == ("FUEL-001", "FUEL-004", "FUEL-005", "FUEL-006")
    assert summarize_validation(result) == (
        "Errors: liters must be > 0, missing required photographic evidence, "
        "date cannot be in the future | Warnings: recommend at least 2 evidence items"
    )


def test_evaluation_is_deterministic():
    event = _event(250, TODAY)
    first = evaluate(event, DEFAULTS, 1, NOW)
    second = evaluate(event, DEFAULTS, 1, NOW)
    assert first == second
    assert first.warnings == second.warnings


def test_rule_ids_are_unique_and_ordered():
    ids = [rule.rule_id for rule in FUEL_EVENT_RULES]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_negative_evidence_count_is_rejected():
    with pytest.raises(ValueError):
        evaluate(_event(40), DEFAULTS, -1, NOW)


# ── Fail-safe execution ──────────────────────────────────────

class ExplodingRule(BaseRule):
    rule_id = "TEST-001"
    version = "1.0.0"
    severity = Severity.WARN

    def evaluate(self, event, context):
        raise RuntimeError("broken rule")


class WrongReturnRule(BaseRule):
    rule_id = "TEST-002"
    version = "1.0.0"
    severity = Severity.WARN

    def evaluate(self, event, context):
        return "ok"


def test_raising_rule_becomes_blocking_error(caplog):
    with caplog.at_level(logging.ERROR, logger="fleet.policy"):
        result = evaluate(_event(40), DEFAULTS, 2, NOW, rules=(ExplodingRule(),))
    assert not result.valid
    assert result.errors == ("rule TEST-001 could not be evaluated",)
    assert result.results[0].metadata["error_type"] == "RuntimeError"
    assert "TEST-001" in caplog.text


def test_bad_return_becomes_blocking_error():
    result = evaluate(_event(40), DEFAULTS, 2, NOW, rules=(WrongReturnRule(),))
    assert not result.valid
    assert result.results[0].metadata["error_type"] == "INVALID_RETURN_TYPE"


def test_rule_contract_is_enforced_at_class_creation():
    with pytest.raises(TypeError, match="semantic version"):
        class BadVersion(BaseRule):
            rule_id = "TEST-003"
            version = "one"
            severity = Severity.BLOCK

            def evaluate(self, event, context):
                return self.pass_rule()

    with pytest.raises(TypeError, match="severity"):
        class BadSeverity(BaseRule):
            rule_id = "TEST-004"
            version = "1.0.0"
            severity = "ESCALATE"

            def evaluate(self, event, context):
                return self.pass_rule()


# ── Result model ─────────────────────────────────────────────

def test_valid_flag_must_match_errors():
    with pytest.raises(ValueError):
        ValidationResult(valid=True, errors=("x",))
    with pytest.raises(ValueError):
        ValidationResult(valid=False)


def test_rule_result_requires_message():
    with pytest.raises(ValueError):
        RuleResult(rule_id="FUEL-001", passed=False, severity=Severity.BLOCK, message="")


def test_summary_with_warnings_only():
    result = ValidationResult(valid=True, warnings=("a", "b"))
    assert summarize_validation(result) == "Warnings: a, b"


def test_to_dict():
    result = ValidationResult(valid=False, errors=("e",), warnings=("w",))
    assert result.to_dict() == {"valid": False, "errors": ["e"], "warnings": ["w"]}
