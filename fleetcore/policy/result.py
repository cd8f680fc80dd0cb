"""
Fleet Core Policy — Result Models
=================================
RuleResult: single rule evaluation outcome.
ValidationResult: ordered blocking errors and advisory warnings.

    BLOCK → error, the event cannot be validated
    WARN  → warning, the event can still be validated

These are pure data structures. No side effects. No persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ══════════════════════════════════════════════════════════════
# SEVERITY LEVELS
# ══════════════════════════════════════════════════════════════

class Severity:
    """Issue classification."""
    BLOCK = "BLOCK"
    WARN = "WARN"

    ALL = frozenset({"BLOCK", "WARN"})


# ══════════════════════════════════════════════════════════════
# RULE RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RuleResult:
    """
    Outcome of a single rule evaluation.

    If passed=False, severity decides whether the message is an error
    or a warning.
    """

    rule_id: str
    passed: bool
    severity: str
    message: str
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        if not self.rule_id or not isinstance(self.rule_id, str):
            raise ValueError("rule_id must be a non-empty string.")

        if not isinstance(self.passed, bool):
            raise ValueError("passed must be a bool.")

        if self.severity not in Severity.ALL:
            raise ValueError(
                f"severity '{self.severity}' not valid. "
                f"Must be one of: {sorted(Severity.ALL)}"
            )

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")


# ══════════════════════════════════════════════════════════════
# VALIDATION RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ValidationResult:
    """
    Classified issues for one fuel event.

    Fields:
        valid:    True iff errors is empty.
        errors:   Blocking messages, in rule order.
        warnings: Advisory messages, in rule order.
        results:  Failed RuleResults, for audit (not part of equality).
    """

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    results: tuple[RuleResult, ...] = field(default=(), compare=False)

    def __post_init__(self):
        for name in ("errors", "warnings", "results"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

        if self.valid != (len(self.errors) == 0):
            raise ValueError("valid must be True exactly when errors is empty.")

    @classmethod
    def from_rule_results(cls, results) -> "ValidationResult":
        failed = tuple(r for r in results if not r.passed)
        errors = tuple(r.message for r in failed if r.severity == Severity.BLOCK)
        warnings = tuple(r.message for r in failed if r.severity == Severity.WARN)
        return cls(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            results=failed,
        )

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def failed_rule_ids(self) -> tuple[str, ...]:
        return tuple(r.rule_id for r in self.results)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


ALL_CHECKS_PASSED = "All checks passed"


def summarize_validation(result: ValidationResult) -> str:
    """One-line summary: "Errors: a, b | Warnings: c"."""
    parts = []
    if result.errors:
        parts.append(f"Errors: {', '.join(result.errors)}")
    if result.warnings:
        parts.append(f"Warnings: {', '.join(result.warnings)}")
    return " | ".join(parts) if parts else ALL_CHECKS_PASSED
