"""
Fleet Core Permissions — Roles and Permission Tokens
=====================================================
Both enumerations are closed. An unknown value is a programming error and
fails at construction (Role("root") raises ValueError).
"""

from __future__ import annotations

from enum import Enum


class Role(Enum):
    """Roles assigned to identities by the authentication collaborator."""
    COMPANY_SUPER_ADMIN = "company-super-admin"
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    OPERATOR = "operator"
    AUDITOR = "auditor"


class Permission(Enum):
    """Fine-grained capability tokens (resource:action)."""

    # ── Fuel events ───────────────────────────────────────────
    EVENTS_CREATE = "events:create"
    EVENTS_EDIT = "events:edit"
    EVENTS_DELETE = "events:delete"
    EVENTS_VALIDATE = "events:validate"
    EVENTS_VIEW = "events:view"

    # ── Fleet resources ───────────────────────────────────────
    VEHICLES_MANAGE = "vehicles:manage"
    DRIVERS_MANAGE = "drivers:manage"
    DISPENSERS_MANAGE = "dispensers:manage"
    TANKS_MANAGE = "tanks:manage"
    RESOURCES_MANAGE = "resources:manage"
    COST_CENTERS_MANAGE = "cost-centers:manage"

    # ── Organization ──────────────────────────────────────────
    USERS_MANAGE = "users:manage"
    UNITS_VIEW = "units:view"
    UNITS_MANAGE = "units:manage"
    COMPANIES_MANAGE = "companies:manage"

    # ── Reports / settings ────────────────────────────────────
    REPORTS_VIEW = "reports:view"
    REPORTS_EXPORT = "reports:export"
    CONFIGURATION_EDIT = "configuration:edit"


ADMIN_ROLES = frozenset({Role.COMPANY_SUPER_ADMIN, Role.ADMIN})
RESTRICTED_ROLES = frozenset({Role.SUPERVISOR, Role.OPERATOR, Role.AUDITOR})
