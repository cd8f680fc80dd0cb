"""
Fleet Core Context — Scope Resolver
====================================
Pure, deterministic derivation of a Scope from:

    identity         role + company + assigned business units
    unit_catalog     business units fetched for the identity's company
    previous_active  last selected unit (possibly restored from storage)

Resolution:
1. No identity or no company            → Scope.EMPTY
2. Entitlement (classify_access)        → scoped units
3. Active unit                          → first matching ACTIVE_UNIT_RULES entry
4. Scope(visible_units, active_unit)

The previous active unit is only ever used as an id. The returned unit is
always the catalog element, so stale names/status restored from storage
never leak into the Scope.

This module does NOT:
- Fetch catalogs
- Write to stores
- Raise for valid-shaped input
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from fleetcore.context.business_unit import BusinessUnitSummary
from fleetcore.context.scope import Scope
from fleetcore.identity.models import Identity
from fleetcore.permissions.constants import Role

logger = logging.getLogger("fleet.scope")


# ══════════════════════════════════════════════════════════════
# ENTITLEMENT
# ══════════════════════════════════════════════════════════════

class AccessKind(Enum):
    NONE = "NONE"
    FULL_ADMIN = "FULL_ADMIN"
    UNIT_BOUND_ADMIN = "UNIT_BOUND_ADMIN"
    RESTRICTED = "RESTRICTED"


def classify_access(identity: Optional[Identity]) -> AccessKind:
    """
    Which resolution branch an identity takes.

    Super-admins always browse the whole company. An admin is unit-bound
    only when exactly one unit is assigned; zero or several assignments
    leave the admin a full admin.
    """
    if identity is None or identity.company_id is None:
        return AccessKind.NONE
    if identity.role == Role.COMPANY_SUPER_ADMIN:
        return AccessKind.FULL_ADMIN
    if identity.role == Role.ADMIN:
        if len(identity.assigned_unit_ids) == 1:
            return AccessKind.UNIT_BOUND_ADMIN
        return AccessKind.FULL_ADMIN
    return AccessKind.RESTRICTED


def _dedupe(
    catalog: Optional[Iterable[BusinessUnitSummary]],
) -> tuple[BusinessUnitSummary, ...]:
    seen: set[int] = set()
    units = []
    for unit in catalog or ():
        if unit.unit_id in seen:
            continue
        seen.add(unit.unit_id)
        units.append(unit)
    return tuple(units)


def entitled_units(
    identity: Optional[Identity],
    unit_catalog: Optional[Iterable[BusinessUnitSummary]],
) -> tuple[BusinessUnitSummary, ...]:
    """Catalog units the identity may see, in catalog order."""
    access = classify_access(identity)
    if access == AccessKind.NONE:
        return ()

    catalog = _dedupe(unit_catalog)
    if access == AccessKind.FULL_ADMIN:
        return catalog

    allowed = set(identity.assigned_unit_ids)
    return tuple(unit for unit in catalog if unit.unit_id in allowed)


# ══════════════════════════════════════════════════════════════
# ACTIVE UNIT RULE TABLE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ResolutionContext:
    identity: Identity
    access: AccessKind
    scoped_units: tuple[BusinessUnitSummary, ...]
    previous_active: Optional[BusinessUnitSummary]

    def visible(self, unit_id: int) -> Optional[BusinessUnitSummary]:
        for unit in self.scoped_units:
            if unit.unit_id == unit_id:
                return unit
        return None

    @property
    def previous_visible(self) -> Optional[BusinessUnitSummary]:
        if self.previous_active is None:
            return None
        return self.visible(self.previous_active.unit_id)

    @property
    def assigned(self) -> tuple[int, ...]:
        return self.identity.assigned_unit_ids


@dataclass(frozen=True)
class ActiveUnitRule:
    name: str
    applies: Callable[[ResolutionContext], bool]
    select: Callable[[ResolutionContext], Optional[BusinessUnitSummary]]


def _first_assigned_visible(ctx: ResolutionContext) -> Optional[BusinessUnitSummary]:
    for unit_id in ctx.assigned:
        unit = ctx.visible(unit_id)
        if unit is not None:
            return unit
    return None


def _fallback(ctx: ResolutionContext) -> Optional[BusinessUnitSummary]:
    if len(ctx.scoped_units) == 1:
        return ctx.scoped_units[0]
    return ctx.previous_visible


ACTIVE_UNIT_RULES: tuple[ActiveUnitRule, ...] = (
    ActiveUnitRule(
        name="unit-bound-admin",
        applies=lambda ctx: ctx.access == AccessKind.UNIT_BOUND_ADMIN,
        select=lambda ctx: ctx.visible(ctx.assigned[0]),
    ),
    ActiveUnitRule(
        name="full-admin",
        applies=lambda ctx: ctx.access == AccessKind.FULL_ADMIN,
        select=lambda ctx: ctx.previous_visible,
    ),
    ActiveUnitRule(
        name="single-assignment",
        applies=lambda ctx: (
            ctx.access == AccessKind.RESTRICTED
            and len(ctx.assigned) == 1
            and ctx.visible(ctx.assigned[0]) is not None
        ),
        select=lambda ctx: ctx.visible(ctx.assigned[0]),
    ),
    ActiveUnitRule(
        name="restore-assigned",
        applies=lambda ctx: (
            ctx.access == AccessKind.RESTRICTED
            and ctx.previous_visible is not None
            and ctx.previous_visible.unit_id in ctx.assigned
        ),
        select=lambda ctx: ctx.previous_visible,
    ),
    # Restricted roles never sit on "all units".
    ActiveUnitRule(
        name="first-assigned",
        applies=lambda ctx: (
            ctx.access == AccessKind.RESTRICTED and len(ctx.scoped_units) > 1
        ),
        select=_first_assigned_visible,
    ),
    ActiveUnitRule(
        name="fallback",
        applies=lambda ctx: True,
        select=_fallback,
    ),
)


# ══════════════════════════════════════════════════════════════
# RESOLUTION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ScopeResolution:
    """A resolved Scope plus the rule that picked its active unit."""
    scope: Scope
    access: AccessKind
    rule: str


def explain_scope(
    identity: Optional[Identity],
    unit_catalog: Optional[Iterable[BusinessUnitSummary]],
    previous_active: Optional[BusinessUnitSummary] = None,
) -> ScopeResolution:
    access = classify_access(identity)
    if access == AccessKind.NONE:
        return ScopeResolution(scope=Scope.EMPTY, access=access, rule="no-company")

    ctx = ResolutionContext(
        identity=identity,
        access=access,
        scoped_units=entitled_units(identity, unit_catalog),
        previous_active=previous_active,
    )

    for rule in ACTIVE_UNIT_RULES:
        if rule.applies(ctx):
            active = rule.select(ctx)
            break

    scope = Scope(visible_units=ctx.scoped_units, active_unit=active)
    logger.debug(
        f"Resolved scope for '{identity.identity_id}' ({access.value}) via "
        f"'{rule.name}': {len(scope.visible_units)} visible, "
        f"active={scope.active_unit_id}"
    )
    return ScopeResolution(scope=scope, access=access, rule=rule.name)


def resolve_scope(
    identity: Optional[Identity],
    unit_catalog: Optional[Iterable[BusinessUnitSummary]],
    previous_active: Optional[BusinessUnitSummary] = None,
) -> Scope:
    """Derive the Scope for an identity. Never raises for valid-shaped input."""
    return explain_scope(identity, unit_catalog, previous_active).scope
