"""
Fleet Core Context — Public API
===============================
Business units, Scope and the scope resolver.
"""

from fleetcore.context.business_unit import (
    BusinessUnitSummary,
    UnitKind,
    UnitStatus,
)
from fleetcore.context.scope import (
    ALL_UNITS_LABEL,
    Scope,
    scopes_equal,
    units_equal,
)
from fleetcore.context.resolver import (
    ACTIVE_UNIT_RULES,
    AccessKind,
    ScopeResolution,
    classify_access,
    entitled_units,
    explain_scope,
    resolve_scope,
)
from fleetcore.context.filters import (
    UnitFilter,
    can_access_unit,
    can_view_all_units,
)

__all__ = [
    "BusinessUnitSummary",
    "UnitKind",
    "UnitStatus",
    "ALL_UNITS_LABEL",
    "Scope",
    "scopes_equal",
    "units_equal",
    "ACTIVE_UNIT_RULES",
    "AccessKind",
    "ScopeResolution",
    "classify_access",
    "entitled_units",
    "explain_scope",
    "resolve_scope",
    "UnitFilter",
    "can_access_unit",
    "can_view_all_units",
]
