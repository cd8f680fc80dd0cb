"""
Fleet Core Identity — Public API
================================
"""

from fleetcore.identity.models import (
    PATCHABLE_FIELDS,
    Explicit,
    Identity,
    PermissionSource,
    RoleDerived,
)

__all__ = [
    "Identity",
    "PermissionSource",
    "RoleDerived",
    "Explicit",
    "PATCHABLE_FIELDS",
]
