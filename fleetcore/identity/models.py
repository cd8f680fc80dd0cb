"""
Fleet Core Identity — Authenticated Actor
==========================================
Immutable snapshot of the signed-in actor: role, company and business-unit
assignment, and an optional explicit permission list.

Lifecycle:
    created   → on successful external authentication
    patched   → only via with_patch() (profile backfill of company/units)
    destroyed → on logout or session expiry (owned by SessionStore)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union

from fleetcore.permissions.constants import Permission, Role


# ══════════════════════════════════════════════════════════════
# PERMISSION SOURCE (sum type)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RoleDerived:
    """Permissions come from the role table."""
    role: Role


@dataclass(frozen=True)
class Explicit:
    """Permissions come from an explicit per-identity list."""
    permissions: tuple[Permission, ...]


PermissionSource = Union[RoleDerived, Explicit]


# ══════════════════════════════════════════════════════════════
# IDENTITY
# ══════════════════════════════════════════════════════════════

PATCHABLE_FIELDS = frozenset(
    {
        "display_name",
        "company_id",
        "assigned_unit_ids",
        "custom_permissions",
        "email",
    }
)


@dataclass(frozen=True)
class Identity:
    """
    Signed-in actor.

    Fields:
        identity_id:        Stable id from the auth collaborator.
        display_name:       Human-readable name.
        role:               Role (immutable for the session).
        company_id:         Tenant id, None until resolved.
        assigned_unit_ids:  Ordered, unique business-unit ids.
        custom_permissions: When set, replaces the role permissions entirely.
        email:              Login e-mail, informational.
    """

    identity_id: str
    display_name: str
    role: Role
    company_id: Optional[int] = None
    assigned_unit_ids: tuple[int, ...] = ()
    custom_permissions: Optional[tuple[Permission, ...]] = None
    email: Optional[str] = None

    def __post_init__(self):
        if not self.identity_id or not isinstance(self.identity_id, str):
            raise ValueError("identity_id must be a non-empty string.")

        if not isinstance(self.display_name, str):
            raise ValueError("display_name must be a string.")

        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role))

        if self.company_id is not None and not isinstance(self.company_id, int):
            raise ValueError("company_id must be int or None.")

        if not isinstance(self.assigned_unit_ids, (tuple, list)):
            raise ValueError("assigned_unit_ids must be a tuple.")
        unit_ids = tuple(self.assigned_unit_ids)
        for unit_id in unit_ids:
            if not isinstance(unit_id, int) or isinstance(unit_id, bool):
                raise ValueError("assigned_unit_ids values must be int.")
        if len(set(unit_ids)) != len(unit_ids):
            raise ValueError(
                f"assigned_unit_ids must be unique, got {list(unit_ids)}."
            )
        object.__setattr__(self, "assigned_unit_ids", unit_ids)

        if self.custom_permissions is not None:
            if not isinstance(self.custom_permissions, (tuple, list)):
                raise ValueError("custom_permissions must be a tuple or None.")
            normalized = tuple(
                p if isinstance(p, Permission) else Permission(p)
                for p in self.custom_permissions
            )
            object.__setattr__(self, "custom_permissions", normalized)

    @property
    def permission_source(self) -> PermissionSource:
        if self.custom_permissions is not None:
            return Explicit(permissions=self.custom_permissions)
        return RoleDerived(role=self.role)

    @property
    def has_company(self) -> bool:
        return self.company_id is not None

    def with_patch(self, **fields: Any) -> "Identity":
        """
        Shallow-merge the given fields into a new Identity.

        identity_id and role are not patchable.
        """
        unknown = set(fields) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(
                f"Identity fields {sorted(unknown)} cannot be patched. "
                f"Allowed: {sorted(PATCHABLE_FIELDS)}"
            )
        return dataclasses.replace(self, **fields)

    def to_dict(self) -> dict:
        return {
            "identity_id": self.identity_id,
            "display_name": self.display_name,
            "role": self.role.value,
            "company_id": self.company_id,
            "assigned_unit_ids": list(self.assigned_unit_ids),
            "custom_permissions": (
                None
                if self.custom_permissions is None
                else [p.value for p in self.custom_permissions]
            ),
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Identity":
        custom = data.get("custom_permissions")
        return cls(
            identity_id=data["identity_id"],
            display_name=data.get("display_name", ""),
            role=Role(data["role"]),
            company_id=data.get("company_id"),
            assigned_unit_ids=tuple(data.get("assigned_unit_ids") or ()),
            custom_permissions=None if custom is None else tuple(custom),
            email=data.get("email"),
        )
