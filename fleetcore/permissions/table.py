"""
Fleet Core Permissions — Role to Permission Table
==================================================
Static, total mapping from Role to an ordered tuple of Permissions, plus the
identity-level queries built on it.

Resolution order for an identity:
    custom_permissions set  → membership in that list only (no union)
    otherwise               → membership in permissions_for(identity.role)

A None identity never holds a permission or a role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from fleetcore.permissions.constants import Permission, Role

if TYPE_CHECKING:
    from fleetcore.identity.models import Identity


_ADMIN_PERMISSIONS: tuple[Permission, ...] = (
    Permission.UNITS_VIEW,
    Permission.UNITS_MANAGE,
    Permission.USERS_MANAGE,
    Permission.CONFIGURATION_EDIT,
    Permission.VEHICLES_MANAGE,
    Permission.DRIVERS_MANAGE,
    Permission.DISPENSERS_MANAGE,
    Permission.TANKS_MANAGE,
    Permission.RESOURCES_MANAGE,
    Permission.COST_CENTERS_MANAGE,
    Permission.EVENTS_CREATE,
    Permission.EVENTS_EDIT,
    Permission.EVENTS_DELETE,
    Permission.EVENTS_VALIDATE,
    Permission.EVENTS_VIEW,
    Permission.REPORTS_VIEW,
    Permission.REPORTS_EXPORT,
)

ROLE_PERMISSIONS: dict[Role, tuple[Permission, ...]] = {
    Role.COMPANY_SUPER_ADMIN: _ADMIN_PERMISSIONS + (Permission.COMPANIES_MANAGE,),
    Role.ADMIN: _ADMIN_PERMISSIONS,
    # Own unit(s) only; may create operators/auditors for those units.
    Role.SUPERVISOR: (
        Permission.UNITS_VIEW,
        Permission.USERS_MANAGE,
        Permission.VEHICLES_MANAGE,
        Permission.DRIVERS_MANAGE,
        Permission.COST_CENTERS_MANAGE,
        Permission.EVENTS_CREATE,
        Permission.EVENTS_EDIT,
        Permission.EVENTS_VALIDATE,
        Permission.EVENTS_VIEW,
        Permission.REPORTS_VIEW,
        Permission.REPORTS_EXPORT,
    ),
    # Field operators mostly report loads from the messaging channel.
    Role.OPERATOR: (
        Permission.EVENTS_CREATE,
        Permission.EVENTS_VIEW,
        Permission.RESOURCES_MANAGE,
    ),
    Role.AUDITOR: (
        Permission.UNITS_VIEW,
        Permission.EVENTS_VIEW,
        Permission.REPORTS_VIEW,
        Permission.REPORTS_EXPORT,
    ),
}


def permissions_for(role: Role) -> tuple[Permission, ...]:
    """
    Ordered permissions granted by a role.

    Raises KeyError for anything that is not a Role member.
    """
    return ROLE_PERMISSIONS[role]


def effective_permissions(identity: "Identity") -> tuple[Permission, ...]:
    """Permissions actually in force for an identity."""
    if identity.custom_permissions is not None:
        return identity.custom_permissions
    return permissions_for(identity.role)


def has_permission(identity: Optional["Identity"], permission: Permission) -> bool:
    if identity is None:
        return False
    if not isinstance(permission, Permission):
        raise TypeError(
            f"permission must be Permission, got {type(permission).__name__}."
        )
    return permission in effective_permissions(identity)


def has_all_permissions(
    identity: Optional["Identity"],
    permissions: Iterable[Permission],
) -> bool:
    """True only if every permission is held. Empty input is False."""
    required = tuple(permissions)
    if identity is None or not required:
        return False
    return all(has_permission(identity, p) for p in required)


def has_any_permission(
    identity: Optional["Identity"],
    permissions: Iterable[Permission],
) -> bool:
    """True if at least one permission is held. Empty input is False."""
    candidates = tuple(permissions)
    if identity is None or not candidates:
        return False
    return any(has_permission(identity, p) for p in candidates)


def has_any_role(identity: Optional["Identity"], roles: Iterable[Role]) -> bool:
    if identity is None:
        return False
    return identity.role in tuple(roles)
