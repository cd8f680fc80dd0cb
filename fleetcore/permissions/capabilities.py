"""
Fleet Core Permissions — Role Capabilities
===========================================
Screen-level capability flags, derived from the permission table so that a
custom permission list on the identity is honoured everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from fleetcore.permissions.constants import Permission, Role
from fleetcore.permissions.table import has_any_permission, has_permission

if TYPE_CHECKING:
    from fleetcore.identity.models import Identity


@dataclass(frozen=True)
class RoleCapabilities:
    role: Optional[Role]
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_validate: bool = False
    can_export: bool = False
    can_manage_users: bool = False
    can_manage_units: bool = False
    can_manage_vehicles: bool = False
    can_manage_drivers: bool = False
    can_manage_resources: bool = False
    can_manage_cost_centers: bool = False
    can_manage_settings: bool = False
    can_view_all_units: bool = False
    is_read_only: bool = False

    @classmethod
    def for_identity(cls, identity: Optional["Identity"]) -> "RoleCapabilities":
        if identity is None:
            return cls(role=None)

        from fleetcore.context.filters import can_view_all_units

        def can(permission: Permission) -> bool:
            return has_permission(identity, permission)

        return cls(
            role=identity.role,
            can_create=can(Permission.EVENTS_CREATE),
            can_edit=can(Permission.EVENTS_EDIT),
            can_delete=can(Permission.EVENTS_DELETE),
            can_validate=can(Permission.EVENTS_VALIDATE),
            can_export=can(Permission.REPORTS_EXPORT),
            can_manage_users=can(Permission.USERS_MANAGE),
            can_manage_units=can(Permission.UNITS_MANAGE),
            can_manage_vehicles=can(Permission.VEHICLES_MANAGE),
            can_manage_drivers=can(Permission.DRIVERS_MANAGE),
            can_manage_resources=has_any_permission(
                identity,
                (
                    Permission.RESOURCES_MANAGE,
                    Permission.TANKS_MANAGE,
                    Permission.DISPENSERS_MANAGE,
                ),
            ),
            can_manage_cost_centers=can(Permission.COST_CENTERS_MANAGE),
            can_manage_settings=can(Permission.CONFIGURATION_EDIT),
            can_view_all_units=can_view_all_units(identity),
            is_read_only=identity.role == Role.AUDITOR,
        )

    @property
    def show_create_buttons(self) -> bool:
        return self.can_create and not self.is_read_only

    @property
    def show_edit_buttons(self) -> bool:
        return self.can_edit and not self.is_read_only

    @property
    def show_delete_buttons(self) -> bool:
        return self.can_delete and not self.is_read_only
