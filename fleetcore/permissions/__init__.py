"""
Fleet Core Permissions — Public API
===================================
"""

from fleetcore.permissions.constants import (
    ADMIN_ROLES,
    RESTRICTED_ROLES,
    Permission,
    Role,
)
from fleetcore.permissions.table import (
    ROLE_PERMISSIONS,
    effective_permissions,
    has_all_permissions,
    has_any_permission,
    has_any_role,
    has_permission,
    permissions_for,
)
from fleetcore.permissions.capabilities import RoleCapabilities

__all__ = [
    "Role",
    "Permission",
    "ADMIN_ROLES",
    "RESTRICTED_ROLES",
    "ROLE_PERMISSIONS",
    "permissions_for",
    "effective_permissions",
    "has_permission",
    "has_all_permissions",
    "has_any_permission",
    "has_any_role",
    "RoleCapabilities",
]
