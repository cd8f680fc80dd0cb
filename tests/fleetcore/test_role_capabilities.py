"""
Tests for fleetcore.permissions.capabilities — screen capability flags.
"""

from fleetcore.identity.models import Identity
from fleetcore.permissions import Permission, Role, RoleCapabilities


def _identity(role, **kwargs):
    kwargs.setdefault("company_id", 1)
    return Identity(identity_id="u-1", display_name="Test", role=role, **kwargs)


def test_no_identity_has_no_capabilities():
    caps = RoleCapabilities.for_identity(None)
    assert caps.role is None
    assert not caps.can_create
    assert not caps.can_view_all_units
    assert not caps.show_create_buttons


def test_super_admin_can_do_everything():
    caps = RoleCapabilities.for_identity(_identity(Role.COMPANY_SUPER_ADMIN))
    assert caps.can_create and caps.can_edit and caps.can_delete
    assert caps.can_validate and caps.can_export
    assert caps.can_manage_users and caps.can_manage_units
    assert caps.can_manage_resources and caps.can_manage_settings
    assert caps.can_view_all_units
    assert not caps.is_read_only


def test_unit_bound_admin_cannot_view_all_units():
    caps = RoleCapabilities.for_identity(
        _identity(Role.ADMIN, assigned_unit_ids=(3,))
    )
    assert caps.can_manage_units
    assert not caps.can_view_all_units


def test_supervisor_flags():
    caps = RoleCapabilities.for_identity(_identity(Role.SUPERVISOR))
    assert caps.can_validate
    assert caps.can_manage_vehicles
    assert not caps.can_delete
    assert not caps.can_manage_units
    assert not caps.can_manage_resources
    assert not caps.can_view_all_units


def test_operator_manages_resources():
    caps = RoleCapabilities.for_identity(_identity(Role.OPERATOR))
    assert caps.can_create
    assert caps.can_manage_resources
    assert not caps.can_validate


def test_auditor_is_read_only():
    caps = RoleCapabilities.for_identity(_identity(Role.AUDITOR))
    assert caps.is_read_only
    assert caps.can_export
    assert not caps.show_create_buttons
    assert not caps.show_edit_buttons
    assert not caps.show_delete_buttons


def test_custom_permissions_flow_through():
    caps = RoleCapabilities.for_identity(
        _identity(Role.OPERATOR, custom_permissions=(Permission.TANKS_MANAGE,))
    )
    assert caps.can_manage_resources
    assert not caps.can_create
