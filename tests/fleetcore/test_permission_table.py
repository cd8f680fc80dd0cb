"""
Tests for fleetcore.permissions — role table and identity queries.
"""

import pytest

from fleetcore.identity.models import Identity
from fleetcore.permissions import (
    ADMIN_ROLES,
    RESTRICTED_ROLES,
    ROLE_PERMISSIONS,
    Permission,
    Role,
    effective_permissions,
    has_all_permissions,
    has_any_permission,
    has_any_role,
    has_permission,
    permissions_for,
)


def _identity(role, **kwargs):
    return Identity(identity_id="u-1", display_name="Test", role=role, **kwargs)


# ── Table ────────────────────────────────────────────────────

class TestPermissionsFor:
    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_is_defined_and_stable(self, role):
        first = permissions_for(role)
        second = permissions_for(role)
        assert first == second
        assert len(first) > 0
        assert len(set(first)) == len(first)

    def test_table_is_total_over_roles(self):
        assert set(ROLE_PERMISSIONS) == set(Role)

    def test_super_admin_has_every_permission(self):
        assert set(permissions_for(Role.COMPANY_SUPER_ADMIN)) == set(Permission)

    def test_admin_lacks_only_company_management(self):
        missing = set(Permission) - set(permissions_for(Role.ADMIN))
        assert missing == {Permission.COMPANIES_MANAGE}

    def test_supervisor_cannot_delete_events(self):
        granted = permissions_for(Role.SUPERVISOR)
        assert Permission.EVENTS_VALIDATE in granted
        assert Permission.EVENTS_DELETE not in granted
        assert Permission.UNITS_MANAGE not in granted

    def test_operator_permissions(self):
        assert set(permissions_for(Role.OPERATOR)) == {
            Permission.EVENTS_CREATE,
            Permission.EVENTS_VIEW,
            Permission.RESOURCES_MANAGE,
        }

    def test_auditor_is_view_and_export_only(self):
        assert set(permissions_for(Role.AUDITOR)) == {
            Permission.UNITS_VIEW,
            Permission.EVENTS_VIEW,
            Permission.REPORTS_VIEW,
            Permission.REPORTS_EXPORT,
        }

    def test_unknown_role_raises(self):
        with pytest.raises(KeyError):
            permissions_for("driver")

    def test_unknown_role_value_fails_fast(self):
        with pytest.raises(ValueError):
            Role("driver")


# ── Identity queries ─────────────────────────────────────────

class TestHasPermission:
    def test_none_identity_holds_nothing(self):
        assert has_permission(None, Permission.EVENTS_VIEW) is False
        assert has_any_role(None, list(Role)) is False

    def test_role_derived(self):
        operator = _identity(Role.OPERATOR)
        assert has_permission(operator, Permission.EVENTS_CREATE)
        assert not has_permission(operator, Permission.EVENTS_VALIDATE)

    def test_custom_list_replaces_role_grants(self):
        admin = _identity(
            Role.ADMIN, custom_permissions=(Permission.EVENTS_VIEW,)
        )
        assert has_permission(admin, Permission.EVENTS_VIEW)
        assert not has_permission(admin, Permission.USERS_MANAGE)

    def test_custom_list_grants_beyond_role(self):
        auditor = _identity(
            Role.AUDITOR, custom_permissions=(Permission.EVENTS_VALIDATE,)
        )
        assert has_permission(auditor, Permission.EVENTS_VALIDATE)
        assert not has_permission(auditor, Permission.EVENTS_VIEW)

    def test_empty_custom_list_denies_everything(self):
        admin = _identity(Role.ADMIN, custom_permissions=())
        assert effective_permissions(admin) == ()
        assert not has_permission(admin, Permission.EVENTS_VIEW)

    def test_malformed_token_raises(self):
        with pytest.raises(TypeError):
            has_permission(_identity(Role.ADMIN), "events:view")


class TestPermissionSets:
    def test_all_and_any(self):
        supervisor = _identity(Role.SUPERVISOR)
        wanted = (Permission.EVENTS_VIEW, Permission.EVENTS_DELETE)
        assert not has_all_permissions(supervisor, wanted)
        assert has_any_permission(supervisor, wanted)
        assert has_all_permissions(supervisor, wanted[:1])

    def test_empty_input_is_false(self):
        admin = _identity(Role.ADMIN)
        assert has_all_permissions(admin, []) is False
        assert has_any_permission(admin, []) is False

    def test_none_identity_is_false(self):
        assert has_all_permissions(None, [Permission.EVENTS_VIEW]) is False
        assert has_any_permission(None, [Permission.EVENTS_VIEW]) is False

    def test_has_any_role(self):
        auditor = _identity(Role.AUDITOR)
        assert has_any_role(auditor, [Role.AUDITOR, Role.OPERATOR])
        assert not has_any_role(auditor, [Role.ADMIN])


def test_role_groups_partition_roles():
    assert ADMIN_ROLES | RESTRICTED_ROLES == set(Role)
    assert not ADMIN_ROLES & RESTRICTED_ROLES
