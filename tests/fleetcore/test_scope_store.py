"""
Tests for fleetcore.state.scope_store and fleetcore.state.switcher.
"""

import pytest

from fleetcore.context import ALL_UNITS_LABEL, BusinessUnitSummary, Scope
from fleetcore.identity.models import Identity
from fleetcore.permissions import Role
from fleetcore.state import (
    UNIT_STORAGE_KEY,
    InMemoryStorage,
    ScopeStore,
    SessionStore,
    UnitNotVisibleError,
    UnitSwitcher,
    UnitSwitchNotAllowedError,
)

NORTH = BusinessUnitSummary(unit_id=1, name="North", code="N")
SOUTH = BusinessUnitSummary(unit_id=2, name="South", code="S")
BOTH = Scope(visible_units=(NORTH, SOUTH))


class TestCommit:
    def test_commit_changes_and_notifies_once(self):
        store = ScopeStore(InMemoryStorage())
        seen = []
        store.subscribe(lambda new, old: seen.append(new))

        assert store.commit(BOTH) is True
        assert store.commit(Scope(visible_units=(NORTH, SOUTH))) is False
        assert len(seen) == 1

    def test_structurally_different_unit_is_committed(self):
        store = ScopeStore(InMemoryStorage())
        store.commit(BOTH)
        renamed = BusinessUnitSummary(unit_id=2, name="South Depot", code="S")
        assert store.commit(Scope(visible_units=(NORTH, renamed))) is True

    def test_commit_requires_scope(self):
        with pytest.raises(TypeError):
            ScopeStore().commit({"visible_units": []})

    def test_commit_persists_active_unit_only(self):
        storage = InMemoryStorage()
        store = ScopeStore(storage)
        store.commit(Scope(visible_units=(NORTH, SOUTH), active_unit=SOUTH))
        assert storage.get(UNIT_STORAGE_KEY) == {"active_unit": SOUTH.to_dict()}


class TestRestore:
    def test_restored_unit_is_previous_until_first_commit(self):
        storage = InMemoryStorage({UNIT_STORAGE_KEY: {"active_unit": SOUTH.to_dict()}})
        store = ScopeStore(storage)

        assert store.scope == Scope.EMPTY
        assert store.previous_active == SOUTH

        store.commit(Scope(visible_units=(NORTH,), active_unit=NORTH))
        assert store.previous_active == NORTH

    def test_equal_commit_keeps_restored_unit(self):
        storage = InMemoryStorage({UNIT_STORAGE_KEY: {"active_unit": SOUTH.to_dict()}})
        store = ScopeStore(storage)
        assert store.commit(Scope.EMPTY) is False
        assert store.previous_active == SOUTH

    def test_malformed_entry_is_discarded(self):
        storage = InMemoryStorage({UNIT_STORAGE_KEY: {"active_unit": {"name": "x"}}})
        store = ScopeStore(storage)
        assert store.previous_active is None
        assert storage.get(UNIT_STORAGE_KEY) is None

    def test_clear_forgets_everything(self):
        storage = InMemoryStorage({UNIT_STORAGE_KEY: {"active_unit": SOUTH.to_dict()}})
        store = ScopeStore(storage)
        store.clear()
        assert store.previous_active is None
        assert storage.get(UNIT_STORAGE_KEY) is None
        assert store.scope == Scope.EMPTY


class TestSetters:
    def test_set_visible_units_drops_missing_active(self):
        store = ScopeStore()
        store.commit(Scope(visible_units=(NORTH, SOUTH), active_unit=SOUTH))
        store.set_visible_units([NORTH])
        assert store.active_unit_id is None

    def test_set_visible_units_keeps_visible_active(self):
        store = ScopeStore()
        store.commit(Scope(visible_units=(NORTH, SOUTH), active_unit=NORTH))
        store.set_visible_units([SOUTH, NORTH])
        assert store.active_unit_id == 1

    def test_set_active_unit_requires_visibility(self):
        store = ScopeStore()
        store.commit(Scope(visible_units=(NORTH,)))
        with pytest.raises(UnitNotVisibleError):
            store.set_active_unit(SOUTH)
        assert store.active_unit_id is None

    def test_set_active_unit_uses_visible_element(self):
        store = ScopeStore()
        store.commit(BOTH)
        store.set_active_unit(BusinessUnitSummary(unit_id=2, name="stale"))
        assert store.scope.active_unit is SOUTH

    def test_selectors(self):
        store = ScopeStore()
        store.commit(BOTH)
        assert store.has_multiple_units
        assert store.is_all_units
        assert store.active_unit_label == ALL_UNITS_LABEL

        store.set_active_unit(NORTH)
        assert not store.is_all_units
        assert store.active_unit_label == "North"


class TestUnitSwitcher:
    def _setup(self, identity):
        session = SessionStore(InMemoryStorage())
        session.login(identity)
        scopes = ScopeStore(InMemoryStorage())
        scopes.commit(BOTH)
        return UnitSwitcher(session, scopes), scopes

    def test_full_admin_can_switch(self):
        admin = Identity(identity_id="a", display_name="A", role=Role.ADMIN, company_id=1)
        switcher, scopes = self._setup(admin)
        assert switcher.can_switch
        assert switcher.select(2) is True
        assert scopes.active_unit_id == 2
        assert switcher.select(None) is True
        assert scopes.is_all_units

    def test_unknown_unit_is_rejected(self):
        admin = Identity(identity_id="a", display_name="A", role=Role.ADMIN, company_id=1)
        switcher, scopes = self._setup(admin)
        with pytest.raises(UnitNotVisibleError):
            switcher.select(99)
        assert scopes.is_all_units

    def test_restricted_identity_cannot_switch(self):
        auditor = Identity(
            identity_id="b",
            display_name="B",
            role=Role.AUDITOR,
            company_id=1,
            assigned_unit_ids=(1, 2),
        )
        switcher, _ = self._setup(auditor)
        assert not switcher.can_switch
        with pytest.raises(UnitSwitchNotAllowedError):
            switcher.select(1)
