"""
Fleet Core Sync — Profile Backfill
==================================
Sign-in may yield an identity without company or unit assignment.
backfill_profile() asks the auth collaborator for the missing fields and
patches them into the session. A 401 from the collaborator ends the
session as expired.
"""

from __future__ import annotations

import logging

from fleetcore.state.session import SessionStore
from fleetcore.sync.contracts import AuthCollaborator, AuthenticationExpired

logger = logging.getLogger("fleet.sync")


def backfill_profile(session_store: SessionStore, auth: AuthCollaborator) -> bool:
    """Patch company_id / assigned_unit_ids when missing. True if patched."""
    identity = session_store.identity
    if identity is None:
        return False
    if identity.company_id is not None and identity.assigned_unit_ids:
        return False

    try:
        profile = auth.resolve_profile(identity.identity_id)
    except AuthenticationExpired:
        session_store.handle_expiry()
        return False

    if not profile:
        logger.debug(f"No profile found for '{identity.identity_id}'")
        return False

    patch = {}
    if identity.company_id is None and profile.get("company_id") is not None:
        patch["company_id"] = int(profile["company_id"])
    if not identity.assigned_unit_ids and profile.get("assigned_unit_ids"):
        patch["assigned_unit_ids"] = tuple(
            int(unit_id) for unit_id in profile["assigned_unit_ids"]
        )

    if not patch:
        return False

    logger.info(
        f"Backfilling profile of '{identity.identity_id}': {sorted(patch)}"
    )
    return session_store.update_identity(**patch)
