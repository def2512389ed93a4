"""Migration run audit trail (started / completed / failed).

Entries go to the shared ``audit_logs`` collection as
``action = "migration_<status>"``. Attribution is a SystemActor: with the
``first_found`` policy the first organization and user profile in the store
stand in for the system; with ``none`` (or an empty store) the entry is
written unattributed. Missing orgs/users never block the write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from dailyreport.config import ATTRIBUTION_NONE, get_settings
from dailyreport.store.base import AUDIT_LOGS, ID_FIELD, ORGS, USER_PROFILES, DocumentStore

logger = logging.getLogger(__name__)

MigrationStatus = Literal["started", "completed", "failed"]
MIGRATION_STATUSES: tuple[str, ...] = ("started", "completed", "failed")


@dataclass(frozen=True)
class Attributed:
    """Entry attributed to an organization and/or user profile."""

    org_id: str | None
    user_id: str | None


@dataclass(frozen=True)
class Unattributed:
    """System-level entry with no actor or organization."""


SystemActor = Attributed | Unattributed

UNATTRIBUTED = Unattributed()


def resolve_system_actor(store: DocumentStore, policy: str | None = None) -> SystemActor:
    """Pick the actor for system audit entries under the given attribution policy."""
    policy = policy or get_settings().migration_audit_attribution
    if policy == ATTRIBUTION_NONE:
        return UNATTRIBUTED

    first_org = store.first(ORGS)
    first_user = store.first(USER_PROFILES)
    org_id = first_org[ID_FIELD] if first_org else None
    user_id = first_user[ID_FIELD] if first_user else None
    if org_id is None and user_id is None:
        return UNATTRIBUTED
    return Attributed(org_id=org_id, user_id=user_id)


def record_migration_progress(
    store: DocumentStore,
    migration_name: str,
    status: MigrationStatus,
    details: str | None = None,
    error: str | None = None,
    *,
    actor: SystemActor | None = None,
) -> dict:
    """Append one migration lifecycle entry to the audit log.

    Raises ValueError for an unknown status. Returns {"success": True}.
    """
    if status not in MIGRATION_STATUSES:
        raise ValueError(f"Invalid migration status: {status!r}")

    if actor is None:
        actor = resolve_system_actor(store)

    now = store.now()
    entry: dict = {
        "action": f"migration_{status}",
        "payload": {
            "migrationName": migration_name,
            "details": details,
            "error": error,
            "timestamp": now,
        },
        "created_at": now,
    }
    if isinstance(actor, Attributed):
        if actor.user_id is not None:
            entry["actor_id"] = actor.user_id
        if actor.org_id is not None:
            entry["org_id"] = actor.org_id

    store.insert(AUDIT_LOGS, entry)
    log = logger.warning if status == "failed" else logger.info
    log("Migration %s %s%s", migration_name, status, f": {error}" if error else "")
    return {"success": True}
