"""Read-only schema and data integrity checks.

validate() never raises for data problems: version drift and cross-collection
anomalies come back as issue strings. Rules are independent pure functions
over the counted collections; append new ones to INTEGRITY_RULES.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from dailyreport.schemas.integrity import IntegrityReport
from dailyreport.services.version_ledger import get_current_version, get_target_version
from dailyreport.store.base import ORGS, REPORTS, USER_PROFILES, DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionCounts:
    """Document counts of the core collections."""

    orgs: int
    users: int
    reports: int


IntegrityRule = Callable[[CollectionCounts], "str | None"]


def users_require_organization(counts: CollectionCounts) -> str | None:
    if counts.users > 0 and counts.orgs == 0:
        return "Users exist but no organizations found"
    return None


def reports_require_user(counts: CollectionCounts) -> str | None:
    if counts.reports > 0 and counts.users == 0:
        return "Reports exist but no users found"
    return None


INTEGRITY_RULES: tuple[IntegrityRule, ...] = (
    users_require_organization,
    reports_require_user,
)


def check_version_drift(current_version: int, target_version: int) -> str | None:
    """Issue when the ledger claims a version newer than this code supports."""
    if current_version > target_version:
        return (
            f"Current schema version ({current_version}) is higher than "
            f"supported version ({target_version})"
        )
    return None


def count_collections(store: DocumentStore) -> CollectionCounts:
    """Full-scan counts of orgs, user profiles and reports."""
    return CollectionCounts(
        orgs=store.count(ORGS),
        users=store.count(USER_PROFILES),
        reports=store.count(REPORTS),
    )


def apply_rules(
    counts: CollectionCounts,
    rules: tuple[IntegrityRule, ...] = INTEGRITY_RULES,
) -> list[str]:
    """Run each rule in order and collect the issues they report."""
    issues: list[str] = []
    for rule in rules:
        issue = rule(counts)
        if issue:
            issues.append(issue)
    return issues


def validate(
    store: DocumentStore,
    rules: tuple[IntegrityRule, ...] = INTEGRITY_RULES,
) -> IntegrityReport:
    """Audit version drift and cross-collection consistency without writing."""
    issues: list[str] = []
    current = get_current_version(store)

    drift = check_version_drift(current, get_target_version())
    if drift:
        issues.append(drift)

    try:
        counts = count_collections(store)
        issues.extend(apply_rules(counts, rules))
    except Exception as exc:
        logger.exception("Integrity counting failed")
        issues.append(f"Failed to validate data integrity: {exc}")

    if issues:
        logger.warning("Integrity validation found %d issue(s): %s", len(issues), issues)
    else:
        logger.info("Integrity validation passed at schema version %s", current)

    return IntegrityReport(
        is_valid=not issues,
        current_version=current,
        issues=issues,
        timestamp=store.now(),
    )
