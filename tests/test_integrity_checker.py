"""Tests for read-only integrity validation."""

from __future__ import annotations

from unittest.mock import patch

from dailyreport.services.integrity_checker import (
    INTEGRITY_RULES,
    CollectionCounts,
    apply_rules,
    check_version_drift,
    reports_require_user,
    users_require_organization,
    validate,
)
from dailyreport.services.version_ledger import CURRENT_SCHEMA_VERSION, record_version
from tests.factories import make_report
from tests.test_constants import TEST_NOW_MS


class TestRules:
    def test_users_without_orgs(self) -> None:
        assert users_require_organization(CollectionCounts(orgs=0, users=1, reports=0))
        assert users_require_organization(CollectionCounts(orgs=1, users=1, reports=0)) is None
        assert users_require_organization(CollectionCounts(orgs=0, users=0, reports=0)) is None

    def test_reports_without_users(self) -> None:
        assert reports_require_user(CollectionCounts(orgs=1, users=0, reports=2))
        assert reports_require_user(CollectionCounts(orgs=1, users=1, reports=2)) is None

    def test_apply_rules_accepts_additional_rules(self) -> None:
        def no_empty_orgs(counts: CollectionCounts) -> str | None:
            return "Organizations exist without users" if counts.orgs and not counts.users else None

        counts = CollectionCounts(orgs=1, users=0, reports=0)
        assert apply_rules(counts) == []
        assert apply_rules(counts, INTEGRITY_RULES + (no_empty_orgs,)) == [
            "Organizations exist without users"
        ]

    def test_version_drift(self) -> None:
        assert check_version_drift(4, 3) == (
            "Current schema version (4) is higher than supported version (3)"
        )
        assert check_version_drift(3, 3) is None
        assert check_version_drift(0, 3) is None


class TestValidate:
    def test_empty_store_is_valid(self, any_store) -> None:
        report = validate(any_store)
        assert report.is_valid is True
        assert report.issues == []
        assert report.current_version == 0

    def test_users_without_organizations(self, any_store) -> None:
        any_store.insert("userProfiles", {"name": "Alice"})
        report = validate(any_store)
        assert report.is_valid is False
        assert any("no organizations" in issue for issue in report.issues)

    def test_reports_without_users(self, store) -> None:
        store.insert("orgs", {"name": "Acme"})
        store.insert("reports", make_report())
        report = validate(store)
        assert report.is_valid is False
        assert report.issues == ["Reports exist but no users found"]

    def test_consistent_store(self, store) -> None:
        store.insert("orgs", {"name": "Acme"})
        store.insert("userProfiles", {"name": "Alice"})
        store.insert("reports", make_report())
        record_version(store, CURRENT_SCHEMA_VERSION, "indexes", "")
        report = validate(store)
        assert report.is_valid is True
        assert report.current_version == CURRENT_SCHEMA_VERSION
        assert report.timestamp == TEST_NOW_MS

    def test_version_newer_than_code_is_an_issue(self, store) -> None:
        record_version(store, CURRENT_SCHEMA_VERSION + 1, "future", "")
        report = validate(store)
        assert report.is_valid is False
        assert report.current_version == CURRENT_SCHEMA_VERSION + 1
        assert "higher than supported version" in report.issues[0]

    def test_counting_failure_becomes_issue(self, store) -> None:
        with patch.object(store, "count", side_effect=RuntimeError("store unavailable")):
            report = validate(store)
        assert report.is_valid is False
        assert report.issues == ["Failed to validate data integrity: store unavailable"]

    def test_validate_does_not_write(self, store) -> None:
        store.insert("userProfiles", {"name": "Alice"})
        validate(store)
        assert store.count("audit_logs") == 0
        assert store.count("schema_versions") == 0
