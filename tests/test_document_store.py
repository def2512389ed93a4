"""Document store contract tests, run against each implementation."""

from __future__ import annotations

import pytest

from dailyreport.store.base import DocumentNotFoundError


class TestDocumentStoreContract:
    """Behavior the migration core relies on."""

    def test_insert_then_get_returns_fields_and_system_fields(self, any_store) -> None:
        doc_id = any_store.insert("orgs", {"name": "Acme"})
        doc = any_store.get("orgs", doc_id)
        assert doc is not None
        assert doc["name"] == "Acme"
        assert doc["_id"] == doc_id
        assert isinstance(doc["_creationTime"], int)

    def test_get_missing_returns_none(self, any_store) -> None:
        assert any_store.get("orgs", "does-not-exist") is None

    def test_collections_are_isolated(self, any_store) -> None:
        any_store.insert("orgs", {"name": "Acme"})
        assert any_store.collect("reports") == []
        assert any_store.count("orgs") == 1
        assert any_store.first("userProfiles") is None

    def test_first_returns_a_document(self, any_store) -> None:
        any_store.insert("userProfiles", {"name": "a"})
        any_store.insert("userProfiles", {"name": "b"})
        first = any_store.first("userProfiles")
        assert first is not None
        assert first["name"] in ("a", "b")

    def test_patch_merges_top_level_fields(self, any_store) -> None:
        doc_id = any_store.insert("reports", {"title": "t", "status": "draft"})
        any_store.patch("reports", doc_id, {"status": "submitted", "submittedAt": 5})
        doc = any_store.get("reports", doc_id)
        assert doc["title"] == "t"
        assert doc["status"] == "submitted"
        assert doc["submittedAt"] == 5

    def test_patch_keeps_none_values_as_present_keys(self, any_store) -> None:
        doc_id = any_store.insert("reports", {"title": "t"})
        any_store.patch("reports", doc_id, {"aiSummaryStatus": None})
        doc = any_store.get("reports", doc_id)
        assert "aiSummaryStatus" in doc
        assert doc["aiSummaryStatus"] is None

    def test_patch_missing_raises_not_found(self, any_store) -> None:
        with pytest.raises(DocumentNotFoundError):
            any_store.patch("reports", "missing", {"a": 1})

    def test_delete_removes_document(self, any_store) -> None:
        doc_id = any_store.insert("reports", {"title": "t"})
        any_store.delete("reports", doc_id)
        assert any_store.get("reports", doc_id) is None
        with pytest.raises(DocumentNotFoundError):
            any_store.delete("reports", doc_id)

    def test_system_fields_cannot_be_written(self, any_store) -> None:
        doc_id = any_store.insert("orgs", {"_id": "forged", "name": "Acme"})
        assert doc_id != "forged"
        any_store.patch("orgs", doc_id, {"_id": "forged-again"})
        assert any_store.get("orgs", doc_id)["_id"] == doc_id

    def test_reads_return_copies(self, any_store) -> None:
        doc_id = any_store.insert("reports", {"tasks": [{"id": "t1"}]})
        doc = any_store.get("reports", doc_id)
        doc["tasks"].append({"id": "t2"})
        assert any_store.get("reports", doc_id)["tasks"] == [{"id": "t1"}]

    def test_query_ordered_sorts_by_field_not_insertion(self, any_store) -> None:
        for version in (1, 3, 2):
            any_store.insert("schema_versions", {"version": version})
        desc = any_store.query_ordered("schema_versions", "version", descending=True)
        assert [d["version"] for d in desc] == [3, 2, 1]
        asc = any_store.query_ordered("schema_versions", "version", descending=False)
        assert [d["version"] for d in asc] == [1, 2, 3]

    def test_query_ordered_limit_and_missing_field_last(self, any_store) -> None:
        any_store.insert("schema_versions", {"name": "no version"})
        any_store.insert("schema_versions", {"version": 2})
        any_store.insert("schema_versions", {"version": 7})
        top = any_store.query_ordered("schema_versions", "version", limit=1)
        assert [d["version"] for d in top] == [7]
        docs = any_store.query_ordered("schema_versions", "version")
        assert "version" not in docs[-1]

    def test_first_ordered_empty_collection(self, any_store) -> None:
        assert any_store.first_ordered("schema_versions", "version") is None

    def test_now_is_unix_milliseconds(self, any_store) -> None:
        assert any_store.now() > 1_500_000_000_000


class TestInMemoryDocumentStore:
    def test_now_uses_injected_clock(self, store, clock) -> None:
        assert store.now() == clock.now_ms
        clock.advance(10)
        assert store.now() == clock.now_ms

    def test_creation_times_increase_with_frozen_clock(self, store) -> None:
        a = store.get("orgs", store.insert("orgs", {}))
        b = store.get("orgs", store.insert("orgs", {}))
        assert b["_creationTime"] > a["_creationTime"]
