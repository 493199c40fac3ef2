"""Unit tests for the recursive bill text loader."""

from __future__ import annotations

from typing import Any

import pytest
from conftest import FakeObjectStore, add_bill

from bill_ingest.errors import ListingError, ObjectStoreError
from bill_ingest.ingestion.keys import parse_bill_key
from bill_ingest.ingestion.loader import BillTextLoader, is_bill_text
from bill_ingest.storage.base import ObjectRef

PREFIX = "raw/congress/data/118/bills/hr"


def _paged_store(numbers_per_page: list[list[str]]) -> FakeObjectStore:
    objects: dict[str, Any] = {}
    pages = [[add_bill(objects, number=n) for n in page] for page in numbers_per_page]
    return FakeObjectStore(pages=pages, objects=objects)


class TestTwoPageScenario:
    def test_resolves_one_document_per_page(self, two_page_store: FakeObjectStore) -> None:
        docs = BillTextLoader(PREFIX, store=two_page_store, max_results=10).load()

        assert len(docs) == 2
        for doc in docs:
            parsed = parse_bill_key(doc.metadata["source"])
            assert parsed is not None
            assert parsed.congress == "118"
            assert parsed.bill_type == "hr"
            assert doc.metadata["congress"] == "118"
            assert doc.metadata["bill_type"] == "hr"
        assert [d.metadata["number"] for d in docs] == ["1", "2"]

    def test_non_matching_objects_are_never_fetched(self, two_page_store: FakeObjectStore) -> None:
        BillTextLoader(PREFIX, store=two_page_store).load()
        fetched_bodies = [k for k in two_page_store.get_calls if not k.endswith("data.json")]
        assert all(k.endswith("document.txt") for k in fetched_bodies)
        assert not any(k.endswith("package.zip") for k in two_page_store.get_calls)


class TestMaxResults:
    def test_never_returns_more_than_max(self) -> None:
        store = _paged_store([["1", "2", "3"], ["4", "5"]])
        docs = BillTextLoader(PREFIX, store=store, max_results=2).load()
        assert [d.metadata["number"] for d in docs] == ["1", "2"]

    def test_stops_mid_page_without_listing_further(self) -> None:
        store = _paged_store([["1", "2", "3"], ["4", "5"]])
        BillTextLoader(PREFIX, store=store, max_results=2).load()

        assert len(store.list_calls) == 1
        assert not any("hr3/" in k for k in store.get_calls)

    def test_returns_everything_when_max_not_reached(self) -> None:
        store = _paged_store([["1", "2"], ["3"]])
        docs = BillTextLoader(PREFIX, store=store, max_results=10).load()
        assert len(docs) == 3

    def test_zero_max_results_lists_nothing(self) -> None:
        store = _paged_store([["1"]])
        assert BillTextLoader(PREFIX, store=store, max_results=0).load() == []
        assert store.list_calls == []

    def test_negative_max_results_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            BillTextLoader(PREFIX, store=FakeObjectStore(), max_results=-1)


class TestFailures:
    def test_failed_body_is_skipped_and_counted(self) -> None:
        store = _paged_store([["1", "2", "3"]])
        bad_key = store.pages[0][1]
        store.objects[bad_key] = ObjectStoreError("boom")

        loader = BillTextLoader(PREFIX, store=store)
        docs = loader.load()

        assert [d.metadata["number"] for d in docs] == ["1", "3"]
        assert bad_key not in [d.metadata["source"] for d in docs]
        assert loader.stats.loaded == 2
        assert loader.stats.skipped == 1
        assert loader.stats.listed == 3

    def test_skipped_documents_do_not_count_towards_max(self) -> None:
        store = _paged_store([["1", "2", "3"]])
        store.objects[store.pages[0][0]] = ObjectStoreError("boom")

        docs = BillTextLoader(PREFIX, store=store, max_results=2).load()
        assert [d.metadata["number"] for d in docs] == ["2", "3"]

    def test_listing_failure_propagates(self) -> None:
        store = _paged_store([["1"], ["2"]])
        store.fail_on_page = 1
        with pytest.raises(ListingError):
            BillTextLoader(PREFIX, store=store).load()


class TestPredicate:
    def test_custom_predicate(self) -> None:
        store = _paged_store([["1", "2", "3"]])
        only_two = lambda ref: ref.key.endswith("hr2/text-versions/ih/document.txt")  # noqa: E731
        docs = BillTextLoader(PREFIX, store=store, predicate=only_two).load()
        assert [d.metadata["number"] for d in docs] == ["2"]

    def test_default_predicate(self) -> None:
        assert is_bill_text(ObjectRef(key=f"{PREFIX}/hr9/text-versions/ih/document.txt"))
        assert not is_bill_text(ObjectRef(key=f"{PREFIX}/hr9/data.json"))

    def test_stats_reset_between_runs(self) -> None:
        store = _paged_store([["1", "2"]])
        loader = BillTextLoader(PREFIX, store=store)
        loader.load()
        loader.load()
        assert loader.stats.loaded == 2
