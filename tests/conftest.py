"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import json
import threading
from typing import Any

import pytest

from bill_ingest.errors import ObjectNotFoundError, ObjectStoreError
from bill_ingest.storage.base import ListPage, ObjectRef, ObjectStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fake object store ──────────────────────────────────────────────────


class FakeObjectStore(ObjectStore):
    """In-memory store serving pre-built listing pages.

    ``pages`` is a list of key lists; page *i* is reached with token
    ``"page-<i>"``.  ``objects`` maps keys to bodies; a body that is an
    exception instance is raised on fetch instead.
    """

    def __init__(
        self,
        pages: list[list[str]] | None = None,
        objects: dict[str, bytes | str | Exception] | None = None,
        *,
        fail_on_page: int | None = None,
    ) -> None:
        super().__init__("test-bucket")
        self.pages = pages or []
        self.objects = objects or {}
        self.fail_on_page = fail_on_page
        self.list_calls: list[tuple[str, str | None]] = []
        self.get_calls: list[str] = []
        self._lock = threading.Lock()

    def list_page(self, prefix: str, continuation_token: str | None = None) -> ListPage:
        self.list_calls.append((prefix, continuation_token))
        index = int(continuation_token.split("-")[1]) if continuation_token else 0
        if index == self.fail_on_page:
            raise ObjectStoreError(f"listing page {index} exploded")
        if index >= len(self.pages):
            return ListPage()
        entries = [ObjectRef(key=k) for k in self.pages[index] if k.startswith(prefix)]
        next_token = f"page-{index + 1}" if index + 1 < len(self.pages) else None
        return ListPage(entries=entries, next_token=next_token)

    def get_object(self, key: str) -> bytes:
        with self._lock:
            self.get_calls.append(key)
        if key not in self.objects:
            raise ObjectNotFoundError(f"{key} does not exist")
        body = self.objects[key]
        if isinstance(body, Exception):
            raise body
        return body.encode() if isinstance(body, str) else body


# ── Bill corpus helpers ────────────────────────────────────────────────


def bill_dir(congress: str = "118", bill_type: str = "hr", number: str = "1") -> str:
    return f"raw/congress/data/{congress}/bills/{bill_type}/{bill_type}{number}"


def text_key(
    congress: str = "118", bill_type: str = "hr", number: str = "1", version: str = "ih"
) -> str:
    return f"{bill_dir(congress, bill_type, number)}/text-versions/{version}/document.txt"


def bill_record(congress: str = "118", bill_type: str = "hr", number: str = "1") -> dict[str, Any]:
    return {
        "bill_id": f"{bill_type}{number}-{congress}",
        "bill_type": bill_type,
        "congress": congress,
        "introduced_at": "2023-01-09",
        "number": number,
        "official_title": f"To do the thing described in {bill_type.upper()} {number}.",
        "status": "REFERRED",
    }


def version_record(
    congress: str = "118", bill_type: str = "hr", number: str = "1", version: str = "ih"
) -> dict[str, Any]:
    return {
        "bill_version_id": f"{bill_type}{number}-{congress}-{version}",
        "version_code": version,
        "issued_on": "2023-01-10",
        "urls": {
            "html": f"https://www.govinfo.gov/{bill_type}{number}{version}.htm",
            "pdf": f"https://www.govinfo.gov/{bill_type}{number}{version}.pdf",
        },
    }


def add_bill(
    objects: dict[str, Any],
    congress: str = "118",
    bill_type: str = "hr",
    number: str = "1",
    version: str = "ih",
    text: str | None = None,
) -> str:
    """Populate *objects* with a text document and both data.json files."""
    key = text_key(congress, bill_type, number, version)
    version_dir = key.rsplit("/", 1)[0]
    objects[key] = text if text is not None else f"A BILL {bill_type} {number} ({version})"
    objects[f"{version_dir}/data.json"] = json.dumps(
        version_record(congress, bill_type, number, version)
    )
    objects[f"{bill_dir(congress, bill_type, number)}/data.json"] = json.dumps(
        bill_record(congress, bill_type, number)
    )
    return key


@pytest.fixture()
def two_page_store() -> FakeObjectStore:
    """Two listing pages under ``.../118/bills/hr``, one bill text per page."""
    objects: dict[str, Any] = {}
    first = add_bill(objects, number="1")
    second = add_bill(objects, number="2")
    pages = [
        [f"{bill_dir(number='1')}/data.json", first, first.replace("document.txt", "data.json")],
        [second, f"{bill_dir(number='2')}/text-versions/ih/package.zip"],
    ]
    return FakeObjectStore(pages=pages, objects=objects)
