"""Domain models for bill metadata and enriched documents."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bill_ingest.ingestion.keys import BillKeyComponents


class _MetadataRecord(BaseModel):
    # data.json files carry many more fields than we use, and congress /
    # number show up both as strings and as integers.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class BillMetadata(_MetadataRecord):
    """Fields read from the bill-level ``data.json``.

    Attributes
    ----------
    congress:
        Congress the bill was introduced in (e.g. ``"118"``).
    bill_id:
        Bill identifier, e.g. ``"hr1234-118"``.
    introduced_at:
        Introduction date (``YYYY-MM-DD``).
    number:
        Bill number within its type.
    official_title:
        Official title of the bill.
    """

    congress: str | None = None
    bill_id: str | None = None
    introduced_at: str | None = None
    number: str | None = None
    official_title: str | None = None


class BillVersionMetadata(_MetadataRecord):
    """Fields read from the text-version ``data.json``."""

    version_code: str | None = None
    bill_version_id: str | None = None
    issued_on: str | None = None
    urls: dict[str, str] = Field(default_factory=dict)

    def select_url(self, preferred_keys: Sequence[str]) -> str | None:
        """Return the first URL found under *preferred_keys*, else ``None``."""
        for key in preferred_keys:
            url = self.urls.get(key)
            if url:
                return url
        return None


def enriched_metadata(
    key: str,
    bill: BillMetadata,
    version: BillVersionMetadata,
    *,
    components: BillKeyComponents | None = None,
    url_keys: Sequence[str] = (),
) -> dict[str, Any]:
    """Merge bill, version and key lineage into one flat metadata dict.

    Fields whose value is unknown are left out rather than set to
    ``None``; vector stores such as Chroma only accept scalar values.
    When the bill record lacks ``congress`` or ``number`` they are taken
    from the parsed key.
    """
    fields: dict[str, Any] = {
        "source": key,
        "congress": bill.congress,
        "bill_version": version.version_code,
        "bill_version_id": version.bill_version_id,
        "bill_id": bill.bill_id,
        "introduced_at": bill.introduced_at,
        "number": bill.number,
        "official_title": bill.official_title,
        "bill_version_issued_on": version.issued_on,
        "bill_version_url": version.select_url(url_keys),
    }
    if components is not None:
        fields["bill_type"] = components.bill_type
        fields["text_version"] = components.version
        if fields["congress"] is None:
            fields["congress"] = components.congress
        if fields["number"] is None:
            fields["number"] = components.bill_number

    return {name: value for name, value in fields.items() if value is not None}
