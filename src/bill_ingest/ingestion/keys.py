"""Object-key grammar for bill text versions.

Bill text lives under keys of the form::

    raw/congress/data/<congress>/bills/<type>/<bill-dir>/text-versions/<version>/document.txt

where ``<bill-dir>`` is the bill type followed by the bill number
(``hr1234``, ``sconres12``).  Each text version directory carries a
``data.json`` describing the version, and the bill directory two levels
up carries a ``data.json`` describing the bill itself.

Bill number extraction
----------------------
The bill number is the **last** contiguous run of digits in
``<bill-dir>``.  The pattern consumes the directory greedily up to a
character that is neither a digit nor ``/`` and captures the digits
that follow, so::

    hr1234        -> "1234"
    hr12x34       -> "34"     (embedded id before the number)
    h2r5          -> "5"

``<bill-dir>`` is exactly one path segment.  A segment made only of
digits, an empty segment (``hr//12``) and an extra segment between the
type and the bill directory all fail to match.  Digits and word
characters are ASCII only, so ``١١٨`` is not a congress.  A bill *type*
containing digits is accepted as-is by ``\\w+``; if such a type also
appears inside ``<bill-dir>`` the greedy rule still picks the trailing
digits, which may not be what the upstream data meant.
"""

from __future__ import annotations

import posixpath
import re

from pydantic import BaseModel, ConfigDict

TEXT_FILENAME = "document.txt"
METADATA_FILENAME = "data.json"

BILL_TEXT_KEY_RE = re.compile(
    r"raw/congress/data/(?P<congress>\d+)"
    r"/bills/(?P<bill_type>\w+)"
    r"/[^/]*[^/\d](?P<bill_number>\d+)"
    r"/text-versions/(?P<version>\w+)"
    r"/document\.txt",
    re.ASCII,
)


class BillKeyComponents(BaseModel):
    """Identifiers captured from a bill text key (all kept as strings)."""

    model_config = ConfigDict(frozen=True)

    congress: str
    bill_type: str
    bill_number: str
    version: str


def parse_bill_key(key: str) -> BillKeyComponents | None:
    """Match *key* against the bill text grammar.

    Returns ``None`` when the key does not match; a non-matching key is
    simply out of scope, never an error.
    """
    match = BILL_TEXT_KEY_RE.fullmatch(key)
    if match is None:
        return None
    return BillKeyComponents(**match.groupdict())


def version_metadata_key(key: str) -> str:
    """``data.json`` in the same directory as the text document."""
    return posixpath.join(posixpath.dirname(key), METADATA_FILENAME)


def bill_metadata_key(key: str) -> str:
    """``data.json`` in the bill directory, two levels above the version directory."""
    version_dir = posixpath.dirname(key)
    bill_dir = posixpath.dirname(posixpath.dirname(version_dir))
    return posixpath.join(bill_dir, METADATA_FILENAME)
