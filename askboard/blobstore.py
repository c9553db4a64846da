"""
Replica handles: whole-document GET/PUT against a remote JSON blob endpoint,
plus an in-memory double for tests and local runs.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Optional, Protocol

import requests

class BlobStoreError(Exception):
    """A replica could not be read or written."""


class BlobStore(Protocol):
    """The only operations the backing medium exposes."""

    def read(self) -> list:
        ...

    def write(self, document: list) -> None:
        ...


def _as_document(payload) -> list:
    # Anything other than a JSON array is treated as an empty board.
    return payload if isinstance(payload, list) else []


@dataclass
class InMemoryBlobStore:
    """Test double for a single replica."""

    document: list = field(default_factory=list)
    fail_reads: bool = False
    fail_writes: bool = False
    reads: int = 0
    writes: int = 0

    def read(self) -> list:
        self.reads += 1
        if self.fail_reads:
            raise BlobStoreError("in-memory replica read disabled")
        return _as_document(copy.deepcopy(self.document))

    def write(self, document: list) -> None:
        self.writes += 1
        if self.fail_writes:
            raise BlobStoreError("in-memory replica write disabled")
        # Round-trip through JSON to mimic what a real PUT would persist.
        self.document = json.loads(json.dumps(document, default=str))


class HttpBlobStore:
    """
    Replica backed by a JSON blob URL (e.g. jsonblob.com).

    GET returns the document; PUT unconditionally replaces it. There is no
    versioning or authentication on either call.
    """

    def __init__(
        self,
        url: str,
        timeout: float,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def __repr__(self) -> str:
        return f"HttpBlobStore({self.url!r})"

    def read(self) -> list:
        try:
            response = self.session.get(
                self.url,
                headers={"Cache-Control": "no-store"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise BlobStoreError(f"read from {self.url} failed: {exc}") from exc
        return _as_document(payload)

    def write(self, document: list) -> None:
        try:
            response = self.session.put(
                self.url,
                data=json.dumps(document),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise BlobStoreError(f"write to {self.url} failed: {exc}") from exc
