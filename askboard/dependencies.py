"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends

from askboard.blobstore import BlobStore, HttpBlobStore, InMemoryBlobStore
from askboard.config import Settings, get_settings
from askboard.records import QuestionBoard
from askboard.replication import ReplicatedDocumentStore

logger = logging.getLogger(__name__)

_document_store: ReplicatedDocumentStore | None = None


def build_replica(url: Optional[str], settings: Settings) -> BlobStore:
    if settings.use_in_memory_backends or not url:
        return InMemoryBlobStore()
    return HttpBlobStore(url, timeout=settings.store_timeout_seconds)


def build_document_store(settings: Settings) -> ReplicatedDocumentStore:
    primary = build_replica(settings.primary_store_url, settings)
    backup = build_replica(settings.backup_store_url, settings)
    logger.info("Replicas: primary=%r backup=%r", primary, backup)
    return ReplicatedDocumentStore(primary, backup)


def get_document_store() -> ReplicatedDocumentStore:
    """
    Return a singleton store so in-memory replicas persist across requests.
    """
    global _document_store
    if _document_store:
        return _document_store

    _document_store = build_document_store(get_settings())
    return _document_store


def reset_document_store() -> None:
    global _document_store
    if _document_store:
        _document_store.close()
    _document_store = None


def get_board(
    store: ReplicatedDocumentStore = Depends(get_document_store),
) -> QuestionBoard:
    return QuestionBoard(store)
