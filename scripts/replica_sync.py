"""
Inspect the two board replicas and, when needed, copy one over the other.

Read-repair only ever heals the primary, so a backup that missed writes stays
stale until someone runs `copy --from primary`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from askboard.blobstore import BlobStoreError
from askboard.config import get_settings
from askboard.dependencies import build_document_store
from askboard.replication import ReplicatedDocumentStore

logger = logging.getLogger(__name__)


def run_status(store: ReplicatedDocumentStore) -> int:
    report = store.status()
    print(json.dumps(report, indent=2))
    return 0 if report["in_sync"] else 1


def run_copy(store: ReplicatedDocumentStore, source: str) -> int:
    replicas = {"primary": store.primary, "backup": store.backup}
    target = "backup" if source == "primary" else "primary"
    try:
        document = replicas[source].read()
    except BlobStoreError as exc:
        logger.error("Could not read %s replica: %s", source, exc)
        return 1
    try:
        replicas[target].write(document)
    except BlobStoreError as exc:
        logger.error("Could not write %s replica: %s", target, exc)
        return 1
    logger.info("Copied %d records from %s to %s", len(document), source, target)
    return 0


def main(argv: list[str] | None = None, store: ReplicatedDocumentStore | None = None) -> int:
    parser = argparse.ArgumentParser(description="Question board replica maintenance")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("status", help="Compare the two replicas (default)")
    copy_parser = subparsers.add_parser(
        "copy", help="Overwrite one replica with the contents of the other"
    )
    copy_parser.add_argument(
        "--from",
        dest="source",
        choices=["primary", "backup"],
        required=True,
        help="Replica to copy from",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    owns_store = store is None
    store = store or build_document_store(get_settings())
    try:
        if args.command == "copy":
            return run_copy(store, args.source)
        return run_status(store)
    finally:
        if owns_store:
            store.close()


if __name__ == "__main__":
    raise SystemExit(main())
