"""
Replicated document store over a primary and a backup blob endpoint.

Reads prefer the primary and fall back to the backup, healing the primary in
the background when they do. Writes go to both replicas concurrently and
succeed when at least one replica accepts the document.
"""

from __future__ import annotations

import concurrent.futures
import copy
import logging

from askboard.blobstore import BlobStore, BlobStoreError
from askboard.errors import ReadFailure, WriteFailure

logger = logging.getLogger(__name__)


class ReplicatedDocumentStore:
    def __init__(self, primary: BlobStore, backup: BlobStore):
        self.primary = primary
        self.backup = backup
        # One worker per replica: writes to the same replica (heals included)
        # run in submission order, writes to different replicas in parallel.
        self._lanes = {
            name: concurrent.futures.ThreadPoolExecutor(
                max_workers=1, thread_name_prefix=f"askboard-{name}"
            )
            for name in ("primary", "backup")
        }

    def _replicas(self) -> dict[str, BlobStore]:
        return {"primary": self.primary, "backup": self.backup}

    def read(self) -> list:
        try:
            return self.primary.read()
        except BlobStoreError as exc:
            logger.warning("Primary read failed, falling back to backup: %s", exc)

        try:
            document = self.backup.read()
        except BlobStoreError as exc:
            logger.error("Backup read failed as well: %s", exc)
            raise ReadFailure(message="both replicas unreadable") from exc

        logger.info("Healing primary from backup (%d records)", len(document))
        try:
            self._lanes["primary"].submit(self._heal_primary, copy.deepcopy(document))
        except RuntimeError as exc:
            # Store already closed.
            logger.warning("Could not schedule primary heal: %s", exc)
        return document

    def _heal_primary(self, document: list) -> None:
        # Detached from the request; a failed heal is left for the next read.
        try:
            self.primary.write(document)
        except Exception as exc:
            logger.warning("Healing primary failed: %s", exc)

    def write(self, document: list) -> None:
        futures = {
            name: self._lanes[name].submit(replica.write, document)
            for name, replica in self._replicas().items()
        }
        concurrent.futures.wait(futures.values())

        accepted = []
        for name, future in futures.items():
            exc = future.exception()
            if exc is None:
                accepted.append(name)
            else:
                logger.warning("Write to %s replica failed: %s", name, exc)

        if not accepted:
            logger.error("Write rejected by both replicas")
            raise WriteFailure(message="both replicas rejected the write")

    def status(self) -> dict:
        """
        Probe both replicas without repairing anything.

        Returns per-replica reachability and record counts, and whether the two
        copies are identical (False when either side is unreachable).
        """
        report: dict = {}
        documents = {}
        for name, replica in self._replicas().items():
            try:
                documents[name] = replica.read()
            except BlobStoreError as exc:
                report[name] = {"reachable": False, "records": None, "error": str(exc)}
                continue
            report[name] = {"reachable": True, "records": len(documents[name])}
        report["in_sync"] = (
            len(documents) == 2 and documents["primary"] == documents["backup"]
        )
        return report

    def close(self) -> None:
        """Wait for queued replica writes (pending heals included) and stop."""
        for lane in self._lanes.values():
            lane.shutdown(wait=True)
