"""Backup and restore of the whole store."""

import logging
from datetime import datetime
from typing import Any, Optional

from legendarios.database.base import Database
from legendarios.domain.entities import Snapshot
from legendarios.domain.errors import MalformedSnapshotError
from legendarios.domain.snapshot import snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)


class BackupService:
    """Service for exporting and restoring full snapshots."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def take_snapshot(self) -> Snapshot:
        """Copy the three collections as they are now."""
        return Snapshot(
            members=tuple(self.db.list_members()),
            dues_payments=tuple(self.db.list_dues_payments()),
            transactions=tuple(self.db.list_transactions()),
        )

    def export_snapshot(self, exported_at: Optional[datetime] = None) -> dict[str, Any]:
        """Build the backup document for the current store contents."""
        snapshot = self.take_snapshot()
        logger.info(
            "Exporting %d members, %d dues payments, %d transactions",
            len(snapshot.members),
            len(snapshot.dues_payments),
            len(snapshot.transactions),
        )
        return snapshot_to_dict(snapshot, exported_at)

    def restore(self, data: Any) -> Snapshot:
        """Replace the store with a backup document.

        Raises:
            MalformedSnapshotError: If the document is invalid; the store is
                left untouched
        """
        snapshot = snapshot_from_dict(data)
        self.db.replace_all(snapshot.members, snapshot.dues_payments, snapshot.transactions)
        logger.info(
            "Restored %d members, %d dues payments, %d transactions",
            len(snapshot.members),
            len(snapshot.dues_payments),
            len(snapshot.transactions),
        )
        return snapshot

    def restore_snapshot(self, data: Any) -> bool:
        """Replace the store with a backup document, reporting success.

        Returns:
            True when restored, False when the document was rejected
        """
        try:
            self.restore(data)
        except MalformedSnapshotError as e:
            logger.warning("Backup rejected: %s", e)
            return False
        return True
