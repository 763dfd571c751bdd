"""
Artifact Store — the capture side of the gallery.

A capture reads whatever register is published at that moment; there is
no link between an artifact and the job that produced its bits beyond
"most recent at capture time".

Every capture/purge is persisted to Postgres when a db layer is attached.
If the DB is unavailable the store stays in-memory only (with a warning).
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from types import ModuleType

from features.artifacts.models import Artifact
from features.events import EventLog, LogCategory
from features.jobs.models import BitRegister
from features.jobs.weight import derive_weight

log = logging.getLogger(__name__)


class ArtifactStore:
    def __init__(self, events: EventLog, db: ModuleType | None = None):
        self.events = events
        self.db = db
        self._artifacts: list[Artifact] = []

    def load(self) -> int:
        """Restore previously archived artifacts from the DB."""
        if self.db is None:
            return 0
        try:
            rows = self.db.list_artifacts()
        except Exception as e:
            log.warning("Could not load artifacts from DB: %s", e)
            return 0
        self._artifacts = [
            Artifact(
                id=row["id"],
                image_data=row["image_data"],
                mode=row["mode"],
                bits=row["bits"],
                weight=float(row["weight"]),
                timestamp=row["captured_at"],
            )
            for row in rows
        ]
        log.info("Loaded %d archived artifacts", len(self._artifacts))
        return len(self._artifacts)

    def capture(self, image_data: str, mode: str, register: BitRegister) -> Artifact:
        artifact = Artifact(
            id=f"art-{uuid.uuid4().hex[:8]}",
            image_data=image_data,
            mode=mode,
            bits=str(register),
            weight=derive_weight(register),
            timestamp=datetime.now().strftime("%H:%M:%S"),
        )
        self._artifacts.insert(0, artifact)
        self.events.record(LogCategory.SYS, f"Registry locked to archive: {artifact.bits}")

        if self.db is not None:
            try:
                self.db.insert_artifact(artifact.to_dict())
            except Exception as e:
                log.warning("Failed to persist artifact %s to DB: %s", artifact.id, e)
        return artifact

    def purge(self, artifact_id: str) -> bool:
        before = len(self._artifacts)
        self._artifacts = [a for a in self._artifacts if a.id != artifact_id]
        removed = len(self._artifacts) < before

        if self.db is not None:
            try:
                removed = self.db.delete_artifact(artifact_id) or removed
            except Exception as e:
                log.warning("Failed to delete artifact %s from DB: %s", artifact_id, e)
        if removed:
            self.events.record(LogCategory.SYS, f"Artifact purged: {artifact_id}")
        return removed

    def get(self, artifact_id: str) -> Artifact | None:
        return next((a for a in self._artifacts if a.id == artifact_id), None)

    def list(self) -> list[Artifact]:
        return list(self._artifacts)
