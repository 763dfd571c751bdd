"""
Artifacts feature — captured snapshots bundled with the register and weight
active at capture time.

Public API:
    from features.artifacts import Artifact, ArtifactStore
    from features.artifacts import db as artifact_db
"""

from features.artifacts.models import Artifact
from features.artifacts.store import ArtifactStore

__all__ = ["Artifact", "ArtifactStore"]
