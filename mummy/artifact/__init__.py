"""
Artifact model: artifacts, directory artifacts and their descriptions.
"""

from mummy.artifact.description import Description, DescriptionState
from mummy.artifact.models import Artifact, DirectoryArtifact, iter_artifacts

__all__ = [
    "Artifact",
    "DirectoryArtifact",
    "Description",
    "DescriptionState",
    "iter_artifacts",
]
