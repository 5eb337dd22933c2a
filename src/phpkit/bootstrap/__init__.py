"""Bootstrap utilities: release lookup, artifact cache, install status."""

from .artifacts import ArtifactCache, version_key
from .releases import (
    ArchiveKind,
    GithubRelease,
    GithubReleaseAsset,
    ReleaseArtifact,
    ReleaseResolver,
)
from .status import InstallationStatus, StatusReporter, log_status

__all__ = [
    # Releases
    "ArchiveKind",
    "GithubRelease",
    "GithubReleaseAsset",
    "ReleaseArtifact",
    "ReleaseResolver",
    # Cache
    "ArtifactCache",
    "version_key",
    # Status
    "InstallationStatus",
    "StatusReporter",
    "log_status",
]
