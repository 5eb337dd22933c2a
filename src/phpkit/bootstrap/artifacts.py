"""Versioned on-disk cache of downloaded tool artifacts.

Layout, stable across runs::

    <work_dir>/<tool>/<tool>_<version>/   extracted archive contents
"""

from __future__ import annotations

import gzip
import logging
import os
import re
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import List, Optional, Tuple, Union

import httpx

from ..errors import DownloadError
from .releases import ArchiveKind, ReleaseArtifact

logger = logging.getLogger(__name__)


def version_key(version: str) -> Tuple[Tuple[int, ...], str]:
    """Sort key comparing dotted versions numerically.

    ``v1.10.0`` sorts above ``1.9.2``; the raw string breaks ties.
    """
    return tuple(int(part) for part in re.findall(r"\d+", version)), version


class ArtifactCache:
    """Map a (tool, version) pair to an extracted local directory.

    Args:
        work_dir: Root directory holding one directory per tool
        client: Optional httpx client used for downloads
    """

    def __init__(
        self,
        work_dir: Union[str, Path],
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.work_dir = Path(work_dir)
        self._client = client

    def tool_dir(self, tool: str) -> Path:
        return self.work_dir / tool

    def version_dir(self, tool: str, version: str) -> Path:
        return self.tool_dir(tool) / f"{tool}_{version}"

    def is_cached(self, tool: str, version: str) -> bool:
        return self.version_dir(tool, version).is_dir()

    def installed_versions(self, tool: str) -> List[str]:
        """Versions with a complete directory for ``tool``, in no order."""
        prefix = f"{tool}_"
        try:
            entries = list(self.tool_dir(tool).iterdir())
        except OSError:
            return []

        return [
            entry.name[len(prefix):]
            for entry in entries
            if entry.is_dir() and entry.name.startswith(prefix) and entry.name != prefix
        ]

    def highest_version(self, tool: str) -> Optional[str]:
        versions = self.installed_versions(tool)
        if not versions:
            return None
        return max(versions, key=version_key)

    def fetch(self, tool: str, artifact: ReleaseArtifact) -> Path:
        """Return the directory for ``artifact``, downloading it on a miss.

        The archive is downloaded and extracted into a staging directory
        first. Only once that succeeded is the rest of the tool's directory
        cleared and the staging directory renamed into place, so a failed
        download leaves previously installed versions untouched. A failed
        download is not retried here.

        Raises:
            DownloadError: If downloading or extracting fails
        """
        target = self.version_dir(tool, artifact.version)
        if target.is_dir():
            logger.debug("%s %s already cached at %s", tool, artifact.version, target)
            return target

        tool_dir = self.tool_dir(tool)
        staging = tool_dir / f".{target.name}.partial"
        try:
            tool_dir.mkdir(parents=True, exist_ok=True)
            # leftover of an interrupted attempt
            shutil.rmtree(staging, ignore_errors=True)
            fd, archive_name = tempfile.mkstemp(dir=tool_dir, prefix=".download-")
        except OSError as e:
            raise DownloadError(f"Failed to create directory: {e}") from e

        logger.info("Downloading %s %s from %s", tool, artifact.version, artifact.download_url)
        archive = Path(archive_name)
        try:
            with os.fdopen(fd, "wb") as f:
                self._download(artifact.download_url, f)
            staging.mkdir()
            self._extract(archive, staging, artifact)
            self._clear_tool_dir(tool_dir, keep=(staging.name, archive.name))
            staging.rename(target)
        except (httpx.HTTPError, OSError, zipfile.BadZipFile, tarfile.TarError) as e:
            shutil.rmtree(staging, ignore_errors=True)
            raise DownloadError(
                f"failed to download {artifact.asset_name} {artifact.version}: {e}"
            ) from e
        finally:
            archive.unlink(missing_ok=True)

        return target

    @staticmethod
    def _clear_tool_dir(tool_dir: Path, keep: Tuple[str, ...]) -> None:
        """Remove every entry of ``tool_dir`` not named in ``keep``."""
        for entry in tool_dir.iterdir():
            if entry.name in keep:
                continue
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

    def _download(self, url: str, out) -> None:
        if self._client is not None:
            self._stream(self._client, url, out)
            return
        with httpx.Client(follow_redirects=True, timeout=None) as client:
            self._stream(client, url, out)

    @staticmethod
    def _stream(client: httpx.Client, url: str, out) -> None:
        with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()
            for chunk in response.iter_bytes():
                out.write(chunk)

    @staticmethod
    def _extract(archive: Path, dest: Path, artifact: ReleaseArtifact) -> None:
        kind = artifact.archive_kind
        if kind == ArchiveKind.ZIP:
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(dest)
        elif kind == ArchiveKind.GZIP_TAR:
            with tarfile.open(archive, "r:gz") as tf:
                if hasattr(tarfile, "data_filter"):
                    tf.extractall(dest, filter="data")
                else:
                    tf.extractall(dest)
        elif kind == ArchiveKind.GZIP:
            name = artifact.asset_name[:-3] if artifact.asset_name.endswith(".gz") else artifact.asset_name
            with gzip.open(archive, "rb") as src, open(dest / name, "wb") as dst:
                shutil.copyfileobj(src, dst)
        else:
            shutil.copyfile(archive, dest / artifact.asset_name)
