"""Latest-release lookup against the GitHub release index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from ..errors import ReleaseLookupError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class ArchiveKind(str, Enum):
    """How a downloaded asset is unpacked."""

    ZIP = "zip"
    GZIP = "gzip"
    GZIP_TAR = "tar.gz"
    UNCOMPRESSED = "uncompressed"


@dataclass
class GithubReleaseAsset:
    name: str
    download_url: str


@dataclass
class GithubRelease:
    version: str
    prerelease: bool = False
    assets: List[GithubReleaseAsset] = field(default_factory=list)


@dataclass(frozen=True)
class ReleaseArtifact:
    """The asset picked from the latest release."""

    version: str
    download_url: str
    archive_kind: ArchiveKind
    asset_name: str


class ReleaseResolver:
    """Query the release index of a repository.

    Args:
        client: Optional httpx client, a short-lived one is used otherwise
        token: Optional bearer token, raises the API rate limit
        api_url: Base URL of the GitHub REST API
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        token: Optional[str] = None,
        api_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_json(self, url: str) -> Any:
        try:
            if self._client is not None:
                resp = self._client.get(url, headers=self._headers(), timeout=self.timeout)
                resp.raise_for_status()
                return resp.json()
            with httpx.Client(follow_redirects=True) as client:
                resp = client.get(url, headers=self._headers(), timeout=self.timeout)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as e:
            raise ReleaseLookupError(f"failed to query {url}: {e}") from e
        except ValueError as e:
            raise ReleaseLookupError(f"invalid JSON from {url}: {e}") from e

    def latest_release(
        self,
        repo: str,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> GithubRelease:
        """Return the newest release of ``repo`` passing the filters.

        Releases are listed newest first by the index.

        Raises:
            ReleaseLookupError: On network failure or when nothing matches
        """
        data = self._get_json(f"{self.api_url}/repos/{repo}/releases")
        if not isinstance(data, list):
            raise ReleaseLookupError(f"unexpected release listing for {repo}")

        for entry in data:
            if not isinstance(entry, dict) or entry.get("draft"):
                continue
            if entry.get("prerelease") and not pre_release:
                continue

            assets = [
                GithubReleaseAsset(
                    name=asset.get("name", ""),
                    download_url=asset.get("browser_download_url", ""),
                )
                for asset in entry.get("assets") or []
                if isinstance(asset, dict)
            ]
            if require_assets and not assets:
                continue

            version = entry.get("tag_name")
            if not version:
                continue

            return GithubRelease(
                version=version,
                prerelease=bool(entry.get("prerelease")),
                assets=assets,
            )

        raise ReleaseLookupError(f"no release found for {repo}")

    def resolve(
        self,
        repo: str,
        asset_template: str,
        archive_kind: ArchiveKind,
    ) -> ReleaseArtifact:
        """Pick the asset of the latest stable release matching a template.

        ``asset_template`` is formatted with ``version``, the release tag
        with any leading ``v`` stripped, e.g. ``php-debug-{version}.vsix``.

        Raises:
            ReleaseLookupError: If the release or a matching asset is missing
        """
        release = self.latest_release(repo, require_assets=True, pre_release=False)
        asset_name = asset_template.format(version=release.version.lstrip("v"))

        for asset in release.assets:
            if asset.name == asset_name:
                logger.debug("Latest %s release is %s", repo, release.version)
                return ReleaseArtifact(
                    version=release.version,
                    download_url=asset.download_url,
                    archive_kind=archive_kind,
                    asset_name=asset_name,
                )

        raise ReleaseLookupError(f"no asset found matching {asset_name!r}")
