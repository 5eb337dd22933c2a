"""Test doubles for the host-owned workspace and the release index.

The fake workspace keeps an explicit name -> path table instead of
searching a real PATH, so tests control exactly what is installed.
"""

import io
import json
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from phpkit.config import LspSettings, RuntimeConfig, parse_lsp_settings


def make_executable(path: Path, content: str = "#!/bin/sh\n") -> str:
    """Create an executable file and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(0o755)
    return str(path)


class FakeWorkspace:
    """In-memory Workspace used by the resolver tests."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.executables: Dict[str, str] = {}
        self.settings: Dict[str, Any] = {}
        self.runtime = RuntimeConfig()
        self.settings_error: Optional[Exception] = None
        self.which_calls: List[str] = []

    def add_executable(self, name: str, path: str) -> None:
        self.executables[name] = path

    def root_path(self) -> str:
        return str(self.root)

    def which(self, name: str) -> Optional[str]:
        self.which_calls.append(name)
        return self.executables.get(name)

    def lsp_settings(self, tool_id: str) -> LspSettings:
        if self.settings_error is not None:
            raise self.settings_error
        return parse_lsp_settings(self.settings.get(tool_id))

    def runtime_settings(self) -> RuntimeConfig:
        return self.runtime


def release_listing(*releases: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Build a GitHub releases payload, newest first."""
    return list(releases)


def release(tag: str, assets: List[str], prerelease: bool = False) -> Dict[str, Any]:
    return {
        "tag_name": tag,
        "prerelease": prerelease,
        "draft": False,
        "assets": [
            {"name": name, "browser_download_url": f"https://example.test/{tag}/{name}"}
            for name in assets
        ],
    }


def vsix_bytes(files: Optional[Dict[str, str]] = None) -> bytes:
    """A minimal .vsix (zip) archive containing the adapter script."""
    files = files or {"extension/out/phpDebug.js": "// adapter\n"}
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


class FakeReleaseIndex:
    """httpx transport serving a release listing and asset downloads."""

    def __init__(
        self,
        releases: List[Dict[str, Any]],
        archive: Optional[bytes] = None,
        fail_listing: bool = False,
        fail_download: bool = False,
    ) -> None:
        self.releases = releases
        self.archive = archive if archive is not None else vsix_bytes()
        self.fail_listing = fail_listing
        self.fail_download = fail_download
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/releases"):
            if self.fail_listing:
                raise httpx.ConnectError("network unreachable", request=request)
            return httpx.Response(200, content=json.dumps(self.releases).encode())
        if self.fail_download:
            return httpx.Response(500, content=b"boom")
        return httpx.Response(200, content=self.archive)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def download_count(self) -> int:
        return sum(1 for r in self.requests if not r.url.path.endswith("/releases"))
