"""Error types raised while resolving tools and debug adapters."""

from __future__ import annotations

from typing import Optional


class PhpkitError(Exception):
    """Base class for every error surfaced to the host."""


class ToolNotFoundError(PhpkitError):
    """Raised when no resolution strategy produced a command for a tool."""

    def __init__(self, tool_id: str, install_hint: str):
        self.tool_id = tool_id
        self.install_hint = install_hint
        super().__init__(
            f"{tool_id} not found. Please install it with: {install_hint}"
        )


class InvalidInputError(PhpkitError, ValueError):
    """Raised for malformed configuration or unsupported requests."""


class MissingRuntimeError(PhpkitError):
    """Raised when a required interpreter is not available."""

    def __init__(self, message: str, runtime: Optional[str] = None):
        self.runtime = runtime
        super().__init__(message)


class RemoteFailure(PhpkitError):
    """Raised when the release index or a download cannot be reached."""


class ReleaseLookupError(RemoteFailure):
    """Raised when the latest release or its asset cannot be determined."""


class DownloadError(RemoteFailure):
    """Raised when downloading or extracting an artifact fails."""
