"""Path resolution and per-platform path normalization."""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class Os(str, Enum):
    """Operating systems the host may run on."""

    MAC = "mac"
    LINUX = "linux"
    WINDOWS = "windows"


def current_platform() -> Os:
    """Return the operating system of the running interpreter."""
    if sys.platform.startswith("win"):
        return Os.WINDOWS
    if sys.platform == "darwin":
        return Os.MAC
    return Os.LINUX


def sanitize_windows_path(
    path: Union[str, Path],
    platform: Optional[Os] = None,
) -> str:
    """Remove the leading ``/`` from a path on Windows.

    Paths handed over by a sandboxed host look like ``/C:/work/tool.phar``
    on Windows, which no Windows process accepts. On macOS and Linux this
    is a no-op.

    Examples:
        >>> sanitize_windows_path("/C:/proj/phpactor.phar", Os.WINDOWS)
        'C:/proj/phpactor.phar'

        >>> sanitize_windows_path("/proj/phpactor.phar", Os.LINUX)
        '/proj/phpactor.phar'
    """
    platform = platform or current_platform()
    text = str(path)
    if platform == Os.WINDOWS:
        return text.lstrip("/")
    return text


def absolute_path(path: Union[str, Path]) -> Path:
    """Canonicalize a path, falling back to joining it onto the cwd.

    The fallback covers paths that cannot be canonicalized (dangling
    symlinks, missing parents on some hosts).
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return Path(os.getcwd()) / path


def resolve_workspace_path(
    path: Union[str, Path],
    project_root: Union[str, Path],
) -> Path:
    """Resolve a path relative to the project workspace.

    Absolute paths are returned as-is; relative paths are joined onto
    ``project_root``.

    Examples:
        >>> resolve_workspace_path("vendor/bin/psalm", "/project")
        PosixPath('/project/vendor/bin/psalm')
    """
    path_obj = Path(path).expanduser()
    if path_obj.is_absolute():
        return path_obj
    return Path(project_root) / path_obj
