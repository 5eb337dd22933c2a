"""Utility modules (platform detection, path handling)."""

from .path import (
    Os,
    absolute_path,
    current_platform,
    resolve_workspace_path,
    sanitize_windows_path,
)

__all__ = [
    "Os",
    "absolute_path",
    "current_platform",
    "resolve_workspace_path",
    "sanitize_windows_path",
]
