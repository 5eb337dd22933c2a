"""Read-only view of a project the host hands to every call."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional, Protocol, Union

from .config import LspSettings, PhpkitConfig, RuntimeConfig, load_config


class Workspace(Protocol):
    """What the resolvers need from the host's project handle."""

    def root_path(self) -> str:
        ...

    def which(self, name: str) -> Optional[str]:
        """Search the workspace's effective PATH for an executable."""
        ...

    def lsp_settings(self, tool_id: str) -> LspSettings:
        """User-declared settings for a tool; may raise if unreadable."""
        ...

    def runtime_settings(self) -> RuntimeConfig:
        ...


class ProjectWorkspace:
    """Workspace backed by a directory and its ``.phpkit.toml``.

    Args:
        project_path: Root directory of the project
        path_env: PATH to search, defaults to the current process PATH
        config: Preloaded configuration, loaded from disk when omitted
    """

    def __init__(
        self,
        project_path: Union[str, Path],
        path_env: Optional[str] = None,
        config: Optional[PhpkitConfig] = None,
    ) -> None:
        self.project_path = Path(project_path).resolve()
        self.path_env = path_env if path_env is not None else os.environ.get("PATH", "")
        self._config = config

    @property
    def config(self) -> PhpkitConfig:
        if self._config is None:
            self._config = load_config(self.project_path)
        return self._config

    def root_path(self) -> str:
        return str(self.project_path)

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name, path=self.path_env)

    def lsp_settings(self, tool_id: str) -> LspSettings:
        return self.config.lsp_settings(tool_id)

    def runtime_settings(self) -> RuntimeConfig:
        runtime = self.config.runtime
        return RuntimeConfig(
            php_path=self.config.resolve_path(runtime.php_path) if runtime.php_path else None,
            node_path=self.config.resolve_path(runtime.node_path) if runtime.node_path else None,
        )

    def __repr__(self) -> str:
        return f"<ProjectWorkspace {self.project_path}>"
