"""Generic interpreter resolver."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import MissingRuntimeError
from ..utils.path import resolve_workspace_path
from .specs import AutoDetectStrategy, RuntimeSpec, get_runtime_spec
from .types import RuntimeInfo

logger = logging.getLogger(__name__)


class RuntimeResolver:
    """Resolve the interpreter a tool must be launched with.

    Interpreters are located, never executed.
    """

    def __init__(self, workspace) -> None:
        """Initialize resolver.

        Args:
            workspace: The Workspace the tool is resolved for
        """
        self.workspace = workspace
        self.project_path = Path(workspace.root_path())

    def resolve_runtime(self, runtime: str) -> RuntimeInfo:
        """Resolve an interpreter.

        Priority:
        1. Explicit path from ``[runtime]`` in .phpkit.toml
        2. Auto-detection using the runtime's rules
        3. The workspace PATH

        Raises:
            MissingRuntimeError: If the interpreter cannot be found
        """
        spec = get_runtime_spec(runtime)

        info = self._check_explicit_config(runtime, spec)
        if info:
            return info

        info = self._auto_detect(runtime, spec)
        if info:
            return info

        info = self._path_lookup(runtime, spec)
        if info:
            return info

        raise MissingRuntimeError(
            f"{spec.display_name} not found in PATH", runtime=runtime
        )

    def _check_explicit_config(
        self,
        runtime: str,
        spec: RuntimeSpec,
    ) -> Optional[RuntimeInfo]:
        runtime_settings = self.workspace.runtime_settings()
        configured_path = getattr(runtime_settings, spec.config_key, None)
        if not configured_path:
            return None

        path = resolve_workspace_path(configured_path, self.project_path)
        if not path.is_file():
            logger.warning(
                "Configured %s %s does not exist, ignoring", spec.config_key, path
            )
            return None

        return RuntimeInfo(runtime=runtime, path=str(path), source="explicit_config")

    def _auto_detect(
        self,
        runtime: str,
        spec: RuntimeSpec,
    ) -> Optional[RuntimeInfo]:
        sorted_rules = sorted(spec.auto_detect, key=lambda r: r.priority, reverse=True)

        for rule in sorted_rules:
            detected = self._apply_detection_rule(runtime, rule)
            if detected:
                return detected

        return None

    def _apply_detection_rule(
        self,
        runtime: str,
        rule: AutoDetectStrategy,
    ) -> Optional[RuntimeInfo]:
        if rule.type == "nvm":
            return self._detect_nvm(runtime, rule)
        elif rule.type == "project_binary":
            return self._detect_project_binary(runtime, rule)

        return None

    def _detect_nvm(self, runtime: str, rule) -> Optional[RuntimeInfo]:
        """Detect Node version from .nvmrc."""
        version_file = self.project_path / rule.version_file
        if not version_file.is_file():
            return None

        version = version_file.read_text().strip().lstrip("v")
        if not version:
            return None

        path = Path(rule.path_template.replace("{version}", version)).expanduser()
        if not path.is_file():
            return None

        return RuntimeInfo(runtime=runtime, path=str(path), source="auto_detect_nvm")

    def _detect_project_binary(self, runtime: str, rule) -> Optional[RuntimeInfo]:
        for pattern in rule.patterns:
            local_path = self.project_path / pattern
            if local_path.is_file():
                return RuntimeInfo(
                    runtime=runtime,
                    path=str(local_path),
                    source="auto_detect_local",
                )

        return None

    def _path_lookup(
        self,
        runtime: str,
        spec: RuntimeSpec,
    ) -> Optional[RuntimeInfo]:
        for cmd in spec.system_commands:
            path = self.workspace.which(cmd)
            if path:
                return RuntimeInfo(runtime=runtime, path=path, source="path")

        return None
