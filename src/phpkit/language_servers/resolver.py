"""Strategy-based resolution of a language server command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..bootstrap.status import InstallationStatus, StatusReporter, log_status
from ..errors import MissingRuntimeError, ToolNotFoundError
from ..models import CommandSpec
from ..runtime import RuntimeResolver
from ..utils.path import Os, absolute_path, current_platform, resolve_workspace_path, sanitize_windows_path
from .specs import ToolSpec

logger = logging.getLogger(__name__)


class ToolResolver:
    """Find a runnable command for one language server.

    Strategies run in a fixed order and the first one that produces a
    command wins:

    1. ``path``: the workspace PATH, for each candidate name
    2. ``vendor``: project-relative vendor binaries
    3. ``settings``: a command path declared in the tool's settings

    If every strategy abstains the failure is reported to the host and
    ToolNotFoundError is raised.
    """

    STRATEGIES: Tuple[str, ...] = ("path", "vendor", "settings")

    def __init__(
        self,
        spec: ToolSpec,
        reporter: StatusReporter = log_status,
        platform: Optional[Os] = None,
    ) -> None:
        self.spec = spec
        self.reporter = reporter
        self.platform = platform or current_platform()

    def language_server_command(self, workspace) -> CommandSpec:
        """Resolve the command for this tool in ``workspace``.

        Raises:
            MissingRuntimeError: If the required interpreter is not on PATH
            ToolNotFoundError: If no strategy resolved the tool
        """
        interpreter = None
        if self.spec.interpreter_policy == "always":
            interpreter = self._resolve_interpreter(workspace)

        strategies: Dict[str, Callable[..., Optional[CommandSpec]]] = {
            "path": self._from_path,
            "vendor": self._from_vendor,
            "settings": self._from_settings,
        }
        for name in self.STRATEGIES:
            command = strategies[name](workspace, interpreter)
            if command is not None:
                logger.debug("%s resolved by %s strategy: %s", self.spec.tool_id, name, command)
                return command

        message = f"{self.spec.display_name} not found. Install with: {self.spec.install_hint}"
        self.reporter(self.spec.tool_id, InstallationStatus.FAILED, message)
        raise ToolNotFoundError(self.spec.display_name, self.spec.install_hint)

    # Strategies

    def _from_path(self, workspace, interpreter: Optional[str]) -> Optional[CommandSpec]:
        for name in self.spec.path_candidates:
            found = workspace.which(name)
            if found:
                return self._build(workspace, found, name, interpreter, source="path")
        return None

    def _from_vendor(self, workspace, interpreter: Optional[str]) -> Optional[CommandSpec]:
        root = Path(workspace.root_path())
        for relative in self.spec.vendor_candidates:
            candidate = root / relative
            if candidate.is_file():
                return self._build(workspace, str(candidate), relative, interpreter, source="vendor")
            if candidate.exists():
                logger.debug("%s exists but is not a regular file, skipping", candidate)
        return None

    def _from_settings(self, workspace, interpreter: Optional[str]) -> Optional[CommandSpec]:
        try:
            settings = workspace.lsp_settings(self.spec.tool_id)
        except Exception as e:
            logger.debug("Could not read settings for %s: %s", self.spec.tool_id, e)
            return None

        root = workspace.root_path()

        binary = settings.binary
        if binary is not None and binary.path:
            path = resolve_workspace_path(binary.path, root)
            if path.is_file():
                return self._build(
                    workspace,
                    str(path),
                    binary.path,
                    interpreter,
                    source="settings",
                    args=binary.arguments,
                    env=binary.env,
                )

        options = settings.initialization_options or {}
        command = options.get("command")
        if isinstance(command, list) and command and isinstance(command[0], str):
            path = resolve_workspace_path(command[0], root)
            if path.is_file():
                rest = [str(arg) for arg in command[1:]]
                return self._build(
                    workspace,
                    str(path),
                    command[0],
                    interpreter,
                    source="settings",
                    args=rest or None,
                )
        return None

    # Command assembly

    def _build(
        self,
        workspace,
        path: str,
        name: str,
        interpreter: Optional[str],
        source: str,
        args: Optional[Sequence[str]] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandSpec:
        """Turn a found candidate into a CommandSpec.

        Explicit ``args`` replace the mode flag and transport arguments.
        """
        if args is None:
            tail: List[str] = self.spec.mode_args(name) + list(self.spec.transport_args)
        else:
            tail = list(args)

        if interpreter is None and self._needs_interpreter():
            interpreter = self._resolve_interpreter(workspace)

        if interpreter is not None:
            script = sanitize_windows_path(absolute_path(path), self.platform)
            return CommandSpec(
                command=interpreter,
                args=(script, *tail),
                env=dict(env or {}),
                source=source,
            )

        return CommandSpec(command=path, args=tuple(tail), env=dict(env or {}), source=source)

    def _needs_interpreter(self) -> bool:
        if self.spec.interpreter is None:
            return False
        if self.spec.interpreter_policy == "always":
            return True
        return self.spec.interpreter_policy == "windows" and self.platform == Os.WINDOWS

    def _resolve_interpreter(self, workspace) -> str:
        try:
            return RuntimeResolver(workspace).resolve_runtime(self.spec.interpreter).path
        except MissingRuntimeError as e:
            self.reporter(self.spec.tool_id, InstallationStatus.FAILED, str(e))
            raise
