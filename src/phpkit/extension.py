from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from .bootstrap import ArtifactCache, ReleaseResolver, StatusReporter, log_status
from .config import PhpkitConfig
from .debug import XDebug
from .errors import InvalidInputError
from .language_servers import (
    INTELEPHENSE,
    TOOL_SPECS,
    ToolResolver,
    build_workspace_configuration,
    initialization_options,
    label_for_completion,
)
from .models import (
    CodeLabel,
    CommandSpec,
    Completion,
    DebugAdapterBinary,
    DebugConfig,
    DebugScenario,
    DebugTaskDefinition,
)
from .utils.path import Os


class PhpExtension:
    """Facade the host calls, dispatching by tool identity.

    Holds one ToolResolver per language server, created on first use,
    and the Xdebug adapter whose version is settled once per process.

    Args:
        work_dir: Where debug adapters are downloaded to
        reporter: Host status channel, receives (tool_id, status, message)
        http_client: Optional httpx client for release lookups and downloads
        github_token: Optional token for the GitHub release index
        platform: Override the detected operating system
    """

    def __init__(
        self,
        work_dir: Optional[Union[str, Path]] = None,
        reporter: StatusReporter = log_status,
        http_client: Optional[httpx.Client] = None,
        github_token: Optional[str] = None,
        platform: Optional[Os] = None,
    ) -> None:
        defaults = PhpkitConfig()
        self.work_dir = Path(work_dir) if work_dir else defaults.work_dir()
        self.reporter = reporter
        self.http_client = http_client
        self.github_token = github_token or defaults.github_token()
        self.platform = platform

        self._language_servers: Dict[str, ToolResolver] = {}
        self._xdebug: Optional[XDebug] = None

    # Language servers

    def _language_server(self, tool_id: str) -> ToolResolver:
        resolver = self._language_servers.get(tool_id)
        if resolver is None:
            spec = TOOL_SPECS.get(tool_id)
            if spec is None:
                raise InvalidInputError(f"unknown language server: {tool_id}")
            resolver = ToolResolver(spec, reporter=self.reporter, platform=self.platform)
            self._language_servers[tool_id] = resolver
        return resolver

    def language_server_command(self, tool_id: str, workspace) -> CommandSpec:
        return self._language_server(tool_id).language_server_command(workspace)

    def language_server_workspace_configuration(
        self, tool_id: str, workspace
    ) -> Optional[Dict[str, Any]]:
        if tool_id not in TOOL_SPECS:
            return None
        return build_workspace_configuration(self._language_server(tool_id).spec, workspace)

    def language_server_initialization_options(
        self, tool_id: str, workspace
    ) -> Optional[Dict[str, Any]]:
        if tool_id not in TOOL_SPECS:
            return None
        return initialization_options(self._language_server(tool_id).spec, workspace)

    def label_for_completion(self, tool_id: str, completion: Completion) -> Optional[CodeLabel]:
        if tool_id == INTELEPHENSE.tool_id:
            return label_for_completion(completion)
        return None

    # Debug adapters

    @property
    def xdebug(self) -> XDebug:
        if self._xdebug is None:
            self._xdebug = XDebug(
                cache=ArtifactCache(self.work_dir, client=self.http_client),
                releases=ReleaseResolver(client=self.http_client, token=self.github_token),
                reporter=self.reporter,
                platform=self.platform,
            )
        return self._xdebug

    def _debug_adapter(self, adapter_name: str) -> XDebug:
        if adapter_name != XDebug.NAME:
            raise InvalidInputError(f"unknown debug adapter: {adapter_name}")
        return self.xdebug

    def dap_request_kind(self, adapter_name: str, config: Union[str, Dict[str, Any]]) -> str:
        adapter = self._debug_adapter(adapter_name)
        if isinstance(config, str):
            try:
                config = json.loads(config)
            except ValueError as e:
                raise InvalidInputError(f"Invalid JSON configuration: {e}") from e
        return adapter.dap_request_kind(config)

    def dap_config_to_scenario(self, config: DebugConfig) -> DebugScenario:
        return self._debug_adapter(config.adapter).dap_config_to_scenario(config)

    def get_dap_binary(
        self,
        adapter_name: str,
        task_definition: DebugTaskDefinition,
        user_provided_debug_adapter_path: Optional[str],
        workspace,
    ) -> DebugAdapterBinary:
        return self._debug_adapter(adapter_name).get_binary(
            task_definition, user_provided_debug_adapter_path, workspace
        )
