"""Xdebug debug adapter: version lifecycle and launch configuration.

The adapter is the ``vscode-php-debug`` extension, downloaded from its
GitHub releases and run with Node.js.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..bootstrap.artifacts import ArtifactCache
from ..bootstrap.releases import ArchiveKind, ReleaseArtifact, ReleaseResolver
from ..bootstrap.status import InstallationStatus, StatusReporter, log_status
from ..errors import DownloadError, InvalidInputError, ReleaseLookupError, RemoteFailure
from ..models import (
    AttachRequest,
    DebugAdapterBinary,
    DebugConfig,
    DebugScenario,
    DebugTaskDefinition,
    StartDebuggingRequestArguments,
)
from ..runtime import RuntimeResolver
from ..utils.path import Os, current_platform, sanitize_windows_path
from .tcp import resolve_tcp_template

logger = logging.getLogger(__name__)


class AdapterVersionState:
    """Set-once cell holding the adapter version this process uses.

    Two producers may commit: a successful release query, or the scan of
    already-downloaded versions. Whichever commits first wins; later
    commits are no-ops, so there is no mid-session upgrade.
    """

    def __init__(self) -> None:
        self._version: Optional[str] = None

    @property
    def version(self) -> Optional[str]:
        return self._version

    @property
    def is_resolved(self) -> bool:
        return self._version is not None

    def commit(self, version: str) -> bool:
        """Record ``version`` if unset. Returns whether it was recorded."""
        if self._version is not None:
            return False
        self._version = version
        return True


class XDebug:
    NAME = "Xdebug"
    ADAPTER_PATH = "extension/out/phpDebug.js"
    REPOSITORY = "xdebug/vscode-php-debug"
    ASSET_TEMPLATE = "php-debug-{version}.vsix"

    def __init__(
        self,
        cache: ArtifactCache,
        releases: ReleaseResolver,
        reporter: StatusReporter = log_status,
        platform: Optional[Os] = None,
    ) -> None:
        self.cache = cache
        self.releases = releases
        self.reporter = reporter
        self.platform = platform or current_platform()
        self.current_version = AdapterVersionState()

    # Request classification and translation

    def dap_request_kind(self, config: Any) -> str:
        """Classify a configuration; this adapter only launches.

        Raises:
            InvalidInputError: If the request is not ``launch``
        """
        if isinstance(config, dict) and config.get("request") == "launch":
            return "launch"
        raise InvalidInputError("Invalid config")

    def dap_config_to_scenario(self, config: DebugConfig) -> DebugScenario:
        """Translate a generic debug request into the adapter's configuration.

        Raises:
            InvalidInputError: For attach requests
        """
        request = config.request
        if isinstance(request, AttachRequest):
            raise InvalidInputError("Php adapter doesn't support attaching")

        obj = {
            "program": request.program,
            "cwd": request.cwd,
            "args": list(request.args),
            "env": {str(k): str(v) for k, v in request.envs.items()},
            "stopOnEntry": bool(config.stop_on_entry),
        }

        return DebugScenario(
            adapter=config.adapter,
            label=config.label,
            build=None,
            config=json.dumps(obj),
            tcp_connection=None,
        )

    # Version lifecycle

    def fetch_latest_adapter_version(self) -> ReleaseArtifact:
        return self.releases.resolve(
            self.REPOSITORY, self.ASSET_TEMPLATE, ArchiveKind.ZIP
        )

    def ensure_version(self) -> Optional[str]:
        """Commit an adapter version on first use and return it.

        Tries the latest release first (downloading it if needed). If the
        release index is unreachable, falls back to the highest version
        already downloaded. Returns None when neither source has one.

        Raises:
            DownloadError: If the download failed and nothing is installed
        """
        if self.current_version.is_resolved:
            return self.current_version.version

        self.reporter(self.NAME, InstallationStatus.CHECKING_FOR_UPDATE, None)
        try:
            artifact = self.fetch_latest_adapter_version()
        except ReleaseLookupError as e:
            logger.warning("Could not check for %s updates: %s", self.NAME, e)
            self._commit_installed()
        else:
            try:
                if not self.cache.is_cached(self.NAME, artifact.version):
                    self.reporter(self.NAME, InstallationStatus.DOWNLOADING, None)
                self.cache.fetch(self.NAME, artifact)
            except DownloadError as e:
                self.reporter(self.NAME, InstallationStatus.FAILED, str(e))
                if not self._commit_installed():
                    raise
            else:
                self.current_version.commit(artifact.version)
                logger.info("Using %s %s", self.NAME, artifact.version)

        self.reporter(self.NAME, InstallationStatus.NONE, None)
        return self.current_version.version

    def _commit_installed(self) -> bool:
        """Just find the highest version we currently have."""
        version = self.cache.highest_version(self.NAME)
        if version is None:
            return False
        self.current_version.commit(version)
        logger.info("Using already installed %s %s", self.NAME, version)
        return True

    # Launch

    def get_binary(
        self,
        task_definition: DebugTaskDefinition,
        user_provided_debug_adapter_path: Optional[str],
        workspace,
    ) -> DebugAdapterBinary:
        # an empty override means "no override"
        user_provided_debug_adapter_path = user_provided_debug_adapter_path or None
        if user_provided_debug_adapter_path is None:
            self.ensure_version()
        return self._get_installed_binary(
            task_definition, user_provided_debug_adapter_path, workspace
        )

    def _get_installed_binary(
        self,
        task_definition: DebugTaskDefinition,
        user_provided_debug_adapter_path: Optional[str],
        workspace,
    ) -> DebugAdapterBinary:
        if user_provided_debug_adapter_path:
            adapter_path = Path(user_provided_debug_adapter_path)
        else:
            version = self.current_version.version
            if version is None:
                raise RemoteFailure(f"no installed version of {self.NAME} found")
            adapter_path = self.cache.version_dir(self.NAME, version)

        connection = resolve_tcp_template(task_definition.tcp_connection)

        try:
            configuration = json.loads(task_definition.config)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Invalid JSON configuration: {e}") from e
        if isinstance(configuration, dict):
            configuration.setdefault("cwd", workspace.root_path())

        request = self.dap_request_kind(configuration)
        node = RuntimeResolver(workspace).resolve_runtime("node").path

        return DebugAdapterBinary(
            command=node,
            arguments=[
                sanitize_windows_path(adapter_path / self.ADAPTER_PATH, self.platform),
                f"--server={connection.port}",
            ],
            connection=connection,
            cwd=workspace.root_path(),
            envs={},
            request_args=StartDebuggingRequestArguments(
                request=request,
                configuration=json.dumps(configuration),
            ),
        )

    def installed_versions(self) -> Dict[str, Path]:
        """Downloaded versions and where they live."""
        return {
            version: self.cache.version_dir(self.NAME, version)
            for version in self.cache.installed_versions(self.NAME)
        }
