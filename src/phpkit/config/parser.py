"""Configuration file parser for phpkit."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

# Load environment variables from .env file if present
load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".phpkit.toml"


@dataclass
class BinarySettings:
    """User override for a tool's executable."""

    path: Optional[str] = None
    arguments: Optional[List[str]] = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class LspSettings:
    """Tool-scoped settings, as declared by the user."""

    binary: Optional[BinarySettings] = None
    settings: Optional[Dict[str, Any]] = None
    initialization_options: Optional[Dict[str, Any]] = None


@dataclass
class RuntimeConfig:
    """Explicit interpreter locations."""

    php_path: Optional[str] = None
    node_path: Optional[str] = None


@dataclass
class DAPConfig:
    """Debug adapter download configuration."""

    work_dir: Optional[str] = None
    github_token_env: str = "GITHUB_TOKEN"


@dataclass
class PhpkitConfig:
    """Complete phpkit configuration."""

    lsp: Dict[str, LspSettings] = field(default_factory=dict)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    dap: DAPConfig = field(default_factory=DAPConfig)

    # Project root for resolving paths
    project_root: Path = field(default_factory=Path.cwd)

    def lsp_settings(self, tool_id: str) -> LspSettings:
        """Settings for a tool, empty when the user declared none."""
        return self.lsp.get(tool_id) or LspSettings()

    def resolve_path(self, path_template: str) -> str:
        """Resolve template variables in paths.

        Supports:
            ${PROJECT_ROOT} - absolute path to project root
            ~ - the user's home directory
        """
        result = path_template.replace("${PROJECT_ROOT}", str(self.project_root))
        return os.path.expanduser(result)

    def work_dir(self) -> Path:
        """Directory holding downloaded debug adapters.

        Priority: ``[dap] work_dir``, then ``PHPKIT_WORK_DIR``, then
        ``~/.cache/phpkit``.
        """
        if self.dap.work_dir:
            return Path(self.resolve_path(self.dap.work_dir))
        env_dir = os.getenv("PHPKIT_WORK_DIR")
        if env_dir:
            return Path(env_dir).expanduser()
        return Path.home() / ".cache" / "phpkit"

    def github_token(self) -> Optional[str]:
        return os.getenv(self.dap.github_token_env) or None


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find .phpkit.toml in project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to .phpkit.toml if found, None otherwise
    """
    config_file = Path(project_path) / CONFIG_FILE_NAME
    if config_file.is_file():
        return config_file
    return None


def _as_dict(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _parse_binary(value: Any) -> Optional[BinarySettings]:
    data = _as_dict(value)
    if data is None:
        return None

    path = data.get("path")
    arguments = data.get("arguments")
    env = _as_dict(data.get("env")) or {}
    return BinarySettings(
        path=path if isinstance(path, str) else None,
        arguments=[str(arg) for arg in arguments] if isinstance(arguments, list) else None,
        env={str(k): str(v) for k, v in env.items()},
    )


def parse_lsp_settings(data: Any) -> LspSettings:
    """Build LspSettings from a loosely typed mapping.

    Keys with the wrong type are dropped instead of raising, so a
    half-broken section still yields whatever is usable.
    """
    section = _as_dict(data)
    if section is None:
        return LspSettings()

    return LspSettings(
        binary=_parse_binary(section.get("binary")),
        settings=_as_dict(section.get("settings")),
        initialization_options=_as_dict(section.get("initialization_options")),
    )


def load_config(project_path: Path) -> PhpkitConfig:
    """Load configuration from .phpkit.toml or use defaults.

    Args:
        project_path: Root path of the project

    Returns:
        PhpkitConfig with loaded or default configuration
    """
    config = PhpkitConfig(project_root=Path(project_path))

    config_file = find_config_file(Path(project_path))
    if not config_file:
        return config

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # If TOML parsing fails, return defaults
        logger.warning("Ignoring unreadable %s: %s", config_file, e)
        return config

    # [lsp.<tool>] sections
    lsp_section = _as_dict(data.get("lsp")) or {}
    for tool_id, tool_data in lsp_section.items():
        config.lsp[tool_id] = parse_lsp_settings(tool_data)

    runtime_data = _as_dict(data.get("runtime")) or {}
    config.runtime.php_path = runtime_data.get("php_path")
    config.runtime.node_path = runtime_data.get("node_path")

    dap_data = _as_dict(data.get("dap")) or {}
    config.dap.work_dir = dap_data.get("work_dir")
    config.dap.github_token_env = dap_data.get("github_token_env", "GITHUB_TOKEN")

    return config
