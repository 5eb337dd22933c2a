"""MCP Server for phpkit.

Exposes tool resolution and debug adapter setup as MCP tools using FastMCP,
so an editor or agent can ask how to launch PHP tooling for a project.
"""

from __future__ import annotations

import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server import FastMCP

from .extension import PhpExtension
from .language_servers import TOOL_SPECS
from .models import DebugConfig, DebugTaskDefinition, LaunchRequest, TcpArgumentsTemplate
from .worktree import ProjectWorkspace

# Global extension instance and project path
_extension: Optional[PhpExtension] = None
_project_path: Optional[str] = None

mcp = FastMCP("phpkit")


def set_project_path(path: str) -> None:
    """Set the project path tools resolve against."""
    global _project_path
    _project_path = str(Path(path).resolve())


def get_project_path() -> str:
    """Get the current project path."""
    return _project_path or os.getenv("PHPKIT_PROJECT_PATH") or os.getcwd()


def get_extension() -> PhpExtension:
    """Get or create the extension instance."""
    global _extension
    if _extension is None:
        _extension = PhpExtension()
    return _extension


def get_workspace() -> ProjectWorkspace:
    return ProjectWorkspace(get_project_path())


def _to_dict(obj: Any) -> Any:
    """Convert dataclass objects to dictionaries for JSON serialization."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    elif isinstance(obj, (list, tuple)):
        return [_to_dict(item) for item in obj]
    elif isinstance(obj, dict):
        return {k: _to_dict(v) for k, v in obj.items()}
    return obj


# ============================================================================
# Language Servers
# ============================================================================


@mcp.tool()
async def language_server_command(tool_id: str) -> Dict[str, Any]:
    """Resolve the command that launches a PHP language server.

    Args:
        tool_id: One of "intelephense", "phpactor", "psalm"

    Returns:
        command, args and env to spawn, plus the strategy that found it
        ("path", "vendor" or "settings")
    """
    command = get_extension().language_server_command(tool_id, get_workspace())
    return _to_dict(command)


@mcp.tool()
async def language_server_workspace_configuration(tool_id: str) -> Optional[Dict[str, Any]]:
    """Get the workspace configuration payload for a language server.

    Args:
        tool_id: One of "intelephense", "phpactor", "psalm"

    Returns:
        The payload, or null if the server takes no configuration
    """
    return get_extension().language_server_workspace_configuration(tool_id, get_workspace())


# ============================================================================
# Debugging
# ============================================================================


@mcp.tool()
async def debug_scenario(
    program: str,
    cwd: str | None = None,
    args: List[str] | None = None,
    env: Dict[str, str] | None = None,
    stop_on_entry: bool = False,
    label: str | None = None,
) -> Dict[str, Any]:
    """Translate a launch request into an Xdebug debug scenario.

    Args:
        program: PHP script to debug
        cwd: Working directory for the script
        args: Command-line arguments for the script
        env: Environment variables for the script
        stop_on_entry: Whether to stop at the first line
        label: Display name of the scenario, defaults to the program
    """
    config = DebugConfig(
        label=label or program,
        adapter="Xdebug",
        request=LaunchRequest(program=program, cwd=cwd, args=args or [], envs=env or {}),
        stop_on_entry=stop_on_entry,
    )
    return _to_dict(get_extension().dap_config_to_scenario(config))


@mcp.tool()
async def debug_adapter_binary(
    config: str,
    host: str | None = None,
    port: int | None = None,
    timeout: int | None = None,
    adapter_path: str | None = None,
) -> Dict[str, Any]:
    """Resolve how to start the Xdebug adapter, downloading it on first use.

    Args:
        config: JSON launch configuration, must contain "request": "launch"
        host: Host the adapter listens on (default 127.0.0.1)
        port: Port the adapter listens on (default: a free port)
        timeout: Connection timeout in milliseconds (default 2000)
        adapter_path: Use an already extracted adapter instead of downloading
    """
    definition = DebugTaskDefinition(
        label="Xdebug",
        adapter="Xdebug",
        config=config,
        tcp_connection=TcpArgumentsTemplate(host=host, port=port, timeout=timeout),
    )
    binary = get_extension().get_dap_binary("Xdebug", definition, adapter_path, get_workspace())
    return _to_dict(binary)


# ============================================================================
# Configuration
# ============================================================================


@mcp.tool()
async def get_phpkit_config() -> Dict[str, Any]:
    """Show the project, the known language servers and downloaded adapters."""
    extension = get_extension()
    return {
        "project_path": get_project_path(),
        "work_dir": str(extension.work_dir),
        "language_servers": sorted(TOOL_SPECS),
        "xdebug": {
            "current_version": extension.xdebug.current_version.version,
            "installed": {v: str(p) for v, p in extension.xdebug.installed_versions().items()},
        },
    }


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Run the MCP server.

    The project path can be set via:
    1. The first command-line argument
    2. PHPKIT_PROJECT_PATH environment variable
    3. Current working directory (default)
    """
    # Allow setting project path from command line argument
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        set_project_path(sys.argv[1])
        # Remove the argument so FastMCP doesn't see it
        sys.argv = [sys.argv[0]] + sys.argv[2:]

    project_path = get_project_path()

    # Print server info to stderr (stdout is used for MCP protocol)
    print("🚀 Starting phpkit MCP Server", file=sys.stderr)
    print(f"📂 Path: {project_path}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
