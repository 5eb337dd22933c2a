"""Workspace configuration payloads sent to running language servers."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .specs import ToolSpec

logger = logging.getLogger(__name__)


def _user_settings(spec: ToolSpec, workspace) -> Dict[str, Any]:
    """The tool's declared settings, or an empty object.

    Absent or unreadable settings never fail the call.
    """
    try:
        settings = workspace.lsp_settings(spec.tool_id).settings
    except Exception as e:
        logger.debug("Could not read settings for %s: %s", spec.tool_id, e)
        return {}

    if not isinstance(settings, dict):
        return {}
    return copy.deepcopy(settings)


def build_workspace_configuration(spec: ToolSpec, workspace) -> Optional[Dict[str, Any]]:
    """Build the ``workspace/configuration`` payload for a tool.

    When the project carries the tool's configuration file (e.g.
    ``psalm.xml``) its absolute path is injected so the server uses it
    instead of discovering one on its own. Only file metadata is read.

    Returns:
        ``{<section>: settings}``, or None if the tool takes no configuration
    """
    if spec.settings_section is None:
        return None

    settings = _user_settings(spec, workspace)

    if spec.project_config_file and spec.project_config_key:
        config_path = Path(workspace.root_path()) / spec.project_config_file
        if config_path.is_file():
            settings[spec.project_config_key] = [str(config_path)]

    return {spec.settings_section: settings}


def initialization_options(spec: ToolSpec, workspace) -> Optional[Dict[str, Any]]:
    """The tool's declared initialization options, if any."""
    try:
        options = workspace.lsp_settings(spec.tool_id).initialization_options
    except Exception as e:
        logger.debug("Could not read settings for %s: %s", spec.tool_id, e)
        return None

    return copy.deepcopy(options) if isinstance(options, dict) else None
