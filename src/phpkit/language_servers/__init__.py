"""Language server resolution: specs, strategies, workspace configuration."""

from .configuration import build_workspace_configuration, initialization_options
from .labels import label_for_completion
from .resolver import ToolResolver
from .specs import INTELEPHENSE, PHPACTOR, PSALM, TOOL_SPECS, ToolSpec

__all__ = [
    "INTELEPHENSE",
    "PHPACTOR",
    "PSALM",
    "TOOL_SPECS",
    "ToolResolver",
    "ToolSpec",
    "build_workspace_configuration",
    "initialization_options",
    "label_for_completion",
]
