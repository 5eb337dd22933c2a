"""Declarative specifications of the supported PHP language servers.

This is DATA, not code. To add a language server, add its ToolSpec here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional


@dataclass(frozen=True)
class ToolSpec:
    """How to find and launch one language server."""

    tool_id: str
    display_name: str  # used in not-found messages
    install_hint: str
    path_candidates: List[str]  # looked up on the workspace PATH, in order
    vendor_candidates: List[str] = field(default_factory=list)  # project-relative
    mode_flag: Optional[str] = None  # turns a generic CLI into a server
    transport_args: List[str] = field(default_factory=list)
    interpreter: Optional[str] = None
    interpreter_policy: Literal["never", "windows", "always"] = "never"
    settings_section: Optional[str] = None  # key of the workspace configuration
    project_config_file: Optional[str] = None
    project_config_key: Optional[str] = None

    def is_dedicated_server(self, candidate: str) -> bool:
        """Dedicated server binaries carry "language-server" in their name."""
        return "language-server" in candidate.replace("\\", "/").rsplit("/", 1)[-1]

    def mode_args(self, candidate: str) -> List[str]:
        if self.mode_flag is None or self.is_dedicated_server(candidate):
            return []
        return [self.mode_flag]


INTELEPHENSE = ToolSpec(
    tool_id="intelephense",
    display_name="intelephense",
    install_hint="npm install -g intelephense",
    path_candidates=["intelephense"],
    vendor_candidates=["node_modules/.bin/intelephense"],
    transport_args=["--stdio"],
    settings_section="intelephense",
)

PHPACTOR = ToolSpec(
    tool_id="phpactor",
    display_name="phpactor",
    install_hint="composer require --dev phpactor/phpactor",
    path_candidates=["phpactor"],
    vendor_candidates=["vendor/bin/phpactor"],
    mode_flag="language-server",
    # .phar files are not executable on Windows
    interpreter="php",
    interpreter_policy="windows",
)

PSALM = ToolSpec(
    tool_id="psalm",
    display_name="psalm-language-server",
    install_hint="composer require --dev vimeo/psalm",
    path_candidates=["psalm-language-server", "psalm"],
    vendor_candidates=["vendor/bin/psalm-language-server", "vendor/bin/psalm"],
    mode_flag="--language-server",
    interpreter="php",
    interpreter_policy="always",
    settings_section="psalm",
    project_config_file="psalm.xml",
    project_config_key="configPaths",
)

TOOL_SPECS: Dict[str, ToolSpec] = {
    spec.tool_id: spec for spec in (INTELEPHENSE, PHPACTOR, PSALM)
}
