"""Declarative runtime specifications for the interpreters tools need.

This is DATA, not code. To support another interpreter, add its spec here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Union


@dataclass(frozen=True)
class NvmDetection:
    """NVM (Node Version Manager) detection strategy."""
    type: Literal["nvm"] = "nvm"
    version_file: str = ".nvmrc"
    path_template: str = "~/.nvm/versions/node/v{version}/bin/node"
    priority: int = 10


@dataclass(frozen=True)
class ProjectBinaryDetection:
    """Interpreter shipped inside the project (e.g. a bundled PHP)."""
    type: Literal["project_binary"] = "project_binary"
    patterns: List[str] = field(default_factory=list)
    priority: int = 5


AutoDetectStrategy = Union[NvmDetection, ProjectBinaryDetection]


@dataclass(frozen=True)
class RuntimeSpec:
    """Complete specification for one interpreter."""
    display_name: str
    executable_name: str
    config_key: str
    auto_detect: List[AutoDetectStrategy]
    system_commands: List[str]


RUNTIME_SPECS: Dict[str, RuntimeSpec] = {
    "php": RuntimeSpec(
        display_name="PHP",
        executable_name="php",
        config_key="php_path",
        auto_detect=[],
        system_commands=["php"],
    ),
    "node": RuntimeSpec(
        display_name="node",
        executable_name="node",
        config_key="node_path",
        auto_detect=[
            NvmDetection(
                version_file=".nvmrc",
                path_template="~/.nvm/versions/node/v{version}/bin/node",
                priority=10,
            ),
            ProjectBinaryDetection(
                patterns=["node_modules/.bin/node"],
                priority=5,
            ),
        ],
        system_commands=["node"],
    ),
}


def get_runtime_spec(runtime: str) -> RuntimeSpec:
    """Get the spec for an interpreter.

    Raises:
        ValueError: If the runtime is not supported
    """
    if runtime not in RUNTIME_SPECS:
        supported = ", ".join(RUNTIME_SPECS.keys())
        raise ValueError(
            f"Runtime '{runtime}' not supported. "
            f"Supported runtimes: {supported}"
        )

    return RUNTIME_SPECS[runtime]
