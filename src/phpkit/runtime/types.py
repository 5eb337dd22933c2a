"""Data types for runtime resolution."""

from dataclasses import dataclass


@dataclass
class RuntimeInfo:
    """Information about a resolved interpreter.

    Attributes:
        runtime: Runtime name (e.g., "php", "node")
        path: Path to the interpreter executable
        source: How the runtime was resolved
    """

    runtime: str
    path: str
    source: str  # "explicit_config", "auto_detect_nvm", "path", ...

    def __repr__(self) -> str:
        return f"<RuntimeInfo {self.runtime} @ {self.path} ({self.source})>"
