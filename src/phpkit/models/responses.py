from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

__all__ = [
    "CodeLabel",
    "CodeLabelSpan",
    "CommandSpec",
    "DebugAdapterBinary",
    "DebugScenario",
    "StartDebuggingRequestArguments",
    "TcpArguments",
]


# Language servers
@dataclass(frozen=True)
class CommandSpec:
    """A resolved invocation the host spawns exactly once."""

    command: str
    args: Tuple[str, ...] = ()
    env: Dict[str, str] = field(default_factory=dict)
    source: str = ""  # name of the strategy that produced it


@dataclass
class CodeLabelSpan:
    text: str
    highlight: Optional[str] = None


@dataclass
class CodeLabel:
    spans: List[CodeLabelSpan]
    filter_range: Tuple[int, int]  # half-open range over the rendered text
    code: str = ""

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


# Debugging
@dataclass(frozen=True)
class TcpArguments:
    host: str
    port: int
    timeout: int  # milliseconds


@dataclass
class DebugScenario:
    adapter: str
    label: str
    config: str  # JSON-encoded adapter configuration
    build: Optional[str] = None
    tcp_connection: Optional[TcpArguments] = None


@dataclass
class StartDebuggingRequestArguments:
    request: Literal["launch", "attach"]
    configuration: str


@dataclass
class DebugAdapterBinary:
    command: str
    arguments: List[str]
    request_args: StartDebuggingRequestArguments
    connection: Optional[TcpArguments] = None
    cwd: Optional[str] = None
    envs: Dict[str, str] = field(default_factory=dict)
