from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

__all__ = [
    "AttachRequest",
    "Completion",
    "CompletionKind",
    "DebugConfig",
    "DebugRequest",
    "DebugTaskDefinition",
    "LaunchRequest",
    "TcpArgumentsTemplate",
]


# Debug requests
@dataclass
class LaunchRequest:
    program: str
    cwd: Optional[str] = None
    args: List[str] = field(default_factory=list)
    envs: Dict[str, str] = field(default_factory=dict)


@dataclass
class AttachRequest:
    process_id: Optional[int] = None


DebugRequest = Union[LaunchRequest, AttachRequest]


@dataclass
class DebugConfig:
    """Generic, adapter-independent debug request coming from the host."""

    label: str
    adapter: str
    request: DebugRequest
    stop_on_entry: Optional[bool] = None


@dataclass
class TcpArgumentsTemplate:
    """Partially specified TCP rendezvous; unset fields get defaults."""

    host: Optional[str] = None
    port: Optional[int] = None
    timeout: Optional[int] = None  # milliseconds


@dataclass
class DebugTaskDefinition:
    label: str
    adapter: str
    config: str  # JSON-encoded adapter configuration
    tcp_connection: Optional[TcpArgumentsTemplate] = None


# Completions
class CompletionKind(str, Enum):
    """LSP completion item kinds used for label rendering."""

    METHOD = "method"
    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    FIELD = "field"
    VARIABLE = "variable"
    CLASS = "class"
    INTERFACE = "interface"
    MODULE = "module"
    PROPERTY = "property"
    CONSTANT = "constant"
    ENUM_MEMBER = "enum_member"
    KEYWORD = "keyword"


@dataclass
class Completion:
    label: str
    kind: Optional[CompletionKind] = None
    detail: Optional[str] = None
