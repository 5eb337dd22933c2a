"""Interpreter resolution for the runtimes tools are launched with (PHP, Node)."""

from .resolver import RuntimeResolver
from .specs import RUNTIME_SPECS
from .types import RuntimeInfo

__all__ = [
    "RuntimeResolver",
    "RuntimeInfo",
    "RUNTIME_SPECS",
]
