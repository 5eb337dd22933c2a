"""Debug adapter support (Xdebug)."""

from .tcp import resolve_tcp_template
from .xdebug import AdapterVersionState, XDebug

__all__ = [
    "AdapterVersionState",
    "XDebug",
    "resolve_tcp_template",
]
