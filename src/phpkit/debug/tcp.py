"""TCP rendezvous negotiation between the editor and a debug adapter."""

from __future__ import annotations

import socket
from typing import Optional

from ..models import TcpArguments, TcpArgumentsTemplate

DEFAULT_HOST = "127.0.0.1"
DEFAULT_TIMEOUT_MS = 2000


def find_free_port(host: str = DEFAULT_HOST) -> int:
    """Ask the OS for an unused port on ``host``."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


def resolve_tcp_template(template: Optional[TcpArgumentsTemplate]) -> TcpArguments:
    """Fill the unset fields of a TCP template with defaults.

    Host defaults to localhost, port to a free ephemeral port and the
    timeout to two seconds.
    """
    template = template or TcpArgumentsTemplate()
    host = template.host or DEFAULT_HOST
    port = template.port if template.port is not None else find_free_port(host)
    timeout = template.timeout if template.timeout is not None else DEFAULT_TIMEOUT_MS
    return TcpArguments(host=host, port=port, timeout=timeout)
