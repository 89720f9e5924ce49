"""Free TCP port negotiation for the dev server and the static server.

A port is considered free when a fresh TCP socket can bind it. The probe
socket is closed immediately; nothing is reserved, so the port is only a
lease for the invocation that asked for it.
"""

from __future__ import annotations

import errno
import socket
from dataclasses import dataclass
from typing import Any

from vulx.core.result import Err, Ok, Result

__all__ = ["MAX_PORT", "PortError", "find_free_port", "port_in_use"]

MAX_PORT = 65535

_IN_USE = {errno.EADDRINUSE, errno.EACCES}
_UNAVAILABLE = {errno.EADDRNOTAVAIL, errno.EAFNOSUPPORT}


@dataclass(frozen=True, slots=True)
class PortError:
    """No port could be allocated."""

    preferred: int
    message: str
    hint: str | None = None


def _bind_addresses(host: str, port: int) -> list[tuple[socket.AddressFamily, tuple[Any, ...]]]:
    """One bind address per IP family that ``host`` resolves to."""
    addresses: dict[socket.AddressFamily, tuple[Any, ...]] = {}
    for family, _, _, _, sockaddr in socket.getaddrinfo(host, port, type=socket.SOCK_STREAM):
        if family in (socket.AF_INET, socket.AF_INET6):
            addresses.setdefault(family, sockaddr)
    return list(addresses.items())


def _bind(family: socket.AddressFamily, sockaddr: tuple[Any, ...]) -> None:
    with socket.socket(family, socket.SOCK_STREAM) as s:
        s.bind(sockaddr)


def port_in_use(port: int, host: str = "localhost") -> bool:
    """Return True if ``port`` cannot be bound on ``host``.

    Every family the host resolves to is probed, so a server listening on
    ``[::1]`` is seen even when ``127.0.0.1`` is free. A family the machine
    cannot bind (no IPv6 stack, ...) is skipped as long as another one was
    probed.

    Raises:
        OSError: The host does not resolve or no family could be probed.
    """
    unavailable: OSError | None = None
    probed = False
    for family, sockaddr in _bind_addresses(host, port):
        try:
            _bind(family, sockaddr)
        except OSError as e:
            if e.errno in _IN_USE:
                return True
            if e.errno in _UNAVAILABLE:
                unavailable = e
                continue
            raise
        probed = True
    if not probed and unavailable is not None:
        raise unavailable
    return False


def find_free_port(
    preferred: int = 3000,
    *,
    host: str = "localhost",
    max_attempts: int = 100,
) -> Result[int, PortError]:
    """Return ``preferred`` if free, else the next free port above it.

    Args:
        preferred: First candidate.
        host: Interface the delegated server will listen on.
        max_attempts: Number of candidates to probe before giving up.

    Returns:
        Ok(port) or Err(PortError) when every candidate is taken, the host is
        unusable, or ``preferred`` is not a valid port.
    """
    if not 1 <= preferred <= MAX_PORT:
        return Err(PortError(preferred, f"invalid port: {preferred}"))

    last = min(preferred + max(max_attempts, 1) - 1, MAX_PORT)

    for candidate in range(preferred, last + 1):
        try:
            if not port_in_use(candidate, host):
                return Ok(candidate)
        except OSError as e:
            return Err(
                PortError(
                    preferred,
                    f"cannot probe {host}:{candidate}: {e.strerror or e}",
                    hint="check server.host in vulx.toml",
                )
            )

    if preferred < 1024:
        hint = "ports below 1024 need elevated rights; change server.port"
    else:
        hint = "free a port or raise server.max_attempts"
    return Err(
        PortError(
            preferred,
            f"no free port on {host} in range {preferred}-{last}",
            hint=hint,
        )
    )
