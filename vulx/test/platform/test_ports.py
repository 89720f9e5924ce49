"""Tests for vulx.platform.ports module."""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from vulx.core.result import Err, Ok
from vulx.platform.ports import find_free_port, port_in_use

HOST = "127.0.0.1"


@pytest.fixture
def busy_port() -> Iterator[int]:
    """A port held by a listening socket for the duration of the test."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind((HOST, 0))
    s.listen(1)
    try:
        yield s.getsockname()[1]
    finally:
        s.close()


def _released_port() -> int:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind((HOST, 0))
    port = s.getsockname()[1]
    s.close()
    return port


def test_port_in_use_detects_listener(busy_port: int) -> None:
    assert port_in_use(busy_port, HOST)


def test_free_preferred_port_is_returned_exactly() -> None:
    port = _released_port()

    assert find_free_port(port, host=HOST) == Ok(port)


def test_busy_preferred_port_is_skipped(busy_port: int) -> None:
    result = find_free_port(busy_port, host=HOST)

    assert isinstance(result, Ok)
    assert result.value != busy_port
    assert result.value > busy_port
    assert not port_in_use(result.value, HOST)


def test_exhausted_budget_is_an_error(busy_port: int) -> None:
    result = find_free_port(busy_port, host=HOST, max_attempts=1)

    assert isinstance(result, Err)
    assert result.error.preferred == busy_port
    assert f"{busy_port}-{busy_port}" in result.error.message


def test_probing_stops_at_last_port(monkeypatch: pytest.MonkeyPatch) -> None:
    import vulx.platform.ports as ports

    probed: list[int] = []

    def always_busy(port: int, host: str = "localhost") -> bool:
        probed.append(port)
        return True

    monkeypatch.setattr(ports, "port_in_use", always_busy)

    result = ports.find_free_port(65534, host=HOST, max_attempts=10)

    assert isinstance(result, Err)
    assert probed == [65534, 65535]


@pytest.mark.parametrize("port", [0, -1, 65536])
def test_invalid_preferred_port(port: int) -> None:
    result = find_free_port(port, host=HOST)

    assert isinstance(result, Err)
    assert "invalid port" in result.error.message


def test_unusable_host_fails_immediately(monkeypatch: pytest.MonkeyPatch) -> None:
    import vulx.platform.ports as ports

    calls: list[int] = []

    def broken(port: int, host: str = "localhost") -> bool:
        calls.append(port)
        raise OSError(99, "Cannot assign requested address")

    monkeypatch.setattr(ports, "port_in_use", broken)

    result = ports.find_free_port(3000, host="10.255.255.1")

    assert isinstance(result, Err)
    assert "cannot probe" in result.error.message
    assert calls == [3000]


def _resolves_to(monkeypatch: pytest.MonkeyPatch, *addresses: tuple[int, str]) -> None:
    import vulx.platform.ports as ports

    def fake_getaddrinfo(host: str, port: int, **_: object) -> list[tuple[object, ...]]:
        infos: list[tuple[object, ...]] = []
        for family, address in addresses:
            sockaddr = (address, port) if family == socket.AF_INET else (address, port, 0, 0)
            infos.append((family, socket.SOCK_STREAM, 6, "", sockaddr))
        return infos

    monkeypatch.setattr(ports.socket, "getaddrinfo", fake_getaddrinfo)


@pytest.fixture
def busy_ipv6_port() -> Iterator[int]:
    if not socket.has_ipv6:
        pytest.skip("no IPv6 support")
    s = socket.socket(socket.AF_INET6, socket.SOCK_STREAM)
    try:
        s.bind(("::1", 0))
    except OSError:
        s.close()
        pytest.skip("::1 is not bindable")
    s.listen(1)
    try:
        yield s.getsockname()[1]
    finally:
        s.close()


def test_listener_on_ipv6_loopback_is_detected(
    monkeypatch: pytest.MonkeyPatch, busy_ipv6_port: int
) -> None:
    _resolves_to(monkeypatch, (socket.AF_INET, HOST), (socket.AF_INET6, "::1"))

    assert port_in_use(busy_ipv6_port, "localhost")


def test_unbindable_family_is_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    port = _released_port()
    _resolves_to(monkeypatch, (socket.AF_INET, HOST), (socket.AF_INET6, "2001:db8::1"))

    assert not port_in_use(port, "localhost")


def test_no_bindable_family_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _resolves_to(monkeypatch, (socket.AF_INET6, "2001:db8::1"))

    with pytest.raises(OSError):
        port_in_use(_released_port(), "localhost")
