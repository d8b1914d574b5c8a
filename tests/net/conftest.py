"""Fixtures for socket provider tests.

Provides a recording fake provider (no network) and a policy spy.
The loopback listener fixtures live in tests/conftest.py.
"""
from __future__ import annotations

import threading

import pytest

from loopback_shim.domain.redirect_policy import RedirectPolicy
from loopback_shim.net.provider import SocketProvider


class FakeSocket:
    """Stands in for a socket returned by the fake provider."""

    def __init__(self, call: tuple) -> None:
        self.call = call
        self.closed = False

    def close(self) -> None:
        self.closed = True


class RecordingProvider(SocketProvider):
    """Records every call and returns a FakeSocket tagged with it.

    Set fail_with to an exception instance to make every operation
    raise it. Returned sockets are kept in `returned`, in call order.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.returned: list[FakeSocket] = []
        self.fail_with: BaseException | None = None
        self.default_suites = ["TLS_AES_128_GCM_SHA256"]
        self.supported_suites = ["TLS_AES_128_GCM_SHA256", "TLS_AES_256_GCM_SHA384"]
        self._lock = threading.Lock()

    def _record(self, *call):
        if self.fail_with is not None:
            raise self.fail_with
        sock = FakeSocket(call)
        with self._lock:
            self.calls.append(call)
            self.returned.append(sock)
        return sock

    def create_unconnected_socket(self, server_hostname=None):
        return self._record("create_unconnected_socket", server_hostname)

    def create_socket(self, host, port):
        return self._record("create_socket", host, port)

    def create_socket_from_address(self, address, port):
        return self._record("create_socket_from_address", address, port)

    def create_socket_bound(self, host, port, local_address, local_port):
        return self._record("create_socket_bound", host, port, local_address, local_port)

    def create_socket_from_address_bound(self, address, port, local_address, local_port):
        return self._record(
            "create_socket_from_address_bound", address, port, local_address, local_port
        )

    def wrap_socket(self, sock, host, port, autoclose=True):
        return self._record("wrap_socket", sock, host, port, autoclose)

    def default_cipher_suites(self):
        if self.fail_with is not None:
            raise self.fail_with
        return self.default_suites

    def supported_cipher_suites(self):
        if self.fail_with is not None:
            raise self.fail_with
        return self.supported_suites


class SpyPolicy(RedirectPolicy):
    """RedirectPolicy that counts resolve() calls."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.resolve_calls = 0

    def resolve(self, requested_host):
        self.resolve_calls += 1
        return super().resolve(requested_host)


@pytest.fixture()
def recording_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture()
def notices() -> list[str]:
    """List that collects notice lines; pass notices.append as the sink."""
    return []


@pytest.fixture()
def make_spy_policy():
    """Factory for SpyPolicy instances: make_spy_policy(host, follow_redirect=False)."""
    return SpyPolicy
