"""Concrete socket providers: TLS and plain TCP.

SSLSocketProvider is what the shim normally wraps. Enumeration targets
almost always present self-signed certificates, so the default context
skips certificate and hostname checks entirely. Pass your own
ssl.SSLContext to change that.

PlainSocketProvider covers endpoints that speak the protocol without
TLS. Same interface, so the same redirect decorator works over it.

Both providers are stateless after __init__ and safe to share across
worker threads. Every failure from the socket or ssl module propagates
to the caller; a half-open TCP socket is closed before re-raising a
handshake failure.
"""
from __future__ import annotations

import socket
import ssl

from loopback_shim.domain.types import CipherSuite, HostName, Port
from loopback_shim.net.provider import SocketProvider

# OpenSSL cipher string that enables every cipher the library knows about.
_ALL_CIPHERS = "ALL:COMPLEMENTOFALL"


def insecure_context() -> ssl.SSLContext:
    """TLS client context that accepts any server certificate."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _connect(
    host: str,
    port: Port,
    timeout: float | None,
    source_address: tuple[str, int] | None = None,
) -> socket.socket:
    return socket.create_connection(
        (host, port), timeout=timeout, source_address=source_address
    )


class PlainSocketProvider(SocketProvider):
    """Unencrypted TCP sockets.

    Args:
        timeout: Connect (and subsequent I/O) timeout in seconds.
            None blocks indefinitely.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def create_unconnected_socket(self, server_hostname: HostName | None = None) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        return sock

    def create_socket(self, host: HostName, port: Port) -> socket.socket:
        return _connect(host, port, self._timeout)

    def create_socket_from_address(self, address: str, port: Port) -> socket.socket:
        return _connect(str(address), port, self._timeout)

    def create_socket_bound(
        self, host: HostName, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        return _connect(host, port, self._timeout, (str(local_address), local_port))

    def create_socket_from_address_bound(
        self, address: str, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        return _connect(
            str(address), port, self._timeout, (str(local_address), local_port)
        )

    def wrap_socket(
        self, sock: socket.socket, host: HostName, port: Port, autoclose: bool = True
    ) -> socket.socket:
        """No transport to add: hand back the socket (or a dup of it)."""
        return sock if autoclose else sock.dup()

    def default_cipher_suites(self) -> list[CipherSuite]:
        return []

    def supported_cipher_suites(self) -> list[CipherSuite]:
        return []


class SSLSocketProvider(SocketProvider):
    """TLS client sockets built from one shared SSLContext.

    Args:
        context: Context used for every socket. Defaults to
            insecure_context().
        timeout: Connect (and subsequent I/O) timeout in seconds.
    """

    def __init__(
        self,
        context: ssl.SSLContext | None = None,
        timeout: float | None = None,
    ) -> None:
        self._context = context or insecure_context()
        self._timeout = timeout

    @property
    def context(self) -> ssl.SSLContext:
        return self._context

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def create_unconnected_socket(self, server_hostname: HostName | None = None) -> socket.socket:
        """TLS socket that handshakes when the caller connects it.

        A context with check_hostname set needs the peer name up front,
        since connect() runs the handshake before the caller sees a host.

        Raises:
            ValueError: context checks hostnames and server_hostname is None.
        """
        if server_hostname is None and self._context.check_hostname:
            raise ValueError(
                "SSL context checks hostnames: pass server_hostname for an unconnected socket"
            )
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        return self._context.wrap_socket(
            sock, server_hostname=server_hostname, do_handshake_on_connect=True
        )

    def create_socket(self, host: HostName, port: Port) -> socket.socket:
        return self._handshake(_connect(host, port, self._timeout), host)

    def create_socket_from_address(self, address: str, port: Port) -> socket.socket:
        return self._handshake(_connect(str(address), port, self._timeout), str(address))

    def create_socket_bound(
        self, host: HostName, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        raw = _connect(host, port, self._timeout, (str(local_address), local_port))
        return self._handshake(raw, host)

    def create_socket_from_address_bound(
        self, address: str, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        raw = _connect(
            str(address), port, self._timeout, (str(local_address), local_port)
        )
        return self._handshake(raw, str(address))

    def wrap_socket(
        self, sock: socket.socket, host: HostName, port: Port, autoclose: bool = True
    ) -> socket.socket:
        """Upgrade a connected socket to TLS.

        SSLContext.wrap_socket takes over the descriptor it is given, so
        with autoclose=False a duplicate is wrapped instead and closing
        the TLS socket leaves sock open. port is accepted for interface
        parity; the handshake only needs host (for SNI).
        """
        target = sock if autoclose else sock.dup()
        return self._handshake(target, host)

    def default_cipher_suites(self) -> list[CipherSuite]:
        return [c["name"] for c in self._context.get_ciphers()]

    def supported_cipher_suites(self) -> list[CipherSuite]:
        probe = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        probe.set_ciphers(_ALL_CIPHERS)
        return [c["name"] for c in probe.get_ciphers()]

    def _handshake(self, raw: socket.socket, server_hostname: str | None) -> ssl.SSLSocket:
        try:
            return self._context.wrap_socket(raw, server_hostname=server_hostname)
        except BaseException:
            raw.close()
            raise
