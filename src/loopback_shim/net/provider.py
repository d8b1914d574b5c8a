"""Abstract socket provider.

Everything that hands out client sockets to the protocol layer
implements this interface: the concrete TLS and plain providers, and
the redirecting decorator that sits in front of them. The protocol layer
only ever sees a SocketProvider, so the decorator can be swapped in
without touching calling code.

Six ways to get a socket, two cipher-suite queries. Implementations
raise whatever the socket layer raises (OSError and subclasses,
socket.gaierror, ssl.SSLError); callers handle them.
"""
from __future__ import annotations

import socket
from abc import ABC, abstractmethod

from loopback_shim.domain.types import CipherSuite, HostName, Port


class SocketProvider(ABC):
    """Interface shared by every socket provider."""

    @abstractmethod
    def create_unconnected_socket(self, server_hostname: HostName | None = None) -> socket.socket:
        """Return a socket that the caller connects itself.

        server_hostname names the peer for transports that need it
        before connect() (TLS with hostname checking).
        """
        ...

    @abstractmethod
    def create_socket(self, host: HostName, port: Port) -> socket.socket:
        """Connect to host:port by name."""
        ...

    @abstractmethod
    def create_socket_from_address(self, address: str, port: Port) -> socket.socket:
        """Connect to an already-resolved IP address."""
        ...

    @abstractmethod
    def create_socket_bound(
        self,
        host: HostName,
        port: Port,
        local_address: str,
        local_port: Port,
    ) -> socket.socket:
        """Connect to host:port by name from a fixed local address."""
        ...

    @abstractmethod
    def create_socket_from_address_bound(
        self,
        address: str,
        port: Port,
        local_address: str,
        local_port: Port,
    ) -> socket.socket:
        """Connect to a resolved IP address from a fixed local address."""
        ...

    @abstractmethod
    def wrap_socket(
        self,
        sock: socket.socket,
        host: HostName,
        port: Port,
        autoclose: bool = True,
    ) -> socket.socket:
        """Layer this provider's transport over an existing connected socket."""
        ...

    @abstractmethod
    def default_cipher_suites(self) -> list[CipherSuite]:
        """Cipher suites enabled by default."""
        ...

    @abstractmethod
    def supported_cipher_suites(self) -> list[CipherSuite]:
        """Cipher suites that could be enabled."""
        ...
