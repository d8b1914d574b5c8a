"""Redirecting socket provider -- keeps remote references on target.

A registry hands back remote objects whose endpoint host is whatever the
server put there, frequently 127.0.0.1 or a name only resolvable inside
the target network. The ports are often reachable on the host we
actually talked to. RedirectingSocketFactory wraps a real provider and
rewrites the host on the connect-by-name path:

    protocol layer -> create_socket(host, port)
                        -> policy.resolve(host)
                        -> one-time notice (first mismatch only)
                        -> delegate.create_socket(effective_host, port)

Every other entry point is forwarded to the delegate untouched: no
policy lookup, no logging, same arguments, same results, same errors.

Thread safety: the factory itself holds no mutable state. The policy's
one-shot flag is lock-protected, so one factory (or several sharing a
policy) can be used from any number of worker threads.
"""
from __future__ import annotations

import logging
import socket
from typing import Callable

from loopback_shim.domain.redirect_policy import RedirectDecision, RedirectPolicy
from loopback_shim.domain.types import CipherSuite, HostName, Port
from loopback_shim.net.provider import SocketProvider

log = logging.getLogger(__name__)

NoticeSink = Callable[[str], None]


def format_notice(decision: RedirectDecision, policy: RedirectPolicy) -> list[str]:
    """Lines of the one-time redirect notice."""
    lines = [f"Remote object tries to connect to different remote host: {decision.requested_host}"]
    if policy.follow_redirect:
        lines.append("\tFollowing the connection to the new target...")
    else:
        lines.append(f"\tRedirecting the connection back to {policy.expected_host}...")
    lines.append("\tThis is done for all further requests. This message is not shown again.")
    return lines


class RedirectingSocketFactory(SocketProvider):
    """SocketProvider decorator that forces connections back to the expected host.

    Args:
        delegate: Provider that opens the real sockets.
        policy: Shared redirect policy.
        notice: Sink for the one-time notice, called once per line.
            Defaults to this module's logger at WARNING.
    """

    def __init__(
        self,
        delegate: SocketProvider,
        policy: RedirectPolicy,
        notice: NoticeSink | None = None,
    ) -> None:
        self._delegate = delegate
        self._policy = policy
        self._notice = notice or log.warning

    @property
    def delegate(self) -> SocketProvider:
        return self._delegate

    @property
    def policy(self) -> RedirectPolicy:
        return self._policy

    def create_socket(self, host: HostName, port: Port) -> socket.socket:
        """Open host:port, substituting the expected host on mismatch.

        Delegate failures (refused, unresolvable, handshake) propagate
        unchanged; there is no retry and no fallback host.
        """
        decision = self._policy.resolve(host)
        if decision.should_warn:
            self._emit_notice(decision)
        if decision.redirected:
            log.debug("Redirecting %s:%d -> %s:%d",
                      host, port, decision.effective_host, port)
        return self._delegate.create_socket(decision.effective_host, port)

    def _emit_notice(self, decision: RedirectDecision) -> None:
        # Best-effort: a broken sink must not cost us the connection.
        try:
            for line in format_notice(decision, self._policy):
                self._notice(line)
        except Exception:
            log.debug("Redirect notice could not be emitted", exc_info=True)

    # ------------------------------------------------------------------
    # Pass-through
    # ------------------------------------------------------------------

    def create_unconnected_socket(self, server_hostname: HostName | None = None) -> socket.socket:
        return self._delegate.create_unconnected_socket(server_hostname)

    def create_socket_from_address(self, address: str, port: Port) -> socket.socket:
        return self._delegate.create_socket_from_address(address, port)

    def create_socket_bound(
        self, host: HostName, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        return self._delegate.create_socket_bound(host, port, local_address, local_port)

    def create_socket_from_address_bound(
        self, address: str, port: Port, local_address: str, local_port: Port
    ) -> socket.socket:
        return self._delegate.create_socket_from_address_bound(
            address, port, local_address, local_port
        )

    def wrap_socket(
        self, sock: socket.socket, host: HostName, port: Port, autoclose: bool = True
    ) -> socket.socket:
        return self._delegate.wrap_socket(sock, host, port, autoclose)

    def default_cipher_suites(self) -> list[CipherSuite]:
        return self._delegate.default_cipher_suites()

    def supported_cipher_suites(self) -> list[CipherSuite]:
        return self._delegate.supported_cipher_suites()
