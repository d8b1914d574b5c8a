"""Redirect policy: which host a connection attempt should really go to.

Remote objects returned by a registry carry their own endpoint. Servers
that want to look locked down often advertise 127.0.0.1 or an internal
name there, so a naive client follows the reference somewhere it cannot
reach. The policy holds the host the operator actually targeted and, for
each attempt, decides:
  - which host to hand to the socket provider
  - whether this attempt is the one that should tell the operator

Thread safety: expected_host and follow_redirect are fixed in __init__
and only read afterwards. warning_emitted is the only mutable field and
it is flipped under a lock together with the decision that reads it, so
under N concurrent mismatches exactly one caller gets should_warn=True.

The suppression is global for the instance, not keyed by host: after the
first mismatch no further mismatch is reported, whatever host it names.
Build a new RedirectPolicy to reset it.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass

from loopback_shim.domain.types import HostName


@dataclass(slots=True, frozen=True)
class RedirectDecision:
    """Outcome of RedirectPolicy.resolve for one connection attempt.

    Unpacks as (effective_host, should_warn).
    """
    requested_host: HostName
    effective_host: HostName
    should_warn: bool

    @property
    def redirected(self) -> bool:
        """True when the connection goes somewhere other than requested."""
        return self.effective_host != self.requested_host

    def __iter__(self):
        yield self.effective_host
        yield self.should_warn


class RedirectPolicy:
    """Expected target plus the one-shot notice flag.

    Args:
        expected_host: Host every connection is expected to target.
        follow_redirect: If True, mismatching hosts are used as-is
            (still reported once). If False they are replaced by
            expected_host.
    """

    def __init__(self, expected_host: HostName, follow_redirect: bool = False) -> None:
        self._expected_host = expected_host
        self._follow_redirect = follow_redirect
        self._warning_emitted = False
        self._lock = threading.Lock()

    @property
    def expected_host(self) -> HostName:
        return self._expected_host

    @property
    def follow_redirect(self) -> bool:
        return self._follow_redirect

    @property
    def warning_emitted(self) -> bool:
        with self._lock:
            return self._warning_emitted

    def effective_host(self, requested_host: HostName) -> HostName:
        """Host a connection to requested_host goes to. Does not touch the flag."""
        if requested_host == self._expected_host or self._follow_redirect:
            return requested_host
        return self._expected_host

    def resolve(self, requested_host: HostName) -> RedirectDecision:
        """Decide the effective host for a connection to requested_host.

        Matching host: returned unchanged, never warns.
        Mismatch: expected_host (or requested_host in follow mode), and
        should_warn is True only for the first mismatch this instance sees.
        """
        if requested_host == self._expected_host:
            return RedirectDecision(requested_host, requested_host, False)

        effective = self.effective_host(requested_host)

        with self._lock:
            should_warn = not self._warning_emitted
            self._warning_emitted = True

        return RedirectDecision(requested_host, effective, should_warn)

    def __repr__(self) -> str:
        return (
            f"RedirectPolicy(expected_host={self._expected_host!r}, "
            f"follow_redirect={self._follow_redirect!r})"
        )
