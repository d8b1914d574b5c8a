"""Domain model for loopback-shim.

Re-exports the public types:
    from loopback_shim.domain import RedirectPolicy, RedirectDecision
"""
from loopback_shim.domain.enumeration import (
    GuessResult,
    KnownEndpoint,
    RemoteObject,
    Vulnerability,
)
from loopback_shim.domain.redirect_policy import RedirectDecision, RedirectPolicy
from loopback_shim.domain.types import Address, CipherSuite, HostName, Port

__all__ = [
    "GuessResult",
    "KnownEndpoint",
    "RemoteObject",
    "Vulnerability",
    "RedirectDecision",
    "RedirectPolicy",
    "Address",
    "CipherSuite",
    "HostName",
    "Port",
]
