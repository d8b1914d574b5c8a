"""Process-wide slot for the socket provider the protocol layer uses.

The protocol layer calls get_provider() whenever it needs a socket, so
installing a RedirectingSocketFactory here is all it takes to put the
shim in front of every connection. Guarded by a lock; install before
worker threads start and the happens-before ordering comes for free.
"""
from __future__ import annotations

import logging
import threading

from loopback_shim.config import ShimConfig
from loopback_shim.domain.redirect_policy import RedirectPolicy
from loopback_shim.net.provider import SocketProvider
from loopback_shim.net.providers import PlainSocketProvider, SSLSocketProvider
from loopback_shim.net.redirecting import RedirectingSocketFactory

log = logging.getLogger(__name__)

_lock = threading.Lock()
_provider: SocketProvider | None = None


class ProviderNotInstalled(RuntimeError):
    """get_provider() was called before install_provider()."""


def install_provider(provider: SocketProvider) -> SocketProvider | None:
    """Make provider the active one. Returns whatever was installed before."""
    global _provider
    with _lock:
        previous, _provider = _provider, provider
    log.debug("Installed socket provider %s", type(provider).__name__)
    return previous


def get_provider() -> SocketProvider:
    with _lock:
        if _provider is None:
            raise ProviderNotInstalled("No socket provider installed")
        return _provider


def uninstall_provider() -> SocketProvider | None:
    """Clear the slot. Returns the provider that was installed, if any."""
    global _provider
    with _lock:
        previous, _provider = _provider, None
    return previous


def build_factory(config: ShimConfig) -> RedirectingSocketFactory:
    """Fresh policy + concrete provider + decorator for one run."""
    policy = RedirectPolicy(config.expected_host, follow_redirect=config.follow_redirect)
    delegate: SocketProvider
    if config.secure:
        delegate = SSLSocketProvider(timeout=config.timeout)
    else:
        delegate = PlainSocketProvider(timeout=config.timeout)
    return RedirectingSocketFactory(delegate, policy)


def install_redirect(config: ShimConfig) -> RedirectingSocketFactory:
    """Build the redirecting factory for config and make it active."""
    factory = build_factory(config)
    install_provider(factory)
    log.debug("Redirect shim active for %s (follow=%s, secure=%s)",
              config.expected_host, config.follow_redirect, config.secure)
    return factory
