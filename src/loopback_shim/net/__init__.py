"""Socket providers and the redirecting shim.

The protocol layer asks the installed provider for sockets. Installing
a RedirectingSocketFactory in front of the TLS (or plain) provider keeps
every by-name connection on the host the operator targeted.
"""
from loopback_shim.net.install import (
    ProviderNotInstalled,
    build_factory,
    get_provider,
    install_provider,
    install_redirect,
    uninstall_provider,
)
from loopback_shim.net.probe import ProbeResult, parse_endpoint, probe_endpoint, probe_endpoints
from loopback_shim.net.provider import SocketProvider
from loopback_shim.net.providers import (
    PlainSocketProvider,
    SSLSocketProvider,
    insecure_context,
)
from loopback_shim.net.redirecting import RedirectingSocketFactory, format_notice

__all__ = [
    "ProviderNotInstalled",
    "build_factory",
    "get_provider",
    "install_provider",
    "install_redirect",
    "uninstall_provider",
    "ProbeResult",
    "parse_endpoint",
    "probe_endpoint",
    "probe_endpoints",
    "SocketProvider",
    "PlainSocketProvider",
    "SSLSocketProvider",
    "insecure_context",
    "RedirectingSocketFactory",
    "format_notice",
]
