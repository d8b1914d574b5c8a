"""Connect to a batch of advertised endpoints through a provider.

This is the enumeration pattern the shim exists for: a registry lists
many remote objects, each with its own advertised host:port, and the
tool opens them from a worker pool. Each connection goes through
provider.create_socket(), so with a RedirectingSocketFactory installed
the advertised host is rewritten and the notice fires once no matter
how many workers hit a mismatch.

A probe only checks that the socket opens (and, for TLS, handshakes);
it is closed immediately afterwards.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from loopback_shim.domain.redirect_policy import RedirectPolicy
from loopback_shim.domain.types import Address, HostName, Port
from loopback_shim.net.provider import SocketProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ProbeResult:
    """Outcome of one endpoint probe."""
    advertised_host: HostName
    port: Port
    effective_host: HostName
    ok: bool
    error: str | None = None
    elapsed_ms: float = 0.0


def parse_endpoint(text: str) -> Address:
    """Parse "host:port" or "[v6addr]:port".

    Raises:
        ValueError: missing host, missing or out-of-range port.
    """
    host, sep, port_text = text.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Endpoint must be host:port, got {text!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"Invalid port in endpoint {text!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in endpoint {text!r}")
    return host, port


def _effective_host(provider: SocketProvider, host: HostName) -> HostName:
    # Reporting only: effective_host() leaves the one-shot flag to the
    # real connection attempt.
    policy = getattr(provider, "policy", None)
    if isinstance(policy, RedirectPolicy):
        return policy.effective_host(host)
    return host


def probe_endpoint(provider: SocketProvider, host: HostName, port: Port) -> ProbeResult:
    """Open and immediately close one connection. OSError becomes a failed result."""
    start_ns = time.perf_counter_ns()
    effective = _effective_host(provider, host)
    try:
        sock = provider.create_socket(host, port)
    except OSError as exc:
        elapsed_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        log.debug("Probe %s:%d failed: %s", host, port, exc)
        return ProbeResult(host, port, effective, False, str(exc) or type(exc).__name__, elapsed_ms)
    sock.close()
    elapsed_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
    return ProbeResult(host, port, effective, True, None, elapsed_ms)


def probe_endpoints(
    provider: SocketProvider,
    endpoints: list[Address],
    workers: int = 8,
) -> list[ProbeResult]:
    """Probe every endpoint from a thread pool. Results keep input order."""
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(probe_endpoint, provider, h, p) for h, p in endpoints]
        return [f.result() for f in futures]
