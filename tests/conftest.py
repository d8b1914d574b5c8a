"""Fixtures shared by every test directory: real loopback sockets."""
from __future__ import annotations

import socket
import threading

import pytest


@pytest.fixture()
def tcp_listener():
    """Loopback listener that accepts and immediately closes connections.

    Yields the bound port. Accept loop uses a short timeout so the
    thread notices shutdown.
    """
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(64)
    server.settimeout(0.2)
    running = threading.Event()
    running.set()

    def _accept_loop():
        while running.is_set():
            try:
                conn, _ = server.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.close()

    t = threading.Thread(target=_accept_loop, daemon=True)
    t.start()
    yield server.getsockname()[1]
    running.clear()
    t.join(timeout=2.0)
    server.close()


@pytest.fixture()
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
