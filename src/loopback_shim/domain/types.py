"""Shared type aliases used across the shim."""
from __future__ import annotations

from typing import TypeAlias

HostName: TypeAlias = str      # hostname or literal IP, as advertised
Port: TypeAlias = int
Address: TypeAlias = tuple[str, int]
CipherSuite: TypeAlias = str   # OpenSSL cipher name
