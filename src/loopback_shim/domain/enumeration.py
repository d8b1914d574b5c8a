"""Plain records describing what an enumeration run found.

These are what the report formatters consume. They carry already-decoded
data: bound names, class names, endpoints. Nothing here talks to the
network or knows about the redirect shim.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from loopback_shim.domain.types import HostName, Port


@dataclass(slots=True)
class Vulnerability:
    name: str
    description: str
    references: list[str] = field(default_factory=list)


@dataclass(slots=True)
class KnownEndpoint:
    """A remote class the tool has documentation for."""
    name: str
    class_name: str
    description: str
    remote_methods: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    vulnerabilities: list[Vulnerability] = field(default_factory=list)


@dataclass(slots=True)
class RemoteObject:
    """One bound name from a registry listing.

    host/port/obj_id are None when the registry returned no usable
    reference for the name.
    """
    bound_name: str
    class_name: str | None = None
    host: HostName | None = None
    port: Port | None = None
    obj_id: str | None = None
    known_endpoint: KnownEndpoint | None = None

    @property
    def has_reference(self) -> bool:
        return self.host is not None and self.port is not None

    @property
    def is_known(self) -> bool:
        return self.known_endpoint is not None

    @property
    def target(self) -> str:
        """host:port of the advertised endpoint."""
        return f"{self.host}:{self.port}"


@dataclass(slots=True)
class GuessResult:
    """Methods confirmed on a remote object, grouped under its bound names."""
    bound_names: list[str]
    signatures: list[str] = field(default_factory=list)
