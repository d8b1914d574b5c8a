"""Run configuration for the shim.

Built from parsed CLI arguments (see cli.py) and handed to
install_redirect(). Frozen: the values are read by worker threads
after installation and must not change underneath them.
"""
from __future__ import annotations

from dataclasses import dataclass

from loopback_shim.domain.types import HostName


@dataclass(slots=True, frozen=True)
class ShimConfig:
    """Settings for one tool invocation."""
    expected_host: HostName
    follow_redirect: bool = False
    secure: bool = True                # TLS provider vs plain TCP
    timeout: float | None = 5.0        # seconds, None blocks forever
    workers: int = 8                   # probe thread pool size

    def __post_init__(self) -> None:
        if not self.expected_host:
            raise ValueError("expected_host must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive or None")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
