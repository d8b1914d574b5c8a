"""Plain-text report blocks for enumeration output."""
from loopback_shim.report.formatter import (
    format_bound_names,
    format_codebases,
    format_guessed_methods,
    format_known_endpoint,
    format_probe_results,
)

__all__ = [
    "format_bound_names",
    "format_codebases",
    "format_guessed_methods",
    "format_known_endpoint",
    "format_probe_results",
]
