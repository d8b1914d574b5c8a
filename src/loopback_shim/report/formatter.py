"""Text formatting for enumeration results.

Formats the plain records from loopback_shim.domain.enumeration into
the indented blocks the CLI prints, plus the probe summary table. Pure
functions: records in, string out. Nothing here opens a socket.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from loopback_shim.domain.enumeration import (
    GuessResult,
    KnownEndpoint,
    RemoteObject,
    Vulnerability,
)
from loopback_shim.net.probe import ProbeResult

INDENT = "    "
RULE = "-" * 35


def _ind(level: int, text: str) -> str:
    return f"{INDENT * level}{text}" if text else ""


def format_bound_names(objects: Iterable[RemoteObject]) -> str:
    """Bound names with their classes and advertised endpoints."""
    objects = list(objects)
    lines = ["Registry bound names:", ""]
    if not objects:
        lines.append(_ind(1, "- No objects are bound to the registry."))
        return "\n".join(lines)

    for obj in objects:
        lines.append(_ind(1, f"- {obj.bound_name}"))
        if obj.class_name is None:
            continue
        if obj.is_known:
            lines.append(_ind(2, f"--> {obj.class_name} (known class: {obj.known_endpoint.name})"))
        else:
            lines.append(_ind(2, f"--> {obj.class_name} (unknown class)"))
        if obj.has_reference:
            ref = f"Endpoint: {obj.target}"
            if obj.obj_id is not None:
                ref += f"  ObjID: {obj.obj_id}"
            lines.append(_ind(3, ref))
    return "\n".join(lines)


def format_guessed_methods(results: Iterable[GuessResult]) -> str:
    results = list(results)
    if not results:
        return "No remote methods identified :("

    lines = ["Listing successfully guessed methods:", ""]
    for result in results:
        lines.append(_ind(1, f"- {' == '.join(result.bound_names)}"))
        for signature in result.signatures:
            lines.append(_ind(2, f"--> {signature}"))
    return "\n".join(lines)


def format_codebases(codebases: Mapping[str, Iterable[str]]) -> str:
    """Codebase URL -> classes annotated with it."""
    lines = ["Server codebase enumeration:", ""]
    if not codebases:
        lines.append(_ind(1, "- The remote server does not expose any codebases."))
        return "\n".join(lines)

    for url, classes in codebases.items():
        lines.append(_ind(1, f"- {url}"))
        for class_name in sorted(classes):
            lines.append(_ind(2, f"--> {class_name}"))
    return "\n".join(lines)


def _section(title: str, body: list[str]) -> list[str]:
    return [f"{title}:", *(_ind(1, line) for line in body)]


def format_known_endpoint(endpoint: KnownEndpoint) -> str:
    """Full description block for one documented remote class."""
    lines: list[str] = []
    lines += _section("Name", [endpoint.name]) + [""]
    lines += _section("Class Name", [endpoint.class_name]) + [""]
    lines += _section("Description", endpoint.description.split("\n")) + [""]
    lines += _section("Remote Methods", [f"- {m}" for m in endpoint.remote_methods]) + [""]
    lines += _section("References", [f"- {r}" for r in endpoint.references])
    if endpoint.vulnerabilities:
        lines += ["", *_format_vulnerabilities(endpoint.vulnerabilities)]
    return "\n".join(lines)


def _format_vulnerabilities(vulns: list[Vulnerability]) -> list[str]:
    lines = ["Vulnerabilities:"]
    for vuln in vulns:
        block = ["", RULE]
        block += _section("Name", [vuln.name]) + [""]
        block += _section("Description", vuln.description.split("\n")) + [""]
        block += _section("References", [f"- {r}" for r in vuln.references])
        lines += [_ind(1, line) for line in block]
    return lines


def format_probe_results(results: Iterable[ProbeResult]) -> str:
    """One line per probed endpoint, then a summary line."""
    results = list(results)
    lines = []
    for r in results:
        target = f"{r.advertised_host}:{r.port}"
        via = f" -> {r.effective_host}:{r.port}" if r.effective_host != r.advertised_host else ""
        status = "open" if r.ok else f"failed ({r.error})"
        lines.append(f"{target:<28}{via:<28} {status:<40} {r.elapsed_ms:>8.1f} ms")
    ok = sum(1 for r in results if r.ok)
    lines.append(f"{ok}/{len(results)} endpoints reachable")
    return "\n".join(lines)
