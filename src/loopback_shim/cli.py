"""loopback-shim CLI entry point.

Usage: loopback-shim [-v] [command]
"""
import argparse
import logging
import sys

from loopback_shim.config import ShimConfig


def _add_probe_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "probe",
        help="Open advertised endpoints through the redirect shim.",
    )
    p.add_argument(
        "target",
        help="Host the operator is targeting (the registry host).",
    )
    p.add_argument(
        "endpoints", nargs="+", metavar="HOST:PORT",
        help="Endpoints advertised by remote object references.",
    )
    p.add_argument(
        "--follow", action="store_true",
        help="Follow mismatching hosts instead of redirecting to the target.",
    )
    p.add_argument(
        "--plain", action="store_true",
        help="Use plain TCP instead of TLS.",
    )
    p.add_argument(
        "--timeout", type=float, default=5.0,
        help="Connect timeout in seconds (default: 5.0)",
    )
    p.add_argument(
        "--workers", type=int, default=8,
        help="Probe thread pool size (default: 8)",
    )


def _add_ciphers_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "ciphers",
        help="List the TLS provider's cipher suites.",
    )
    p.add_argument(
        "--supported", action="store_true",
        help="List every supported suite instead of the enabled defaults.",
    )


def _run_probe(args: argparse.Namespace) -> int:
    from loopback_shim.net.install import install_redirect, uninstall_provider
    from loopback_shim.net.probe import parse_endpoint, probe_endpoints
    from loopback_shim.report.formatter import format_probe_results

    try:
        config = ShimConfig(
            expected_host=args.target,
            follow_redirect=args.follow,
            secure=not args.plain,
            timeout=args.timeout,
            workers=args.workers,
        )
        endpoints = [parse_endpoint(e) for e in args.endpoints]
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    factory = install_redirect(config)
    try:
        results = probe_endpoints(factory, endpoints, workers=config.workers)
    finally:
        uninstall_provider()

    print(format_probe_results(results))
    return 0 if all(r.ok for r in results) else 1


def _run_ciphers(args: argparse.Namespace) -> int:
    from loopback_shim.net.providers import SSLSocketProvider

    provider = SSLSocketProvider()
    suites = (
        provider.supported_cipher_suites()
        if args.supported
        else provider.default_cipher_suites()
    )
    for name in suites:
        print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="loopback-shim",
        description="Keep remote object connections on the host you targeted.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_probe_parser(subparsers)
    _add_ciphers_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "probe":
        return _run_probe(args)
    if args.command == "ciphers":
        return _run_ciphers(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
