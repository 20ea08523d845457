# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Command-line entry point for the DID registrar/resolver server.

Every flag overrides the matching DID_METHOD_* environment setting.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from didmethod.core.exceptions import ConfigException
from didmethod.core.logging import configure_logging

from .app import run
from .config import ServerSettings
from .operations import COMBINED_MODE, REGISTRAR_MODE, RESOLVER_MODE


def parse_genesis_file(value: str) -> tuple[str, Path]:
    """Parse a ``URL=PATH`` genesis file argument."""
    url, sep, path = value.partition("=")
    if not sep or not url or not path:
        raise argparse.ArgumentTypeError(f"expected URL=PATH, got {value!r}")
    return url, Path(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DID registrar and resolver REST server",
        prog="did-method-rest",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help="Host to bind to")
    server.add_argument("--port", type=int, help="Port to bind to")
    server.add_argument(
        "--mode",
        help=f"Operating mode: {REGISTRAR_MODE}, {RESOLVER_MODE} or {COMBINED_MODE}",
    )
    server.add_argument("--tls-cert-file", type=Path, help="Server TLS certificate (PEM)")
    server.add_argument("--tls-key-file", type=Path, help="Server TLS private key (PEM)")

    backend = parser.add_argument_group("DID method backend")
    backend.add_argument("--domain", dest="bloc_domain", help="Consortium domain")
    backend.add_argument("--did-method", help="DID method name (default: trustbloc)")
    backend.add_argument("--vdr-backend", choices=["sidetree", "memory"], help="VDR backend")
    backend.add_argument(
        "--sidetree-endpoint",
        dest="sidetree_endpoints",
        action="append",
        help="Sidetree node base URL (repeatable)",
    )
    backend.add_argument("--sidetree-read-token", help="Bearer token for Sidetree reads")
    backend.add_argument("--sidetree-write-token", help="Bearer token for Sidetree writes")
    backend.add_argument(
        "--genesis-file",
        dest="genesis_files",
        type=parse_genesis_file,
        action="append",
        metavar="URL=PATH",
        help="Genesis file and the URL it was published at (repeatable)",
    )
    backend.add_argument(
        "--enable-signatures",
        action="store_true",
        default=None,
        help="Require signed genesis files",
    )
    backend.add_argument(
        "--tls-cacert",
        dest="tls_cacerts",
        type=Path,
        action="append",
        help="CA certificate trusted for backend connections (repeatable)",
    )
    backend.add_argument(
        "--tls-system-cert-pool",
        action="store_true",
        default=None,
        help="Also trust the system certificate pool",
    )
    backend.add_argument("--request-timeout", type=float, help="Backend request timeout in seconds")

    logs = parser.add_argument_group("logging")
    logs.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    logs.add_argument("--log-format", choices=["json", "text"], help="Log format")

    return parser


def settings_from_args(args: argparse.Namespace) -> ServerSettings:
    """Build settings from the environment with command-line overrides applied."""
    overrides: dict[str, Any] = {key: value for key, value in vars(args).items() if value is not None}
    if "genesis_files" in overrides:
        overrides["genesis_files"] = dict(overrides["genesis_files"])
    return ServerSettings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    log_format = settings.log_format.lower()
    configure_logging(
        level=settings.log_level,
        json_format={"json": True, "text": False}.get(log_format),
        log_file=settings.log_file,
    )

    try:
        run(settings)
    except ConfigException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
