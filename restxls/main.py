"""
Main entry point for the RESTx Language Server.

This file is executed when running: python -m restxls (or `restxls`)

By default the server communicates with editors via stdin/stdout using
JSON-RPC; --tcp serves a single client over a socket instead.
"""
import argparse
import os
import sys
from pathlib import Path

from restxls import __version__
from restxls.catalog.catalog import CatalogError, load_hover_docs, load_vocabulary
from restxls.lsp.server import create_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restxls",
        description="Language server for RESTx API definitions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--tcp", action="store_true", help="Serve over TCP instead of stdio")
    parser.add_argument("--host", default="127.0.0.1", help="TCP bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=2087, help="TCP port (default: 2087)")
    parser.add_argument(
        "--vocabulary",
        type=Path,
        help="YAML vocabulary file to use instead of the bundled one",
    )
    parser.add_argument(
        "--hover-docs",
        type=Path,
        help="YAML hover documentation file to use instead of the bundled one",
    )
    return parser


def main(argv: list[str] | None = None):
    """Start the language server."""
    args = build_parser().parse_args(argv)

    # stdout carries JSON-RPC, so anything human-readable goes to stderr
    if os.getenv("DEBUG"):
        print("🔧 RESTx Server starting in DEBUG mode", file=sys.stderr)
        print("📡 Waiting for debugger to attach on port 5678...", file=sys.stderr)
        try:
            import debugpy  # type: ignore
            debugpy.listen(("127.0.0.1", 5678))
            debugpy.wait_for_client()
            print("🎯 Debugger attached! Continuing...", file=sys.stderr)
        except ImportError:
            print("❌ debugpy not available - install with: pip install restxls[debug]", file=sys.stderr)

    try:
        catalog = load_vocabulary(args.vocabulary)
        hover_docs = load_hover_docs(args.hover_docs)
    except CatalogError as e:
        print(f"restxls: {e}", file=sys.stderr)
        sys.exit(1)

    server = create_server(catalog, hover_docs)

    if args.tcp:
        server.start_tcp(args.host, args.port)
    else:
        # Listen on stdin/stdout for LSP messages from the editor client
        server.start_io()


if __name__ == "__main__":
    main()
