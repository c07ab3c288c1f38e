"""Tabby CLI — tabby init / tabby build / tabby dev.

Entry point for the ``tabby`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tabby CLI."""
    parser = argparse.ArgumentParser(
        prog="tabby",
        description="Static documentation site builder with live reload.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tabby init
    init_parser = subparsers.add_parser("init", help="Scaffold a new site")
    init_parser.add_argument("root", nargs="?", default=".", help="Site root directory")

    # tabby build
    build_parser = subparsers.add_parser("build", help="Build the site for deployment")
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory (default: dist)")
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL prefix for links, sitemap and feed",
    )

    # tabby dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Start the development server with live reload",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    dev_parser.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    dev_parser.add_argument("--port", type=int, default=None, help="Bind port (default: 3000)")
    dev_parser.add_argument("--output", default=None, help="Output directory (default: dist)")
    dev_parser.add_argument(
        "--open", action="store_true", dest="open_browser", help="Open the site in a browser",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from tabby import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from tabby._errors import TabbyError
    from tabby.app import build, dev, init

    try:
        if args.command == "init":
            init(root=args.root)
        elif args.command == "build":
            build(root=args.root, output_dir=args.output, base_url=args.base_url)
        elif args.command == "dev":
            dev(
                root=args.root,
                open_browser=args.open_browser,
                host=args.host,
                port=args.port,
                output_dir=args.output,
            )
    except TabbyError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
