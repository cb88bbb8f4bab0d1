"""CLI entrypoint for Lumina Design."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path
import sys

from dotenv import load_dotenv

from .app import LuminaDesignApp
from .config import ensure_config_dir
from .exceptions import GatewayConfigurationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lumina",
        description="Lumina Design - reimagine a room photo in a new interior style",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Read configuration from PATH instead of the default location",
    )
    parser.add_argument(
        "image",
        nargs="?",
        default=None,
        help="Room photo to load at startup",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Ensure configuration exists, handle CLI flags, and run the TUI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("lumina-design")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"lumina {version}")
        return 0

    load_dotenv()
    if args.config is None:
        ensure_config_dir()
    try:
        app = LuminaDesignApp(config_path=args.config, initial_image=args.image)
    except GatewayConfigurationError as exc:
        print(f"lumina: {exc}", file=sys.stderr)
        return 2
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
