"""CLI entrypoints for registrygen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .builder import RegistryAssembler
from .config import ConfigError, RegistryConfig, load_config
from .logging import configure_logging


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands suppress defaults so flags given before the command survive.
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Log per-file and per-item detail.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Only log warnings and errors (dropped files and items).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=_default(None),
        help="Also write a timestamped debug log to this file.",
    )


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for generated registry JSON (defaults to server/assets/registry).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="registrygen",
        description="Build an installable component registry from a source tree.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Collect items, resolve dependencies and write the registry store.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    _add_output_option(build_parser)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    build_parser.add_argument("--base-name", default=None, help="Registry namespace name.")
    build_parser.add_argument("--base-url", default=None, help="Public URL of the registry.")
    build_parser.add_argument(
        "--no-fallback-targets",
        action="store_true",
        help="Require meta.json targets for file and page items instead of defaulting them.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve a built registry over HTTP.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    _add_output_option(serve_parser)
    serve_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=3001, help="Port to listen on.")

    return parser


def _resolve_config(args: argparse.Namespace) -> RegistryConfig:
    config = load_config(Path(args.path))
    overrides = {
        "output_dir": args.output.resolve() if args.output else None,
        "base_name": getattr(args, "base_name", None),
        "base_url": getattr(args, "base_url", None),
    }
    if getattr(args, "no_fallback_targets", False):
        overrides["fallback_targets"] = False
    return config.with_overrides(**overrides)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for registrygen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "build":
        try:
            result = RegistryAssembler(config).build()
        except OSError as exc:
            parser.exit(1, f"registrygen build failed: {exc}\nRun with --verbose for more details.\n")
        rel_path = _relativize(result.output_dir)
        print(f"Registry written to {rel_path} ({result.item_count} items)")
    elif args.command == "serve":
        from .service import run_service

        try:
            run_service(config, host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
