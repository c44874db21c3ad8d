"""CLI entrypoints for ng-tooling commands."""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path
from typing import Any

from .config import load_config
from .errors import NgToolingError
from .generator import Generator
from .logging import configure_logging
from .progress import CancellationToken, ProgressReporter
from .scaffold import Scaffolder


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: Any = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngtooling",
        description="Generate module index files and scaffold components for Angular workspaces.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Regenerate module index files and asset metadata.",
    )
    _add_verbosity_options(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the workspace root (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )

    scaffold_parser = subparsers.add_parser(
        "scaffold",
        help="Create a new component folder with component, template, style and index files.",
    )
    _add_verbosity_options(scaffold_parser, suppress_default=True)
    scaffold_parser.add_argument("parent", help="Folder in which to create the component folder.")
    scaffold_parser.add_argument("name", help="Kebab-case component name, e.g. user-list.")
    scaffold_parser.add_argument(
        "--root",
        default=".",
        help="Workspace root holding .ngtooling.yml (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Expose generate and scaffold over HTTP.",
    )
    _add_verbosity_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    token = CancellationToken()
    # Ctrl-C requests a stop at the next checkpoint instead of aborting a write.
    previous = signal.signal(signal.SIGINT, lambda *_: token.cancel())
    try:
        report = Generator().run_path(args.path, progress=ProgressReporter(), token=token)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except NgToolingError as exc:
        parser.exit(1, f"ngtooling generate failed: {exc}\nRun with --verbose for more details.\n")
    finally:
        signal.signal(signal.SIGINT, previous)

    if report.cancelled:
        print(f"Generation cancelled after writing {len(report.written)} file(s)")
        parser.exit(130)
    print(f"Generated {len(report.written)} file(s) under {_relativize(report.root)}")
    if report.failed:
        parser.exit(1, f"Failed: {', '.join(report.failed)}\n")


def _run_scaffold(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.root))
        result = Scaffolder().scaffold(Path(args.parent).resolve(), args.name, config)
    except NgToolingError as exc:
        parser.exit(1, f"ngtooling scaffold failed: {exc}\n")
    print(f"Component created at {_relativize(result.component)}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ng-tooling commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "generate":
        _run_generate(parser, args)
    elif args.command == "scaffold":
        _run_scaffold(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
