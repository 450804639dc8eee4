"""CLI entrypoints for profilegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .logging import configure_logging
from .orchestrator import Orchestrator
from .presenter import format_name


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    verbose_default: object = argparse.SUPPRESS if suppress_default else False
    log_file_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=log_file_default,
        metavar="PATH",
        help="Also write a DEBUG-level log to PATH.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory holding .profilegen.yml (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profilegen",
        description="Generate a GitHub profile README from account and language statistics.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the profile README and write it to disk.",
    )
    _add_common_options(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered README instead of writing it.",
    )

    languages_parser = subparsers.add_parser(
        "languages",
        help="Print the ranked language breakdown.",
    )
    _add_common_options(languages_parser, suppress_default=True)
    _add_path_argument(languages_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service (requires the 'service' extra).",
    )
    _add_common_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for profilegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    if args.command == "generate":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            outcome = orchestrator.run(args.path, dry_run=dry_run)
        except RuntimeError as exc:
            parser.exit(1, f"profilegen generate failed: {exc}\nRun with --verbose for more details.\n")
        if dry_run:
            sys.stdout.write(outcome.content)
        else:
            print(f"README written to {_relativize(outcome.path)}")
    elif args.command == "languages":
        try:
            report = orchestrator.language_report(args.path)
        except RuntimeError as exc:
            parser.exit(1, f"profilegen languages failed: {exc}\nRun with --verbose for more details.\n")
        if not report.languages:
            print("No language data found")
        for language in report.languages:
            print(f"{format_name(language.name)} {language.bar} {language.percentage_str}")
    elif args.command == "serve":
        from .service import run_service

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"profilegen serve failed: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
