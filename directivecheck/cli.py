"""CLI entrypoints for directivecheck commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .checker import DirectiveChecker
from .config import CONFIG_FILENAME, ConfigError, load_config
from .errors import DirectiveCheckError
from .logging import configure_logging
from .report import FORMATS, render_report

EXIT_CLEAN = 0
EXIT_FLAGGED = 1
EXIT_ERROR = 2


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="directivecheck",
        description='Find React/Next.js components that use client-only APIs without a "use client" directive.',
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Scan a project and list files missing the directive.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    check_parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Report format (defaults to report.format from the config, else text).",
    )
    check_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    check_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads used to classify files.",
    )
    check_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .directivecheck.yml file (defaults to the one in the project root).",
    )
    check_parser.add_argument(
        "--explain",
        action="store_true",
        help="Show which client signals caused each file to be flagged.",
    )
    check_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for directivecheck commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(log_file) if log_file else None,
        project_root=Path(args.path).expanduser().resolve(),
    )

    if args.command != "check":  # pragma: no cover - argparse enforces choices
        parser.exit(EXIT_ERROR, "Unknown command\n")

    if args.workers is not None and args.workers < 1:
        parser.exit(EXIT_ERROR, "--workers must be at least 1\n")

    if args.config and not Path(args.config).expanduser().exists():
        parser.exit(EXIT_ERROR, f"Configuration file not found: {args.config}\n")

    try:
        config_path = Path(args.config) if args.config else Path(args.path) / CONFIG_FILENAME
        config = load_config(config_path)
        checker = DirectiveChecker(config, workers=args.workers)
        report = checker.run(args.path)
    except ConfigError as exc:
        parser.exit(EXIT_ERROR, f"Invalid configuration: {exc}\n")
    except DirectiveCheckError as exc:
        parser.exit(EXIT_ERROR, f"directivecheck failed: {exc}\n")
    except ValueError as exc:
        parser.exit(EXIT_ERROR, f"directivecheck failed: {exc}\n")

    fmt = (args.format or config.report_format or "text").lower()
    if fmt not in FORMATS:
        parser.exit(EXIT_ERROR, f"Unsupported report format in configuration: {fmt}\n")
    rendered = render_report(report, fmt, explain=bool(args.explain))

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            parser.exit(
                EXIT_ERROR,
                f"Cannot write report to {output_path}: {exc.strerror or exc}\n",
            )
        summary = (
            "All components are correctly configured"
            if report.is_clean
            else f"{len(report.flagged)} file(s) missing the directive"
        )
        print(f"{summary}. Report written to {_relativize(output_path)}")
    else:
        sys.stdout.write(rendered)

    return EXIT_CLEAN if report.is_clean else EXIT_FLAGGED


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
