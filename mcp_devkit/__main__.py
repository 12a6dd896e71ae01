"""CLI entry point -- python -m mcp_devkit."""

from __future__ import annotations

import argparse
import glob
import json
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from mcp_devkit import __version__

logger = logging.getLogger("mcp_devkit")


def main(argv: list[str] | None = None) -> int:
    load_dotenv(override=True)

    parser = argparse.ArgumentParser(
        prog="mcp-devkit",
        description="Keep project context documents (PRD, architecture, tasks) healthy.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-essential output")
    sub = parser.add_subparsers(dest="command")

    # --- validate ---
    validate_parser = sub.add_parser(
        "validate", help="Validate project files against rules and schemas"
    )
    validate_parser.add_argument(
        "path", nargs="?", default=None,
        help="Directory or file to validate (default: the .mcp directory)",
    )
    validate_parser.add_argument(
        "-s", "--strict", action="store_true", default=None,
        help="Fail on warnings as well as errors",
    )
    validate_parser.add_argument(
        "-f", "--format", choices=("table", "json", "markdown"), default="table",
        help="Output format (default: table)",
    )
    validate_parser.add_argument(
        "-r", "--rules", nargs="+", default=None,
        help="Specific rules to run (space-separated, '*' wildcard allowed)",
    )
    validate_parser.add_argument(
        "-e", "--exclude", nargs="+", default=None, help="File patterns to exclude",
    )
    validate_parser.add_argument(
        "--no-parallel", dest="parallel", action="store_false", default=None,
        help="Disable parallel processing",
    )
    validate_parser.add_argument(
        "--fix", action="store_true", default=None,
        help="Reserved for automatic fixes (currently no effect)",
    )
    validate_parser.add_argument(
        "--rule-timeout", type=float, default=None, metavar="SECONDS",
        help="Time limit per asynchronous rule invocation",
    )

    # --- status ---
    status_parser = sub.add_parser("status", help="Check project status and progress")
    status_parser.add_argument("directory", nargs="?", default=".", help="Project directory")
    status_parser.add_argument("--json", action="store_true", help="Output status as JSON")
    status_parser.add_argument(
        "--verbose", action="store_true", dest="status_verbose",
        help="Show file paths",
    )

    args = parser.parse_args(argv)

    # Set up logging
    from mcp_devkit.config import get_settings

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, get_settings().mcp_devkit_log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "validate":
        return _validate(args)
    elif args.command == "status":
        return _status(args)
    else:
        parser.print_help()
        return 1


def _validate(args: argparse.Namespace) -> int:
    """Run validation and print the report; the return value is the exit code."""
    from mcp_devkit.config import get_settings
    from mcp_devkit.reporting import exit_code, format_summary, render
    from mcp_devkit.validation import (
        ConfigError,
        ValidationOptions,
        register_builtin,
        run_validation,
    )
    from mcp_devkit.validation.options import load_project_options

    settings = get_settings()
    root = Path.cwd()
    target = root / (args.path or settings.mcp_devkit_dir)
    if not target.exists():
        logger.error(f"Path does not exist: {target}")
        return 1

    try:
        base = ValidationOptions(rule_timeout=settings.mcp_devkit_rule_timeout)
        project = load_project_options(root, settings.mcp_devkit_dir)
        options = base.merged(**project.model_dump(exclude_unset=True)).merged(
            strict=args.strict,
            rules=args.rules,
            exclude=args.exclude,
            parallel=args.parallel,
            fix=args.fix,
            rule_timeout=args.rule_timeout,
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    registry = register_builtin()
    if options.rules:
        logger.info(f"Running specific rules: {', '.join(options.rules)}")
    else:
        logger.info(f"Running {len(registry)} validation rules")
    if options.fix:
        logger.info("--fix is accepted but automatic fixes are not implemented")

    start = time.monotonic()
    try:
        summary = run_validation(root, options, registry, pattern=_pattern_for(target))
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        logger.error(f"Validation failed: {e}", exc_info=args.verbose)
        return 1
    duration_ms = (time.monotonic() - start) * 1000

    print(render(summary, args.format))
    if args.format != "json":
        print()
        print(format_summary(summary, duration_ms, strict=options.strict))
    return exit_code(summary, strict=options.strict)


def _status(args: argparse.Namespace) -> int:
    from mcp_devkit.status import check_project_status, render_status

    try:
        status = check_project_status(args.directory)
    except Exception as e:
        logger.error(f"Failed to check project status: {e}")
        return 1

    if args.json:
        print(json.dumps(status.to_dict(), indent=2))
    else:
        print(render_status(status, verbose=args.status_verbose))
    return 0


def _pattern_for(target: Path) -> str:
    """Glob pattern for a validate target: a single file, or all markdown below a dir."""
    target = target.resolve()
    if target.is_file():
        return glob.escape(str(target))
    return str(Path(glob.escape(str(target))) / "**" / "*.md")


if __name__ == "__main__":
    sys.exit(main())
