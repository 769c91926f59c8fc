import argparse
import dataclasses
import json
from pathlib import Path

from . import __version__
from .build import build_identity
from .config import LOG_LEVELS, Settings
from .env import load_env
from .logger import StructuredLogger, get_logger, reset_logger
from .reporter import IdentityReporter, format_identity
from .runtime import SOURCES, lookup_runtime_identity


def make_reporter(settings: Settings, logger: StructuredLogger) -> IdentityReporter:
    return IdentityReporter(
        deployment_id=settings.deployment_id,
        source=settings.source,
        placeholder=settings.placeholder,
        logger=logger,
    )


def cmd_report(args: argparse.Namespace, settings: Settings, logger: StructuredLogger) -> None:
    comparison = make_reporter(settings, logger).compare()
    if args.json:
        print(json.dumps(comparison.as_dict(), indent=2, ensure_ascii=False))
    else:
        print(comparison.text)
    if args.strict and not comparison.runtime.ok:
        raise SystemExit(f"Runtime version identity unavailable: {comparison.runtime.error}")


def cmd_build(args: argparse.Namespace, settings: Settings, logger: StructuredLogger) -> None:
    print(format_identity(build_identity()))


def cmd_runtime(args: argparse.Namespace, settings: Settings, logger: StructuredLogger) -> None:
    result = lookup_runtime_identity(
        deployment_id=settings.deployment_id,
        source=settings.source,
        logger=logger,
    )
    if not result.ok:
        raise SystemExit(f"Runtime version identity unavailable: {result.error}")
    print(format_identity(result.identity))


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with CLI flags applied on top."""
    try:
        settings = Settings.from_env()
        overrides = {}
        if args.deployment_id:
            overrides["deployment_id"] = args.deployment_id
        if args.source:
            overrides["source"] = args.source
        if args.placeholder is not None:
            overrides["placeholder"] = args.placeholder
        if args.log_level:
            overrides["log_level"] = args.log_level.upper()
        if args.log_dir:
            overrides["log_dir"] = Path(args.log_dir)
        return dataclasses.replace(settings, **overrides)
    except ValueError as e:
        raise SystemExit(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versioncheck",
        description="Compare the build-time version identity with the one the environment reports",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--deployment-id", help="Deployment to look up (default: this package; env VERSIONCHECK_DEPLOYMENT_ID)")
    parser.add_argument("--source", choices=sorted(SOURCES), help="Runtime source (default: metadata; env VERSIONCHECK_SOURCE)")
    parser.add_argument("--placeholder", help="Text shown when the runtime identity is unavailable (default: unavailable)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Log level (default: INFO; env VERSIONCHECK_LOG_LEVEL)")
    parser.add_argument("--log-dir", help="Also write a daily log file here (env VERSIONCHECK_LOG_DIR)")
    parser.add_argument("--metrics", action="store_true", help="Log a lookup metrics summary on exit")
    parser.set_defaults(func=cmd_report, json=False, strict=False)

    subparsers = parser.add_subparsers(dest="command")
    rep = subparsers.add_parser("report", help="Print '<build seq>/<build label>....<runtime seq>/<runtime label>'")
    rep.add_argument("--json", action="store_true", help="Print the comparison as JSON")
    rep.add_argument("--strict", action="store_true", help="Exit 1 when the runtime identity is unavailable")
    rep.set_defaults(func=cmd_report)

    bld = subparsers.add_parser("build", help="Print the build-time identity only")
    bld.set_defaults(func=cmd_build)

    rt = subparsers.add_parser("runtime", help="Print the runtime identity only (exit 1 if unavailable)")
    rt.set_defaults(func=cmd_runtime)

    return parser


def main(argv=None):
    # Load .env if present (VERSIONCHECK_SOURCE, VERSIONCHECK_DEPLOYMENT_ID, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    settings = resolve_settings(args)
    reset_logger()
    logger = get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_dir is not None,
    )
    try:
        args.func(args, settings, logger)
    finally:
        if args.metrics:
            logger.log_metrics_summary()


if __name__ == "__main__":
    main()
