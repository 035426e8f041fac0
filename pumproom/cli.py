"""Command line interface for pumproom package."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from rich.logging import RichHandler

from .cli_progress import PipelineProgressDisplay, mask_secret, render_configuration_summary
from .models import DEFAULT_API_URL, IgnoreList, PublishConfig
from .orchestrator import PublishOrchestrator
from .utils.events import FAILED, FINISH, STAGE_COMPLETE, STAGE_START


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level (or LOG_LEVEL)
    is provided. Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    env_level = os.getenv("LOG_LEVEL")
    if silent or (not debug and not log_level and not env_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, (log_level or env_level).upper(), logging.INFO)

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _build_config(args: argparse.Namespace, env: Mapping[str, str], cwd: Path) -> PublishConfig:
    """Merge arguments over PUMPROOM_* environment variables."""

    def pick(value: Optional[str], name: str) -> str:
        return (value if value is not None else env.get(name, "")).strip()

    realm = pick(args.realm, "PUMPROOM_REALM")
    repo_name = pick(args.repo_name, "PUMPROOM_REPO_NAME")
    api_key = pick(args.api_key, "PUMPROOM_API_KEY")

    missing = [
        flag
        for flag, value in (("--realm", realm), ("--repo-name", repo_name), ("--api-key", api_key))
        if not value
    ]
    if missing:
        raise CLIError(f"missing required input(s): {', '.join(missing)}")

    root_dir = pick(args.root_dir, "PUMPROOM_ROOT_DIR")
    work_dir = args.work_dir if args.work_dir is not None else cwd

    return PublishConfig(
        root_dir=Path(root_dir).expanduser() if root_dir else cwd,
        work_dir=Path(work_dir).expanduser(),
        realm=realm,
        repo_name=repo_name,
        api_key=api_key,
        ignore=IgnoreList.from_input(pick(args.ignore, "PUMPROOM_IGNORE")),
        api_url=pick(args.api_url, "PUMPROOM_API_URL") or DEFAULT_API_URL,
        schema_url=pick(args.schema_url, "PUMPROOM_SCHEMA_URL") or None,
    )


async def _run_publish(config: PublishConfig, display: PipelineProgressDisplay) -> int:
    async with PublishOrchestrator(config) as publisher:
        publisher.on(STAGE_START, display.on_stage_start)
        publisher.on(STAGE_COMPLETE, display.on_stage_complete)
        publisher.on(FAILED, display.on_failed)
        publisher.on(FINISH, display.on_finish)
        result = await publisher.run()
    return 0 if result.success else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pumproom-publish",
        description="Validate, archive and publish a content repository to PumpRoom.",
    )
    parser.add_argument(
        "--root-dir",
        default=None,
        help="Repository root to publish (default PUMPROOM_ROOT_DIR or current directory)",
    )
    parser.add_argument(
        "--ignore",
        default=None,
        help="Comma-separated path fragments to exclude; .git and .github are always excluded",
    )
    parser.add_argument("--realm", default=None, help="PumpRoom realm (default PUMPROOM_REALM)")
    parser.add_argument(
        "--repo-name",
        default=None,
        help="Repository name (default PUMPROOM_REPO_NAME)",
    )
    parser.add_argument("--api-key", default=None, help="API key (default PUMPROOM_API_KEY)")
    parser.add_argument(
        "--api-url",
        default=None,
        help=f"API base URL (default PUMPROOM_API_URL or {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--schema-url",
        default=None,
        help="Schema validation URL (default PUMPROOM_SCHEMA_URL or <api-url>/inzhenerka_schema)",
    )
    parser.add_argument(
        "--work-dir",
        type=Path,
        default=None,
        help="Where the temporary archive is written (default current directory)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="pumproom-publish (from pumproom)",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    try:
        config = _build_config(args, os.environ, Path.cwd())
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    render_configuration_summary(
        {
            "Root Dir": str(config.root_dir),
            "Ignore": str(config.ignore),
            "Realm": config.realm,
            "Repository": config.repo_name,
            "API Key": mask_secret(config.api_key),
            "API": config.api_url,
            "Schema API": config.resolved_schema_url,
            "Archive": str(config.archive_path),
            "Env File": str(used_env_file) if used_env_file else "-",
            "Logging": effective_log_mode,
        }
    )

    try:
        return asyncio.run(_run_publish(config, PipelineProgressDisplay()))
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
