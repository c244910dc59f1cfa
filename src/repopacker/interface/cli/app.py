from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults or persisted session, then command-line overrides, then
validation), pipeline execution and delivery of the document to stdout,
a file or the clipboard.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from repopacker.core.pipeline.engine import get_basic_stats, run_pipeline
from repopacker.core.pipeline.stages.validator import validate_config
from repopacker.domain.config import get_default_config, load_config, save_config
from repopacker.domain.errors import InvalidRepositoryError
from repopacker.domain.file_models import BasicStats
from repopacker.domain.pipeline_models import PipelineResult, ProgressEvent
from repopacker.infra.clipboard import copy_to_clipboard
from repopacker.infra.fs import format_bytes, normalize_path, save_output
from repopacker.infra.logging import LoggingConfig, configure_logging, get_logger
from repopacker.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        int: 0 on success, 1 on pipeline failure, 2 for an invalid input
        path, 130 when interrupted.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=None))
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    options, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    input_path = normalize_path(raw_conf.get("input_path"), os.getcwd())

    if args.save_config:
        session = options.to_dict()
        session["input_path"] = input_path
        if not save_config(session):
            print("WARNING: Could not persist configuration.", file=sys.stderr)

    if args.dump_config:
        dump = options.to_dict()
        dump["input_path"] = input_path
        print(json.dumps(dump, ensure_ascii=False, indent=2))
        return 0

    if not os.path.isdir(input_path):
        msg = f"Input path does not exist or is not a directory: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        if args.stats:
            stats = get_basic_stats(input_path, options)
            _print_stats(stats, as_json=args.json_output)
            return 0

        result = run_pipeline(input_path, options, progress=_log_progress)
    except KeyboardInterrupt:
        print("Operation interrupted by user.", file=sys.stderr)
        return 130
    except InvalidRepositoryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        if args.json_output:
            print(json.dumps(_result_payload(result), ensure_ascii=False, indent=2))
        return 1

    delivered = _deliver(result, args)

    if args.json_output:
        payload = _result_payload(result)
        payload["delivered"] = delivered
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif not delivered:
        sys.stdout.write(result.document)
    else:
        _print_human_summary(result, delivered)

    return 0 if all(delivered.values()) else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# OUTPUT SINKS
# -----------------------------------------------------------------------------

def _deliver(result: PipelineResult, args: Any) -> Dict[str, bool]:
    """Send the document to the requested sinks; returns sink -> success."""
    delivered: Dict[str, bool] = {}
    repo_name = result.summary.get("repository_name", "repository")

    if args.output_file or args.save:
        saved = save_output(
            result.document,
            file_path=args.output_file,
            directory=None if args.output_file else os.getcwd(),
            repository_name=repo_name,
        )
        if not saved.success:
            print(f"ERROR: Could not save output: {saved.error}", file=sys.stderr)
        else:
            print(f"Saved: {saved.file_path}")
        delivered["file"] = saved.success

    if args.clipboard:
        copied = copy_to_clipboard(result.document)
        if not copied:
            print("ERROR: Clipboard is not available on this system.", file=sys.stderr)
        delivered["clipboard"] = copied

    return delivered


def _log_progress(event: ProgressEvent) -> None:
    details = f" ({event.details})" if event.details else ""
    logger.debug(f"[{event.progress:3d}%] {event.status}: {event.message}{details}")

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_payload(result: PipelineResult) -> Dict[str, Any]:
    return {
        "ok": result.ok,
        "error": result.error,
        "base_path": result.base_path,
        "target_profile": result.target_profile,
        "summary": result.summary,
    }


def _print_human_summary(result: PipelineResult, delivered: Dict[str, bool]) -> None:
    summary = result.summary
    print(f"Repository: {summary.get('repository_name')} ({result.target_profile})")
    print(f"Files processed: {summary.get('processed', 0)}")
    print(f"Files skipped: {summary.get('skipped', 0)}")
    print(f"Total size: {format_bytes(summary.get('total_size', 0))}")
    print(f"Estimated tokens: {summary.get('total_tokens', 0):,}")
    if delivered.get("clipboard"):
        print("Copied to clipboard.")


def _print_stats(stats: BasicStats, as_json: bool) -> None:
    if as_json:
        print(json.dumps(asdict(stats), ensure_ascii=False, indent=2))
        return

    print(f"Files: {stats.file_count}")
    print(f"Total size: {format_bytes(stats.total_size_bytes)}")
    print(f"Skipped: {stats.skipped_count}")
    if stats.file_type_counts:
        print("File types:")
        for ext, count in sorted(stats.file_type_counts.items(), key=lambda kv: (-kv[1], kv[0])):
            print(f"  {ext}: {count}")
    if stats.largest_files:
        print("Largest files:")
        for item in stats.largest_files:
            print(f"  {item.name} ({item.size_formatted})")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
