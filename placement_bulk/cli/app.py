from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..api.client import CollegeApiClient
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import ParseError, UnsupportedFileError
from ..logging.error_log import (
    PARSE_FAILED,
    ROW_REJECTED,
    SUBMISSION_FAILED,
    ErrorLogBuffer,
    ErrorRecord,
)
from ..logging.init import log_summary, setup_logging
from ..models.config_models import UploadConfig
from ..models.parsed_upload import ParsedUpload
from ..models.upload_result import UploadResult
from ..services.pipeline import prepare_upload
from ..services.submitter import BatchSubmitter, SubmissionError, confirmation_prompt
from ..services.summary import (
    render_error_lines,
    render_failed_lines,
    render_preview,
    render_summary_body,
)
from ..services.template import export_template

"""CLI entrypoint.

    placement-bulk template [--output-dir DIR]
    placement-bulk check FILE
    placement-bulk upload FILE [--yes]

Exit codes: 0 clean, 2 row-level problems (validation errors, rows rejected by
the server, or upload declined), 1 fatal (config, unreadable file, failed
submission).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ROW_ERRORS = 2

PARSE_FAILED_MESSAGE = "Failed to parse file. Please check the format."


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so PLACEMENT_API_URL / PLACEMENT_API_TOKEN win over the config file."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="placement-bulk", description="Student bulk upload for the placement portal")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config path (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    t = sub.add_parser("template", help="Write the upload template spreadsheet")
    t.add_argument("--output-dir", type=Path, default=Path("."), help="Directory to write into")

    c = sub.add_parser("check", help="Validate a spreadsheet without uploading")
    c.add_argument("file", type=Path)

    u = sub.add_parser("upload", help="Validate a spreadsheet and upload it")
    u.add_argument("file", type=Path)
    u.add_argument("--yes", action="store_true", help="Upload even if some rows have errors")
    return p.parse_args(argv)


def _load_run_config(logger: logging.Logger, args: argparse.Namespace) -> UploadConfig:
    """Load the config for check/upload.

    ``check`` never calls the API, so it runs on defaults when no --config is
    given and the default file is absent, and does not need an api section.
    """
    checking = args.command == "check"
    path = args.config or DEFAULT_CONFIG_PATH
    if checking and args.config is None and not path.exists():
        logger.debug(f"no config at {path}, using defaults")
        return UploadConfig()
    return load_config(path, require_api=not checking)


def _ask_confirm(error_count: int) -> bool:
    try:
        answer = input(f"{confirmation_prompt(error_count)} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _build_client(cfg: UploadConfig) -> CollegeApiClient:
    assert cfg.api is not None  # upload loads the config with require_api=True
    return CollegeApiClient(cfg.api.base_url, token=cfg.api.token, timeout=cfg.api.timeout)


def _report_parsed(logger: logging.Logger, parsed: ParsedUpload, preview_rows: int) -> None:
    for line in render_error_lines(parsed):
        logger.warning(line)
    if preview_rows > 0:
        for line in render_preview(parsed, limit=preview_rows):
            logger.info(line)


def _log_summary(parsed: ParsedUpload, result: UploadResult | None = None) -> None:
    log_summary(render_summary_body(parsed, result))


def _finish(error_log: ErrorLogBuffer, logger: logging.Logger, code: int) -> int:
    path = error_log.flush()
    if path is not None:
        logger.info(f"error log: {path}")
    return code


def _run_template(logger: logging.Logger, args: argparse.Namespace) -> int:
    try:
        path = export_template(args.output_dir)
    except OSError as e:
        logger.error(f"template: {e}")
        return EXIT_FATAL
    logger.info(f"template written: {path}")
    return EXIT_SUCCESS


def _run_upload(logger: logging.Logger, args: argparse.Namespace, cfg: UploadConfig) -> int:
    error_log = ErrorLogBuffer(Path(cfg.logs_dir))
    path: Path = args.file

    if not path.exists():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL

    try:
        parsed = prepare_upload(
            path,
            cfg.validation_options,
            keep_na_strings=cfg.keep_na_strings,
            error_log=error_log,
        )
    except UnsupportedFileError as e:
        logger.error(str(e))
        return EXIT_FATAL
    except ParseError as e:
        logger.error(PARSE_FAILED_MESSAGE)
        logger.debug(f"parse error: {e}")
        error_log.append(ErrorRecord.create(path.name, -1, PARSE_FAILED, str(e)))
        return _finish(error_log, logger, EXIT_FATAL)

    _report_parsed(logger, parsed, cfg.preview_rows)

    if args.command == "check":
        _log_summary(parsed)
        code = EXIT_ROW_ERRORS if parsed.has_errors else EXIT_SUCCESS
        return _finish(error_log, logger, code)

    confirm = (lambda _count: True) if args.yes else _ask_confirm
    with _build_client(cfg) as client:
        submitter = BatchSubmitter(client, confirm=confirm)
        try:
            result = submitter.submit(parsed.students, parsed.error_count)
        except SubmissionError as e:
            logger.error(e.message)
            error_log.append(ErrorRecord.create(path.name, -1, SUBMISSION_FAILED, e.message))
            _log_summary(parsed)
            return _finish(error_log, logger, EXIT_FATAL)

    if result is None:
        _log_summary(parsed)
        return _finish(error_log, logger, EXIT_ROW_ERRORS)

    for line in render_failed_lines(result):
        logger.warning(f"failed: {line}")
    for entry in result.failed:
        error_log.append(ErrorRecord.create(path.name, -1, ROW_REJECTED, f"{entry.label}: {entry.error}"))

    _log_summary(parsed, result)
    code = EXIT_ROW_ERRORS if result.failed_count else EXIT_SUCCESS
    return _finish(error_log, logger, code)


def main(argv: list[str] | None = None) -> int:
    # None only: an explicit [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    if args.command == "template":
        return _run_template(logger, args)

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _load_run_config(logger, args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    return _run_upload(logger, args, cfg)
