"""Central logging configuration for the catalog tools.

The catalog reader itself only emits records through module level loggers.
This module wires those records to a log file (and, for interactive sessions,
to stderr) so that silently tolerated catalog anomalies can still be traced
after the fact.

Two environment variables allow customising where the log file is written:

``INSTRUMENT_CATALOG_LOG_FILE``
    Absolute path to the log file that should be created.

``INSTRUMENT_CATALOG_LOG_DIR``
    Directory where the default log file name will be created.  Ignored when
    ``INSTRUMENT_CATALOG_LOG_FILE`` is present.
"""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from pathlib import Path
import sys
from typing import Iterable

_LOG_FILE_ENV = "INSTRUMENT_CATALOG_LOG_FILE"
_LOG_DIR_ENV = "INSTRUMENT_CATALOG_LOG_DIR"
_DEFAULT_DIRNAME = ".instrument_catalog"
_DEFAULT_LOGNAME = "catalog.log"
_CONFIGURED = False
_LOG_PATH: Path | None = None
_HANDLER_TAG = "_instrument_catalog_handler"
_FILE_HANDLER: logging.FileHandler | None = None
_STREAM_HANDLER: logging.StreamHandler | None = None

USER_HOME_PLACEHOLDER = "<user_home>"


class LogVerbosity(str, Enum):
    """Verbosity levels supported by the catalog log file."""

    DISABLED = "disabled"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"


_VERBOSITY_LEVELS: dict[LogVerbosity, int] = {
    LogVerbosity.DISABLED: logging.CRITICAL + 1,
    LogVerbosity.ERROR: logging.ERROR,
    LogVerbosity.WARNING: logging.WARNING,
    LogVerbosity.INFO: logging.INFO,
    LogVerbosity.VERBOSE: logging.DEBUG,
}

_DEFAULT_VERBOSITY = LogVerbosity.INFO
_CURRENT_VERBOSITY = _DEFAULT_VERBOSITY


def _home_candidates() -> set[str]:
    candidates: set[str] = set()
    home_str = str(Path.home())
    if home_str:
        candidates.add(home_str)
    for env_var in ("HOME", "USERPROFILE"):
        value = os.environ.get(env_var)
        if value:
            candidates.add(os.path.expanduser(value))
    return {
        os.path.normpath(candidate)
        for candidate in candidates
        if candidate and os.path.normpath(candidate) not in {os.sep, "."}
    }


def _build_redaction_patterns() -> list[re.Pattern[str]]:
    flags = re.IGNORECASE if os.name == "nt" else 0
    # Longest first so nested home directories are replaced as a whole.
    homes = sorted(_home_candidates(), key=len, reverse=True)
    return [re.compile(re.escape(home), flags) for home in homes]


_REDACTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_build_redaction_patterns())


def _sanitize_text(message: str) -> str:
    if not message or not _REDACTION_PATTERNS:
        return message
    redacted = message
    for pattern in _REDACTION_PATTERNS:
        redacted = pattern.sub(USER_HOME_PLACEHOLDER, redacted)
    return redacted


class _RedactingFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        return _sanitize_text(formatted)


def _make_formatter() -> logging.Formatter:
    return _RedactingFormatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def coerce_verbosity(value: LogVerbosity | str | None, default: LogVerbosity = _DEFAULT_VERBOSITY) -> LogVerbosity:
    """Map ``value`` onto a :class:`LogVerbosity`, falling back to ``default``."""

    if isinstance(value, LogVerbosity):
        return value
    if isinstance(value, str):
        try:
            return LogVerbosity(value.strip().lower())
        except ValueError:
            return default
    return default


def ensure_app_logging(verbosity: LogVerbosity | str | None = None) -> Path:
    """Configure the root logger to record catalog diagnostics.

    The first invocation installs a file handler and, when stderr is an
    interactive terminal, a console handler at WARNING level.  Subsequent
    calls only adjust the verbosity (when given) and return the already
    configured log file path.
    """

    global _CONFIGURED, _LOG_PATH, _FILE_HANDLER, _STREAM_HANDLER

    if _CONFIGURED and _LOG_PATH is not None:
        if verbosity is not None:
            set_file_log_verbosity(verbosity)
        return _LOG_PATH

    if verbosity is not None:
        _set_current_verbosity(coerce_verbosity(verbosity))

    log_path = _resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    formatter = _make_formatter()

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(_VERBOSITY_LEVELS[_CURRENT_VERBOSITY])
    file_handler.setFormatter(formatter)
    setattr(file_handler, _HANDLER_TAG, True)
    root.addHandler(file_handler)
    _FILE_HANDLER = file_handler

    if _should_log_to_stderr(root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.WARNING)
        stream_handler.setFormatter(formatter)
        setattr(stream_handler, _HANDLER_TAG, True)
        root.addHandler(stream_handler)
        _STREAM_HANDLER = stream_handler

    _CONFIGURED = True
    _LOG_PATH = log_path

    logging.getLogger(__name__).info(
        "Writing catalog logs to %s (verbosity=%s)",
        log_path,
        _CURRENT_VERBOSITY.value,
    )
    return log_path


def set_file_log_verbosity(verbosity: LogVerbosity | str) -> None:
    """Adjust the minimum severity recorded in the log file."""

    if isinstance(verbosity, str):
        try:
            verbosity = LogVerbosity(verbosity.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported log verbosity: {verbosity}") from exc

    ensure_app_logging()
    handler = _FILE_HANDLER
    if handler is None:  # pragma: no cover - defensive
        return

    _set_current_verbosity(verbosity)
    handler.setLevel(_VERBOSITY_LEVELS[verbosity])
    logging.getLogger(__name__).info("File log verbosity set to %s", verbosity.value)


def get_file_log_verbosity() -> LogVerbosity:
    """Return the current verbosity level for the log file."""

    return _CURRENT_VERBOSITY


def _set_current_verbosity(verbosity: LogVerbosity) -> None:
    global _CURRENT_VERBOSITY
    _CURRENT_VERBOSITY = verbosity


def _resolve_log_path() -> Path:
    env_file = os.environ.get(_LOG_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()

    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser() / _DEFAULT_LOGNAME

    return Path.home() / _DEFAULT_DIRNAME / "logs" / _DEFAULT_LOGNAME


def _should_log_to_stderr(handlers: Iterable[logging.Handler]) -> bool:
    stderr = getattr(sys, "stderr", None)
    if stderr is None:
        return False
    is_tty = getattr(stderr, "isatty", None)
    if not callable(is_tty):
        return False
    try:
        if not is_tty():
            return False
    except (OSError, ValueError):  # pragma: no cover - closed or odd stderr
        return False

    for handler in handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is stderr:
            return False
    return True


def _reset_for_tests() -> None:
    """Remove handlers installed by :func:`ensure_app_logging`."""

    global _CONFIGURED, _LOG_PATH, _FILE_HANDLER, _STREAM_HANDLER

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    _CONFIGURED = False
    _LOG_PATH = None
    _FILE_HANDLER = None
    _STREAM_HANDLER = None
    _set_current_verbosity(_DEFAULT_VERBOSITY)


__all__ = [
    "LogVerbosity",
    "coerce_verbosity",
    "ensure_app_logging",
    "get_file_log_verbosity",
    "set_file_log_verbosity",
]
