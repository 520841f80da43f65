"""
Unified logging for the IPL tools.

Console output plus a run log file. Warnings and errors are tracked so a
batch run can print a summary at the end instead of stopping on the first
bad file.

Usage:
    from ipltools.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    init_logging(Path("ipltools.log"))

    log("Converting binary IPLs...")           # Info - progress and results
    logWarning("truncated object array")       # Recoverable, output may be incomplete
    logError("cannot open input/foo.ipl")      # One file could not be processed
    logDebug("skipping malformed line 12")     # Log file only

    print_summary()
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

DEFAULT_LOG_NAME = "ipltools.log"


# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


# Module state
_log_file = None
_log_path: Optional[Path] = None
_initialized = False
_warnings: List[str] = []
_errors: List[str] = []


def init_logging(log_path: Optional[Path] = None):
    """
    Start a logging session writing to the console and to a log file.

    Calling this again while a session is open does nothing; call
    close_logging() first to start over with fresh counters.

    Args:
        log_path: Log file location. Defaults to ipltools.log in the
                  current working directory.
    """
    global _log_file, _log_path, _initialized, _warnings, _errors

    if _initialized:
        return

    _warnings = []
    _errors = []

    _log_path = Path(log_path) if log_path is not None else Path.cwd() / DEFAULT_LOG_NAME
    _initialized = True

    try:
        _log_path.parent.mkdir(parents=True, exist_ok=True)
        _log_file = open(_log_path, 'w', encoding='utf-8')

        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        _log_file.write(f"Run started: {timestamp}\n")
        _log_file.write("=" * 70 + "\n\n")
        _log_file.flush()

        atexit.register(close_logging)

    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None


def close_logging():
    """Close the log file and end the session."""
    global _log_file, _initialized

    if _log_file is not None:
        try:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
            _log_file.write(f"\n{'=' * 70}\n")
            _log_file.write(f"Run finished: {timestamp}\n")
            _log_file.close()
        except OSError:
            pass
        _log_file = None

    _initialized = False


def get_log_path() -> Optional[Path]:
    """Path of the current (or last) log file."""
    return _log_path


def print_summary():
    """Print warning and error details plus totals."""
    log("\n" + "=" * 70)
    log("RUN SUMMARY")
    log("=" * 70)

    if _errors:
        print(f"\n{Colors.RED}{Colors.BOLD}Errors ({len(_errors)}):{Colors.RESET}")
        for err in _errors:
            print(f"  {Colors.RED}- {err}{Colors.RESET}")
        _write_to_file(f"\nErrors ({len(_errors)}):")
        for err in _errors:
            _write_to_file(f"  - {err}")

    if _warnings:
        print(f"\n{Colors.YELLOW}{Colors.BOLD}Warnings ({len(_warnings)}):{Colors.RESET}")
        for warn in _warnings:
            print(f"  {Colors.YELLOW}- {warn}{Colors.RESET}")
        _write_to_file(f"\nWarnings ({len(_warnings)}):")
        for warn in _warnings:
            _write_to_file(f"  - {warn}")

    print()
    if _errors:
        print(f"{Colors.RED}{Colors.BOLD}{len(_errors)} Error(s){Colors.RESET}", end="")
    else:
        print(f"{Colors.GREEN}0 Errors{Colors.RESET}", end="")

    print(" | ", end="")

    if _warnings:
        print(f"{Colors.YELLOW}{Colors.BOLD}{len(_warnings)} Warning(s){Colors.RESET}")
    else:
        print(f"{Colors.GREEN}0 Warnings{Colors.RESET}")

    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def get_warnings() -> List[str]:
    """Warnings logged in the current session, oldest first."""
    return list(_warnings)


def _write_to_file(msg: str, end: str = "\n"):
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """Log an info message to the console and the log file."""
    if not _initialized:
        init_logging()

    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning. Shown in yellow and counted for the summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error. Shown in red on stderr and counted for the summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """Log a debug message to the log file only."""
    if not _initialized:
        init_logging()

    _write_to_file(f"[DEBUG] {msg}", end)
