# IPL tool utilities
from .logging import (
    log, logWarning, logError, logDebug, init_logging, close_logging,
    print_summary, get_counts, get_warnings, get_log_path,
)
from .files import read_file_bytes, write_file_bytes, write_file_text, list_dir, is_file, is_dir
