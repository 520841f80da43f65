import pytest

from ipltools.utils import init_logging, close_logging


@pytest.fixture(autouse=True)
def run_log(tmp_path):
    # Fresh warning/error counters and a throwaway log file per test
    close_logging()
    log_path = tmp_path / "test.log"
    init_logging(log_path)
    yield log_path
    close_logging()
