"""
File access helpers.

Every OS-level failure is turned into FileAccessError so callers can log
and skip a single file without catching OSError subclasses one by one.
"""

from pathlib import Path
from typing import List, Union

from ..errors import FileAccessError

PathLike = Union[str, Path]


def read_file_bytes(path: PathLike) -> bytes:
    """Read a whole file into memory."""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(path, "read", e.strerror or str(e)) from e


def write_file_bytes(path: PathLike, data: bytes):
    """Create (or replace) a file, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise FileAccessError(path, "write", e.strerror or str(e)) from e


def write_file_text(path: PathLike, text: str):
    write_file_bytes(path, text.encode('utf-8'))


def list_dir(path: PathLike) -> List[str]:
    """Names of the entries in a directory, sorted by name."""
    try:
        return sorted(entry.name for entry in Path(path).iterdir())
    except OSError as e:
        raise FileAccessError(path, "list", e.strerror or str(e)) from e


def is_file(path: PathLike) -> bool:
    return Path(path).is_file()


def is_dir(path: PathLike) -> bool:
    return Path(path).is_dir()
