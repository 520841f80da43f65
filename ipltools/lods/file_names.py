"""
File identity rules for LOD resolution.

Two naming conventions meet here and must not be mixed up:

- Text IPLs: "CountN2.ipl". The display name drops the last four
  characters (the extension) and keeps its case: "CountN2". The canonical
  name is the display name lower-cased: "countn2".
- Stream IPLs: "countn2_stream3.ipl". Everything from the first "_stream"
  on is dropped and the rest lower-cased: "countn2". That is the canonical
  name of the text IPL whose object list the stream's LOD indexes point into.
"""

from typing import Optional

from ..constants import STREAM_MARKER, TEXT_IPL_SUFFIX_LENGTH


def text_ipl_name(file_name: str) -> str:
    """Display name of a text IPL: file name minus its 4-character extension."""
    return file_name[:-TEXT_IPL_SUFFIX_LENGTH]


def canonical_text_name(file_name: str) -> str:
    """Canonical name of a text IPL file."""
    return text_ipl_name(file_name).lower()


def stream_target_name(file_name: str) -> Optional[str]:
    """Canonical name of the text IPL a stream file refers to, or None."""
    marker = file_name.find(STREAM_MARKER)
    if marker == -1:
        return None
    return file_name[:marker].lower()
