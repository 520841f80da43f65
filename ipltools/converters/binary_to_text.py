"""
Binary -> text IPL conversion.

Converts single files or a whole input directory. A file that cannot be
read, decoded or written is logged and skipped; batch conversion always
carries on with the next file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_HEADER_COMMENT
from ..errors import FileAccessError, InvalidHeader
from ..parsers.binary_ipl import decode
from ..utils import (
    log, logWarning, logError,
    read_file_bytes, write_file_text, list_dir, is_file, is_dir,
)
from .model_names import ModelNameResolver, ModelNameTable
from .text_ipl_writer import encode


def convert_binary_ipl(input_path: Union[str, Path], output_path: Union[str, Path],
                       model_names: Optional[ModelNameResolver] = None,
                       header_comment: Optional[str] = DEFAULT_HEADER_COMMENT) -> bool:
    """
    Convert one binary IPL file to text.

    Returns:
        True if the text file was written
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        data = read_file_bytes(input_path)
        ipl = decode(data, source=input_path.name)
    except FileAccessError as e:
        logError(str(e))
        return False
    except InvalidHeader as e:
        logWarning(f"{input_path.name}: {e}")
        return False

    text = encode(ipl.objects, ipl.cars, model_names=model_names, header_comment=header_comment)

    try:
        write_file_text(output_path, text)
    except FileAccessError as e:
        logError(str(e))
        return False

    return True


@dataclass
class ConversionSummary:
    converted: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.converted + self.failed


class BinaryIPLConverter:
    """
    Converts files from an input directory into an output directory.

    Usage:
        converter = BinaryIPLConverter("input", "output", ModelNameTable.load(ide_files))
        converter.convert_one("countn2_stream0.ipl")
        converter.convert_all()
    """

    def __init__(self, input_dir: Union[str, Path], output_dir: Union[str, Path],
                 model_names: Optional[ModelNameResolver] = None,
                 header_comment: Optional[str] = DEFAULT_HEADER_COMMENT):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.model_names = model_names if model_names is not None else ModelNameTable()
        self.header_comment = header_comment

    def convert_one(self, input_name: str, output_name: Optional[str] = None,
                    warn_overwrite: bool = True) -> bool:
        """
        Convert input_dir/input_name to output_dir/(output_name or input_name).
        """
        input_path = self.input_dir / input_name
        output_path = self.output_dir / (output_name or input_name)

        if not is_file(input_path):
            logError(f"File not found: {input_path}")
            return False
        if warn_overwrite and is_file(output_path):
            logWarning(f"Output file already exists (will be replaced): {output_path}")

        if convert_binary_ipl(input_path, output_path, self.model_names, self.header_comment):
            log(f"Binary IPL file converted successfully: {output_path}")
            return True

        logError(f"Failed to convert binary IPL file: {input_path}")
        return False

    def convert_all(self) -> ConversionSummary:
        """
        Convert every file in the input directory.

        Raises:
            FileAccessError: input directory missing or unreadable
        """
        if not is_dir(self.input_dir):
            raise FileAccessError(self.input_dir, "open", "folder not found")

        summary = ConversionSummary()
        for name in list_dir(self.input_dir):
            if not is_file(self.input_dir / name):
                continue
            if self.convert_one(name, warn_overwrite=False):
                summary.converted += 1
            else:
                summary.failed += 1

        log(f"Finished converting binary IPL files in '{self.input_dir}': "
            f"{summary.converted} converted, {summary.failed} failed")
        return summary
