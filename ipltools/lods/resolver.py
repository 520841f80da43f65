"""
LOD Resolver

Links high-detail model IDs to their low-detail model IDs by reading IPLs.

Each object line ends with a LOD index: the position, in the same file's
object list, of the object's low-detail counterpart. Stream IPLs
(countn2_stream0.ipl, ...) are the exception: their LOD indexes point into
the object list of the matching text IPL (countn2.ipl). Those references
are parked in the pending table, keyed by the target's canonical name,
until that text IPL is scanned.

Batch order:
1. Stream pass: every stream IPL, pending references only.
2. Text pass: every text IPL, resolving its own references and then any
   pending references that target it.

The stream pass has to finish before the text pass starts, otherwise
references to text IPLs that were already scanned are never resolved.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..converters.model_names import ModelNameResolver, ModelNameTable
from ..errors import FileAccessError, InvalidHeader, LodConflict
from ..parsers.binary_ipl import decode, is_binary_ipl
from ..parsers.data_types import TextRecord
from ..parsers.text_ipl import LodRefs, get_lod_pairs, parse_text_ipl_lines, record_at, records_from_binary
from ..utils import log, logDebug, logError, logWarning, read_file_bytes, list_dir, is_file, is_dir
from ..constants import LOD_TABLE_UNKNOWN_NAME
from .file_names import canonical_text_name, stream_target_name, text_ipl_name


@dataclass
class LodAssignment:
    """Low-detail model for one high-detail model, and where it was found."""
    low_model_id: int
    ipl_name: str


@dataclass
class LodResolverState:
    """
    Everything accumulated over one batch.

    lod_table: high-detail model ID -> LodAssignment (first one wins)
    pending:   canonical text IPL name -> {lod_index: high-detail model ID}
    conflicts: rejected assignments, in the order they were seen
    """
    lod_table: Dict[int, LodAssignment] = field(default_factory=dict)
    pending: Dict[str, Dict[int, int]] = field(default_factory=dict)
    conflicts: List[LodConflict] = field(default_factory=list)

    def sorted_assignments(self) -> List[Tuple[int, LodAssignment]]:
        """Assignments in ascending high-detail model ID."""
        return sorted(self.lod_table.items())

    @property
    def pending_count(self) -> int:
        return sum(len(refs) for refs in self.pending.values())


class LodResolver:
    """
    Scans IPL files into a LodResolverState.

    Usage:
        resolver = LodResolver(model_names=names)
        state = resolver.run_batch("output", "other_stuff/normal_ipls")
        write_lod_table(state, names, "server/lod_table.hpp")
    """

    def __init__(self, state: Optional[LodResolverState] = None,
                 model_names: Optional[ModelNameResolver] = None):
        self.state = state if state is not None else LodResolverState()
        self.model_names = model_names if model_names is not None else ModelNameTable()

    def _describe_model(self, model_id: int) -> str:
        name = self.model_names.lookup(model_id) or LOD_TABLE_UNKNOWN_NAME
        return f"{model_id} ({name})"

    def assign(self, high_id: int, low_id: int, ipl_name: str) -> bool:
        """
        Record low_id as the LOD model of high_id.

        An existing assignment is never replaced. Any later proposal for
        high_id is recorded and logged as a conflict, even the same pair.

        Returns:
            True if a new assignment was stored
        """
        current = self.state.lod_table.get(high_id)
        if current is None:
            self.state.lod_table[high_id] = LodAssignment(low_id, ipl_name)
            return True

        conflict = LodConflict(
            high_id, low_id, ipl_name, current.low_model_id, current.ipl_name,
            message=(
                f"Trying to assign LLOD {self._describe_model(low_id)} ({ipl_name}) "
                f"to HLOD {self._describe_model(high_id)}, which already has LLOD "
                f"{self._describe_model(current.low_model_id)} - {current.ipl_name}"
            ),
        )
        self.state.conflicts.append(conflict)
        logWarning(str(conflict))
        return False

    def read_records(self, filepath: Union[str, Path]) -> Tuple[List[TextRecord], LodRefs]:
        """
        Objects and LOD references of a text IPL, or of a binary IPL
        decoded in memory.

        Raises:
            FileAccessError: file could not be read
            InvalidHeader: file looks binary but the header is broken
        """
        filepath = Path(filepath)
        data = read_file_bytes(filepath)
        if is_binary_ipl(data):
            return records_from_binary(decode(data, source=filepath.name), self.model_names)
        return parse_text_ipl_lines(data.decode('latin-1').split("\n"), source=filepath.name)

    def scan_text_ipl(self, filepath: Union[str, Path]) -> int:
        """
        Resolve a text IPL's own LOD references and the pending references
        that target it. Pending references for this file are dropped after.

        Returns:
            Number of new assignments
        """
        filepath = Path(filepath)
        records, lod_refs = self.read_records(filepath)
        ipl_name = text_ipl_name(filepath.name)
        assigned = 0

        for high, low in get_lod_pairs(records, lod_refs):
            if self.assign(high.model_id, low.model_id, ipl_name):
                assigned += 1

        pending = self.state.pending.pop(canonical_text_name(filepath.name), None)
        if pending:
            for lod_index, high_id in pending.items():
                low = record_at(records, lod_index)
                if low is None:
                    logDebug(f"{filepath.name}: no object at LOD index {lod_index} "
                             f"for HLOD {self._describe_model(high_id)}")
                    continue
                if self.assign(high_id, low.model_id, ipl_name):
                    assigned += 1

        logDebug(f"{filepath.name}: {len(records)} objects, {assigned} LODs assigned")
        return assigned

    def scan_stream_ipl(self, filepath: Union[str, Path]) -> int:
        """
        Park a stream IPL's LOD references under its target text IPL.

        Files without a _stream suffix are skipped.

        Returns:
            Number of references stored
        """
        filepath = Path(filepath)
        target = stream_target_name(filepath.name)
        if target is None:
            logDebug(f"{filepath.name}: not a stream IPL, skipped")
            return 0

        records, lod_refs = self.read_records(filepath)
        pending = self.state.pending.setdefault(target, {})
        for lod_index, record_index in lod_refs.items():
            pending[lod_index] = records[record_index].model_id

        logDebug(f"{filepath.name}: {len(lod_refs)} LOD references pending for '{target}'")
        return len(lod_refs)

    def _scan_file(self, filepath: Path, stream: bool) -> bool:
        try:
            if stream:
                self.scan_stream_ipl(filepath)
            else:
                self.scan_text_ipl(filepath)
        except FileAccessError as e:
            logError(f"Error parsing {filepath.name}: {e}")
            return False
        except InvalidHeader as e:
            logWarning(f"Error parsing {filepath.name}: {e}")
            return False
        return True

    def scan_stream_dir(self, folder: Union[str, Path]) -> int:
        """Stream pass over the files directly inside folder. Returns files scanned."""
        folder = Path(folder)
        if not is_dir(folder):
            logWarning(f"Stream IPL folder not found: {folder}")
            return 0

        scanned = 0
        for entry in list_dir(folder):
            path = folder / entry
            if is_file(path) and self._scan_file(path, stream=True):
                scanned += 1
        return scanned

    def scan_text_dir(self, folder: Union[str, Path]) -> int:
        """Text pass over folder and its immediate subfolders. Returns files scanned."""
        folder = Path(folder)
        if not is_dir(folder):
            logWarning(f"Text IPL folder not found: {folder}")
            return 0

        scanned = 0
        for entry in list_dir(folder):
            path = folder / entry
            if is_file(path):
                if self._scan_file(path, stream=False):
                    scanned += 1
            elif is_dir(path):
                for sub_entry in list_dir(path):
                    sub_path = path / sub_entry
                    if is_file(sub_path) and self._scan_file(sub_path, stream=False):
                        scanned += 1
        return scanned

    def report_unresolved(self):
        """Warn about pending references whose text IPL was never scanned."""
        for target, refs in sorted(self.state.pending.items()):
            if refs:
                logWarning(f"{len(refs)} LOD reference(s) to '{target}' never resolved "
                           f"(text IPL not found)")

    def run_batch(self, stream_dir: Union[str, Path], text_dir: Union[str, Path]) -> LodResolverState:
        """Stream pass, then text pass. Returns the accumulated state."""
        log(f"Scanning stream IPLs in {stream_dir}...")
        streams = self.scan_stream_dir(stream_dir)
        log(f"  {streams} files, {self.state.pending_count} LOD references pending")

        log(f"Scanning text IPLs in {text_dir}...")
        texts = self.scan_text_dir(text_dir)
        log(f"  {texts} files, {len(self.state.lod_table)} LOD models linked")

        self.report_unresolved()
        return self.state
