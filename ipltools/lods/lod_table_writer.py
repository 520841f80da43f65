"""
LOD table writer.

Writes the resolved LOD pairs as a C++ initializer for the native side:

    // Total: 2
    OBJ_LOD_MODELS = {{
    {615, 780}, // veg_tree3 => lod_tree3 (CountN2)
    {616, 781}, // veg_tree4 => (?) (CountN2)
    }};

Entries are sorted by high-detail model ID. The output has no trailing
newline and must stay byte-for-byte stable; the consumer pastes it as is.
"""

from pathlib import Path
from typing import List, Optional, Union

from ..constants import LOD_TABLE_NAME, LOD_TABLE_UNKNOWN_NAME
from ..converters.model_names import ModelNameResolver
from ..utils import log, write_file_text
from .resolver import LodResolverState


def _model_name(model_names: Optional[ModelNameResolver], model_id: int) -> str:
    name = model_names.lookup(model_id) if model_names is not None else None
    return name or LOD_TABLE_UNKNOWN_NAME


def format_lod_table(state: LodResolverState, model_names: Optional[ModelNameResolver] = None) -> str:
    """Render the LOD table artifact."""
    lines: List[str] = []
    for high_id, assignment in state.sorted_assignments():
        lines.append(
            f"{{{high_id}, {assignment.low_model_id}}}, // "
            f"{_model_name(model_names, high_id)} => "
            f"{_model_name(model_names, assignment.low_model_id)} "
            f"({assignment.ipl_name})\n"
        )

    return (
        f"// Total: {len(lines)}\n"
        f"{LOD_TABLE_NAME} = {{{{\n"
        + "".join(lines)
        + "}};"
    )


def write_lod_table(state: LodResolverState, model_names: Optional[ModelNameResolver],
                    output_path: Union[str, Path]):
    """
    Write the LOD table artifact.

    Raises:
        FileAccessError: output could not be written
    """
    write_file_text(output_path, format_lod_table(state, model_names))
    log(f"LOD table written to {output_path} ({len(state.lod_table)} entries)")
