"""
LODs Package

Cross-file LOD resolution and the LOD table artifact.
"""

from .file_names import text_ipl_name, canonical_text_name, stream_target_name
from .resolver import LodAssignment, LodResolverState, LodResolver
from .lod_table_writer import format_lod_table, write_lod_table

__all__ = [
    'text_ipl_name',
    'canonical_text_name',
    'stream_target_name',
    'LodAssignment',
    'LodResolverState',
    'LodResolver',
    'format_lod_table',
    'write_lod_table',
]
