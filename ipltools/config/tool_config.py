"""
Tool Configuration

Parser for ipltools.ini. Every key is optional; missing keys keep the
defaults below, and a missing file means all defaults.

    [paths]
    input = input
    output = output
    normal_ipls = other_stuff/normal_ipls
    lod_table = server/lod_table.hpp
    log = ipltools.log

    [models]
    files = data/default.ide
            data/vehicles.ide
    placeholder = false

    [output]
    header_comment = # IPL generated with ipl-tools

Relative paths are resolved against the folder holding the INI file.
"""

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..constants import DEFAULT_HEADER_COMMENT
from ..utils import log

DEFAULT_CONFIG_NAME = "ipltools.ini"
TRUE_VALUES = ('true', '1', 'yes', 'on')


@dataclass
class ToolConfig:
    """Resolved tool settings."""
    input_dir: Path = Path("input")
    output_dir: Path = Path("output")
    normal_ipls_dir: Path = Path("other_stuff/normal_ipls")
    lod_table_path: Path = Path("server/lod_table.hpp")
    log_path: Path = Path("ipltools.log")
    model_files: List[Path] = field(default_factory=list)
    placeholder_names: bool = False
    header_comment: Optional[str] = DEFAULT_HEADER_COMMENT
    source: Optional[Path] = None  # INI file the values came from


def _resolve(base: Path, value: str) -> Path:
    path = Path(value.strip())
    return path if path.is_absolute() else base / path


def load_tool_config(config_path: Union[str, Path, None] = None) -> ToolConfig:
    """
    Load settings from an INI file.

    Args:
        config_path: INI path; None or a missing file gives the defaults

    Raises:
        configparser.Error: file exists but is not valid INI
    """
    config = ToolConfig()
    if config_path is None:
        return config

    config_path = Path(config_path)
    if not config_path.exists():
        return config

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_path, encoding='utf-8')
    base = config_path.parent
    config.source = config_path

    if parser.has_section('paths'):
        paths = parser['paths']
        if paths.get('input'):
            config.input_dir = _resolve(base, paths['input'])
        if paths.get('output'):
            config.output_dir = _resolve(base, paths['output'])
        if paths.get('normal_ipls'):
            config.normal_ipls_dir = _resolve(base, paths['normal_ipls'])
        if paths.get('lod_table'):
            config.lod_table_path = _resolve(base, paths['lod_table'])
        if paths.get('log'):
            config.log_path = _resolve(base, paths['log'])

    if parser.has_section('models'):
        models = parser['models']
        files = models.get('files', '')
        config.model_files = [_resolve(base, line) for line in files.splitlines() if line.strip()]
        config.placeholder_names = models.get('placeholder', 'false').strip().lower() in TRUE_VALUES

    if parser.has_section('output'):
        output = parser['output']
        if 'header_comment' in output:
            comment = output['header_comment'].strip()
            config.header_comment = comment or None

    return config


def print_config(config: ToolConfig):
    """Log the settings in effect."""
    if config.source:
        log(f"Config: {config.source}")
    log(f"  Input:        {config.input_dir}")
    log(f"  Output:       {config.output_dir}")
    log(f"  Text IPLs:    {config.normal_ipls_dir}")
    log(f"  LOD table:    {config.lod_table_path}")
    if config.placeholder_names:
        log("  Model names:  placeholder")
    else:
        log(f"  Model names:  {len(config.model_files)} file(s)")
