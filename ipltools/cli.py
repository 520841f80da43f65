#!/usr/bin/env python3
"""
IPL Tools command line.

Commands:
    convert <name> [output_name]   input/<name> -> output/<output_name or name>
    convert-all                    every file in input/ -> output/
    lods                           build the LOD table from stream + text IPLs

Usage:
    ipltools convert countn2_stream0.ipl
    ipltools --models data/default.ide convert-all
    ipltools --config ipltools.ini lods --output server/lod_table.hpp
"""

import argparse
import configparser
import sys
from pathlib import Path
from typing import List, Optional

from .config import ToolConfig, load_tool_config, print_config, DEFAULT_CONFIG_NAME
from .converters import BinaryIPLConverter, ModelNameResolver, ModelNameTable, PlaceholderModelNames
from .errors import FileAccessError
from .lods import LodResolver, write_lod_table
from .utils import log, logError, init_logging, print_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ipltools',
        description='Convert binary IPL files to text and build the LOD model table',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    ipltools --models data/default.ide convert-all

    # Convert one file under a new name:
    ipltools convert countn2_stream0.ipl countn2_stream0_text.ipl

    # LOD table from converted stream IPLs and the game's text IPLs:
    ipltools lods --stream-dir output --text-dir other_stuff/normal_ipls
        """
    )

    parser.add_argument('--config', default=DEFAULT_CONFIG_NAME,
                        help='Path to ipltools.ini (optional)')
    parser.add_argument('--input-dir', help='Folder holding binary IPLs')
    parser.add_argument('--output-dir', help='Folder for converted text IPLs')
    parser.add_argument('--models', action='append', default=[], metavar='FILE',
                        help='IDE or JSON model name file (repeatable)')
    parser.add_argument('--placeholder-names', action='store_true',
                        help='Write placeholder_modelname instead of looking names up')
    parser.add_argument('--no-header', action='store_true',
                        help='Do not write the comment line at the top of text IPLs')
    parser.add_argument('--log', help='Log file path')

    commands = parser.add_subparsers(dest='command', required=True)

    convert = commands.add_parser('convert', help='Convert one binary IPL')
    convert.add_argument('input_name', help='File name inside the input folder')
    convert.add_argument('output_name', nargs='?', help='File name inside the output folder')

    commands.add_parser('convert-all', help='Convert every binary IPL in the input folder')

    lods = commands.add_parser('lods', help='Build the LOD model table')
    lods.add_argument('--stream-dir', help='Stream IPLs (default: output folder)')
    lods.add_argument('--text-dir', help='Text IPLs (default: normal_ipls from config)')
    lods.add_argument('--output', help='LOD table path')

    return parser


def apply_overrides(config: ToolConfig, args: argparse.Namespace) -> ToolConfig:
    """Command line values take precedence over the INI file."""
    if args.input_dir:
        config.input_dir = Path(args.input_dir)
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    if args.models:
        config.model_files = [Path(p) for p in args.models]
    if args.placeholder_names:
        config.placeholder_names = True
    if args.no_header:
        config.header_comment = None
    if args.log:
        config.log_path = Path(args.log)
    return config


def load_model_names(config: ToolConfig) -> ModelNameResolver:
    """
    Raises:
        FileAccessError, ValueError: a model name file could not be loaded
    """
    if config.placeholder_names:
        return PlaceholderModelNames()
    return ModelNameTable.load(config.model_files)


def run_convert(config: ToolConfig, model_names: ModelNameResolver,
                input_name: str, output_name: Optional[str]) -> int:
    converter = BinaryIPLConverter(config.input_dir, config.output_dir, model_names, config.header_comment)
    return 0 if converter.convert_one(input_name, output_name) else 1


def run_convert_all(config: ToolConfig, model_names: ModelNameResolver) -> int:
    converter = BinaryIPLConverter(config.input_dir, config.output_dir, model_names, config.header_comment)
    try:
        converter.convert_all()
    except FileAccessError as e:
        logError(str(e))
        return 1
    return 0


def run_lods(config: ToolConfig, model_names: ModelNameResolver, args: argparse.Namespace) -> int:
    stream_dir = Path(args.stream_dir) if args.stream_dir else config.output_dir
    text_dir = Path(args.text_dir) if args.text_dir else config.normal_ipls_dir
    output_path = Path(args.output) if args.output else config.lod_table_path

    # The LOD table always names models by lookup, never by placeholder
    if isinstance(model_names, ModelNameTable):
        table = model_names
    else:
        try:
            table = ModelNameTable.load(config.model_files)
        except (FileAccessError, ValueError) as e:
            logError(f"Could not load model names: {e}")
            return 1

    resolver = LodResolver(model_names=table)
    state = resolver.run_batch(stream_dir, text_dir)

    try:
        write_lod_table(state, table, output_path)
    except FileAccessError as e:
        logError(str(e))
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(load_tool_config(args.config), args)
    except configparser.Error as e:
        print(f"ERROR: Invalid config {args.config}: {e}", file=sys.stderr)
        return 1

    init_logging(config.log_path)
    print_config(config)
    log()

    try:
        model_names = load_model_names(config)
    except (FileAccessError, ValueError) as e:
        logError(f"Could not load model names: {e}")
        print_summary()
        return 1

    if args.command == 'convert':
        status = run_convert(config, model_names, args.input_name, args.output_name)
    elif args.command == 'convert-all':
        status = run_convert_all(config, model_names)
    else:
        status = run_lods(config, model_names, args)

    print_summary()
    return status


if __name__ == '__main__':
    sys.exit(main())
