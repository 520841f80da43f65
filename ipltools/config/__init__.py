"""
Config Package

Loads ipltools.ini settings.
"""

from .tool_config import ToolConfig, load_tool_config, print_config, DEFAULT_CONFIG_NAME
