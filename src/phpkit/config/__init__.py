"""Configuration management for phpkit."""

from .parser import (
    BinarySettings,
    DAPConfig,
    LspSettings,
    PhpkitConfig,
    RuntimeConfig,
    find_config_file,
    load_config,
    parse_lsp_settings,
)

__all__ = [
    "BinarySettings",
    "DAPConfig",
    "LspSettings",
    "PhpkitConfig",
    "RuntimeConfig",
    "find_config_file",
    "load_config",
    "parse_lsp_settings",
]
