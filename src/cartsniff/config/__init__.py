# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for CartSniff.

TOML configuration (``cartsniff.toml`` or ``[tool.cartsniff]`` in
``pyproject.toml``) is parsed with tomlkit into a `MutableConfig` draft, merged
with CLI overrides, and frozen into an immutable `Config`.
"""

from __future__ import annotations

from cartsniff.config.loaders import ConfigLoadError
from cartsniff.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "ConfigLoadError",
    "MutableConfig",
]
