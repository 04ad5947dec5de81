# topmark:header:start
#
#   project      : CartSniff
#   file         : constants.py
#   file_relpath : src/cartsniff/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

CARTSNIFF_VERSION: str = get_version("cartsniff")

LOG_LEVEL_ENV_VAR: str = "CARTSNIFF_LOG_LEVEL"

# Local configuration sources, discovered in the current working directory
CONFIG_FILE_NAME: str = "cartsniff.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "cartsniff"

# Largest image the CLI reads into memory; larger files are classified by name only
DEFAULT_MAX_ROM_SIZE: int = 4 * 1024 * 1024
