# topmark:header:start
#
#   project      : CartSniff
#   file         : model.py
#   file_relpath : src/cartsniff/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable snapshot used by CLI commands.
    - `MutableConfig`: a mutable builder used during discovery and merging; it
      can be frozen into `Config` and thawed back for edits.

Merge order (lowest to highest precedence):
    1) Built-in defaults
    2) ``[tool.cartsniff]`` in ``pyproject.toml`` (current directory)
    3) ``cartsniff.toml`` (current directory)
    4) Extra config files passed explicitly via ``--config`` (in the order provided)
    5) CLI overrides

Fields of `MutableConfig` are tri-state (``None`` = inherit) so that a layer
only overrides what it actually sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cartsniff.config.keys import Toml
from cartsniff.config.loaders import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table,
    load_toml_dict,
)
from cartsniff.config.logging import get_logger
from cartsniff.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_MAX_ROM_SIZE,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from cartsniff.core.formats import OutputFormat, parse_output_format

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cartsniff.config.loaders import TomlTable
    from cartsniff.config.logging import CartsniffLogger

logger: CartsniffLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for CartSniff.

    Attributes:
        use_extension (bool): Whether filename extensions may force a scheme.
        max_rom_size (int): Largest image (in bytes) read for content detection.
        output_format (OutputFormat): Output format of the ``detect`` command.
        config_files (tuple[Path, ...]): Config files that contributed to this snapshot.
    """

    use_extension: bool = True
    max_rom_size: int = DEFAULT_MAX_ROM_SIZE
    output_format: OutputFormat = OutputFormat.TEXT
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this snapshot."""
        return MutableConfig(
            use_extension=self.use_extension,
            max_rom_size=self.max_rom_size,
            output_format=self.output_format,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the effective settings as a ``cartsniff.toml``-shaped dict."""
        return {
            Toml.SECTION_DETECT: {
                Toml.KEY_USE_EXTENSION: self.use_extension,
                Toml.KEY_MAX_ROM_SIZE: self.max_rom_size,
                Toml.KEY_OUTPUT_FORMAT: self.output_format.value,
            },
        }


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        use_extension (bool | None): Whether filename extensions may force a scheme.
        max_rom_size (int | None): Largest image (in bytes) read for content detection.
        output_format (OutputFormat | None): Output format of the ``detect`` command.
        config_files (list[Path]): Config files that contributed to this draft.
    """

    use_extension: bool | None = None
    max_rom_size: int | None = None
    output_format: OutputFormat | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this draft into an immutable `Config`, filling unset fields with defaults."""
        defaults = Config()
        return Config(
            use_extension=(
                defaults.use_extension if self.use_extension is None else self.use_extension
            ),
            max_rom_size=defaults.max_rom_size if self.max_rom_size is None else self.max_rom_size,
            output_format=(
                defaults.output_format if self.output_format is None else self.output_format
            ),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding the built-in defaults."""
        defaults = Config()
        return cls(
            use_extension=defaults.use_extension,
            max_rom_size=defaults.max_rom_size,
            output_format=defaults.output_format,
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Build a draft from a parsed ``cartsniff.toml``-shaped table.

        Unknown keys are ignored; values of the wrong type are logged and ignored.

        Args:
            data (TomlTable): The parsed table (top level of ``cartsniff.toml``,
                or ``[tool.cartsniff]`` of ``pyproject.toml``).

        Returns:
            MutableConfig: The draft (fields not present in ``data`` stay unset).
        """
        detect: TomlTable = get_table(data, Toml.SECTION_DETECT)

        raw_format: str | None = get_string_value_or_none(detect, Toml.KEY_OUTPUT_FORMAT)
        output_format: OutputFormat | None = parse_output_format(raw_format)
        if raw_format is not None and output_format is None:
            logger.warning(
                "Ignoring '%s' = %r: expected one of %s",
                Toml.KEY_OUTPUT_FORMAT,
                raw_format,
                ", ".join(f.value for f in OutputFormat),
            )

        return cls(
            use_extension=get_bool_value_or_none(detect, Toml.KEY_USE_EXTENSION),
            max_rom_size=get_int_value_or_none(detect, Toml.KEY_MAX_ROM_SIZE),
            output_format=output_format,
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.cartsniff]`` table is considered.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None if a ``pyproject.toml`` has no
            ``[tool.cartsniff]`` table.

        Raises:
            ConfigLoadError: If the file cannot be read or is not valid TOML.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_FILE_NAME:
            tool_section: TomlTable = get_table(
                get_table(toml_data, Toml.SECTION_TOOL), PYPROJECT_TOOL_SECTION
            )
            if not tool_section:
                logger.debug("No [tool.%s] table in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data)
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return the config files present in ``start``, lowest precedence first."""
        candidates: list[Path] = [start / PYPROJECT_FILE_NAME, start / CONFIG_FILE_NAME]
        return [path for path in candidates if path.is_file()]

    @classmethod
    def load_merged(
        cls,
        *,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
        start: Path | None = None,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                after discovery, in the given order.
            no_config (bool): If True, skip discovery in ``start``.
            start (Path | None): Discovery directory; defaults to the current directory.

        Returns:
            MutableConfig: The merged draft, ready to receive CLI overrides.

        Raises:
            ConfigLoadError: If a config file cannot be read or is not valid TOML.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(start or Path.cwd()):
                discovered: MutableConfig | None = cls.from_toml_file(cfg_path)
                if discovered is not None:
                    draft = draft.merge_with(discovered)

        for extra in extra_config_files or ():
            explicit: MutableConfig | None = cls.from_toml_file(Path(extra))
            if explicit is not None:
                draft = draft.merge_with(explicit)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            use_extension=(
                self.use_extension if other.use_extension is None else other.use_extension
            ),
            max_rom_size=self.max_rom_size if other.max_rom_size is None else other.max_rom_size,
            output_format=(
                self.output_format if other.output_format is None else other.output_format
            ),
            config_files=[*self.config_files, *other.config_files],
        )

    def apply_cli_args(
        self,
        *,
        use_extension: bool | None = None,
        max_rom_size: int | None = None,
        output_format: OutputFormat | None = None,
    ) -> MutableConfig:
        """Apply CLI overrides in place (``None`` leaves a field untouched) and return self."""
        if use_extension is not None:
            self.use_extension = use_extension
        if max_rom_size is not None:
            self.max_rom_size = max_rom_size
        if output_format is not None:
            self.output_format = output_format
        return self
