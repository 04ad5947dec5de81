# topmark:header:start
#
#   project      : CartSniff
#   file         : test_config.py
#   file_relpath : tests/config/test_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration loading, merging and freezing."""

from __future__ import annotations

import logging
import textwrap
from typing import TYPE_CHECKING

import pytest
import tomlkit

from cartsniff.config import Config, ConfigLoadError, MutableConfig
from cartsniff.config.loaders import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table,
    load_toml_dict,
)
from cartsniff.constants import DEFAULT_MAX_ROM_SIZE
from cartsniff.core.formats import OutputFormat

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, content: str) -> Path:
    """Helper: write dedented content to a file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


def test_defaults() -> None:
    config: Config = MutableConfig().freeze()

    assert config.use_extension is True
    assert config.max_rom_size == DEFAULT_MAX_ROM_SIZE
    assert config.output_format is OutputFormat.TEXT
    assert config.config_files == ()


def test_from_toml_dict_reads_the_detect_table() -> None:
    draft = MutableConfig.from_toml_dict(
        {"detect": {"use_extension": False, "max_rom_size": 65536, "output_format": "NDJSON"}}
    )

    assert draft.use_extension is False
    assert draft.max_rom_size == 65536
    assert draft.output_format is OutputFormat.NDJSON


def test_from_toml_dict_leaves_missing_keys_unset() -> None:
    draft = MutableConfig.from_toml_dict({})
    assert draft.use_extension is None
    assert draft.max_rom_size is None
    assert draft.output_format is None


def test_unknown_output_format_is_ignored_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        draft = MutableConfig.from_toml_dict({"detect": {"output_format": "yaml"}})

    assert draft.output_format is None
    assert "expected one of" in caplog.text


def test_merge_gives_precedence_to_set_values() -> None:
    base = MutableConfig(use_extension=True, max_rom_size=100)
    override = MutableConfig(max_rom_size=200, output_format=OutputFormat.JSON)

    merged = base.merge_with(override)

    assert merged.use_extension is True
    assert merged.max_rom_size == 200
    assert merged.output_format is OutputFormat.JSON


def test_apply_cli_args_only_overrides_given_values() -> None:
    draft = MutableConfig.from_defaults()
    draft.apply_cli_args(use_extension=False)

    assert draft.use_extension is False
    assert draft.max_rom_size == DEFAULT_MAX_ROM_SIZE
    assert draft.output_format is OutputFormat.TEXT


def test_freeze_and_thaw() -> None:
    config = MutableConfig(max_rom_size=1234).freeze()
    with pytest.raises(AttributeError):
        config.max_rom_size = 1  # type: ignore[misc]

    draft = config.thaw()
    draft.max_rom_size = 1
    assert draft.freeze().max_rom_size == 1
    assert config.max_rom_size == 1234


def test_to_toml_dict_is_loadable(tmp_path: Path) -> None:
    config = MutableConfig(use_extension=False, output_format=OutputFormat.MARKDOWN).freeze()
    path = tmp_path / "cartsniff.toml"
    path.write_text(tomlkit.dumps(config.to_toml_dict()), encoding="utf-8")

    reloaded = MutableConfig.from_toml_file(path)

    assert reloaded is not None
    assert reloaded.freeze() == Config(
        use_extension=False,
        max_rom_size=DEFAULT_MAX_ROM_SIZE,
        output_format=OutputFormat.MARKDOWN,
        config_files=(path,),
    )


def test_pyproject_without_tool_table_is_skipped(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "pyproject.toml",
        """
        [project]
        name = "demo"
        """,
    )
    assert MutableConfig.from_toml_file(path) is None


def test_discovery_order_and_precedence(tmp_path: Path) -> None:
    """In the same directory, `pyproject.toml` is merged first, then `cartsniff.toml`."""
    pyproject = _write(
        tmp_path / "pyproject.toml",
        """
        [tool.cartsniff.detect]
        use_extension = false
        max_rom_size = 1000
        """,
    )
    local = _write(
        tmp_path / "cartsniff.toml",
        """
        [detect]
        max_rom_size = 2000
        """,
    )

    assert MutableConfig.discover_local_config_files(tmp_path) == [pyproject, local]

    config = MutableConfig.load_merged(start=tmp_path).freeze()
    assert config.use_extension is False
    assert config.max_rom_size == 2000
    assert config.config_files == (pyproject, local)


def test_explicit_files_merge_last_and_no_config_skips_discovery(tmp_path: Path) -> None:
    _write(tmp_path / "cartsniff.toml", "[detect]\nuse_extension = false\n")
    extra = _write(tmp_path / "extra" / "more.toml", "[detect]\nmax_rom_size = 42\n")

    merged = MutableConfig.load_merged(start=tmp_path, extra_config_files=[extra]).freeze()
    assert merged.use_extension is False
    assert merged.max_rom_size == 42

    isolated = MutableConfig.load_merged(
        start=tmp_path, extra_config_files=[extra], no_config=True
    ).freeze()
    assert isolated.use_extension is True
    assert isolated.max_rom_size == 42
    assert isolated.config_files == (extra,)


def test_invalid_toml_raises_config_load_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "cartsniff.toml", "[detect\n")

    with pytest.raises(ConfigLoadError) as excinfo:
        load_toml_dict(path)
    assert excinfo.value.path == path


def test_missing_file_raises_config_load_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError):
        load_toml_dict(tmp_path / "nope.toml")


# --- Typed getters -------------------------------------------------------------------


def test_getters_accept_the_expected_types() -> None:
    table = {"flag": True, "size": 10, "name": "json", "sub": {"a": 1}}

    assert get_bool_value_or_none(table, "flag") is True
    assert get_int_value_or_none(table, "size") == 10
    assert get_string_value_or_none(table, "name") == "json"
    assert get_table(table, "sub") == {"a": 1}


def test_getters_reject_wrong_types() -> None:
    table = {"flag": "yes", "size": True, "neg": -1, "name": 3, "sub": "x"}

    assert get_bool_value_or_none(table, "flag") is None
    assert get_int_value_or_none(table, "size") is None
    assert get_int_value_or_none(table, "neg") is None
    assert get_string_value_or_none(table, "name") is None
    assert get_table(table, "sub") == {}
    assert get_table(table, "missing") == {}
