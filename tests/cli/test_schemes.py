# topmark:header:start
#
#   project      : CartSniff
#   file         : test_schemes.py
#   file_relpath : tests/cli/test_schemes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `schemes` command."""

from __future__ import annotations

import json
from typing import Any

from cartsniff.schemes import SchemeId
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_text_lists_every_scheme() -> None:
    result = run_cli(["--no-color", "schemes"])

    assert_SUCCESS(result)
    lines = result.output.splitlines()
    assert len(lines) == len(SchemeId)
    assert lines[0].split()[0] == "AUTO"
    assert any(line.split()[0] == "DPC+" and "Enhanced DPC" in line for line in lines)


@mark_cli
def test_long_text_shows_extensions() -> None:
    result = run_cli(["--no-color", "schemes", "--long"])

    assert_SUCCESS(result)
    (f8sc,) = [line for line in result.output.splitlines() if line.startswith("F8SC ")]
    assert f8sc.endswith("[.f8s, .f8sc]")


@mark_cli
def test_json_output() -> None:
    result = run_cli(["schemes", "--format", "json", "--long"])

    assert_SUCCESS(result)
    payload: Any = json.loads(result.output)
    assert [r["scheme"] for r in payload] == [s.value for s in SchemeId]
    by_key = {r["scheme"]: r for r in payload}
    assert by_key["E0"] == {"scheme": "E0", "label": "8K Parker Bros", "extensions": ["E0"]}


@mark_cli
def test_ndjson_output_without_details() -> None:
    result = run_cli(["schemes", "--format", "ndjson"])

    assert_SUCCESS(result)
    records = [json.loads(line) for line in result.output.splitlines()]
    assert len(records) == len(SchemeId)
    assert all(set(r) == {"scheme", "label"} for r in records)


@mark_cli
def test_markdown_output() -> None:
    result = run_cli(["schemes", "--format", "markdown", "--long"])

    assert_SUCCESS(result)
    lines = result.output.splitlines()
    assert lines[0] == "| Scheme | Description | Extensions |"
    assert "| `3E` | 32-in-1 Tigervision + RAM | `.3e` |" in lines
