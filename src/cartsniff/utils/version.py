# topmark:header:start
#
#   project      : CartSniff
#   file         : version.py
#   file_relpath : src/cartsniff/utils/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version string helpers."""

from __future__ import annotations

import re
from typing import Final

# Release segment plus the pre/dev/local parts we publish; .postN has no SemVer form
_PEP440_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<release>\d+\.\d+\.\d+)"
    r"(?:(?P<pre>a|b|rc)(?P<pre_n>\d+))?"
    r"(?P<post>\.post\d+)?"
    r"(?:\.dev(?P<dev_n>\d+))?"
    r"(?:\+(?P<local>[0-9A-Za-z]+(?:\.[0-9A-Za-z]+)*))?$"
)

_PRE_LABELS: Final[dict[str, str]] = {"a": "alpha", "b": "beta", "rc": "rc"}


def pep440_to_semver(pep440_version: str) -> str:
    """Render a PEP 440 version as SemVer.

    ``1.2.0rc1`` becomes ``1.2.0-rc.1``, ``1.2.0.dev3`` becomes ``1.2.0-dev.3``
    and ``1.2.0b2.dev1+g1234`` becomes ``1.2.0-beta.2.dev.1+g1234``.

    Args:
        pep440_version (str): The version in PEP 440 format.

    Returns:
        str: The version in SemVer format.

    Raises:
        ValueError: If the version is not recognized or is a post release.
    """
    m: re.Match[str] | None = _PEP440_RE.match(pep440_version)
    if m is None:
        raise ValueError(f"Not a recognized PEP 440 version: {pep440_version!r}")
    if m["post"]:
        raise ValueError(f"Post-releases are not valid SemVer: {pep440_version!r}")

    prerelease: list[str] = []
    if m["pre"]:
        prerelease.append(f"{_PRE_LABELS[m['pre']]}.{m['pre_n']}")
    if m["dev_n"]:
        prerelease.append(f"dev.{m['dev_n']}")

    out: str = m["release"]
    if prerelease:
        out += "-" + ".".join(prerelease)
    if m["local"]:
        out += f"+{m['local']}"
    return out
