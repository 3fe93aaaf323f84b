"""
Weighted node version specifications.

A specification such as `"v0.34.21:1,local:2,latest:1"` lists the software
versions nodes may run, each with an integer weight. Two identifiers are
reserved:

- `local` is the locally built software, stored as the empty version.
- `latest` is replaced by the newest compatible release, as reported by a
  resolver.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Final

from testnet_gen.types import VersionSpecError

from .release import latest_release_version

LOCAL_VERSION: Final = ""
"""Version string meaning "use the locally built software"."""

LOCAL_ALIAS: Final = "local"
"""Reserved spelling of the local version in specifications."""

LATEST_ALIAS: Final = "latest"
"""Reserved identifier for the newest compatible release."""

LatestResolver = Callable[[Path, str], str]
"""(repository directory, base version) -> `v`-prefixed release or "" for local."""

_INTEGER: Final = re.compile(r"^[+-]?[0-9]+$")


def parse_weighted_versions(spec: str) -> dict[str, int]:
    """
    Parse a `version:weight[,version:weight]*` string.

    Whitespace around entries, versions and weights is ignored. Aliases are
    returned unresolved. A version listed twice keeps its last weight.

    Raises:
        VersionSpecError: On a missing or extra `:`, a non-integer weight or a
            weight below 1.
    """
    weights: dict[str, int] = {}
    for entry in spec.strip().split(","):
        parts = entry.strip().split(":")
        if len(parts) != 2:
            raise VersionSpecError(entry, "expected exactly one 'version:weight' pair")

        version, weight_text = parts[0].strip(), parts[1].strip()
        if not _INTEGER.match(weight_text):
            raise VersionSpecError(entry, f"weight {weight_text!r} is not an integer")

        weight = int(weight_text)
        if weight < 1:
            raise VersionSpecError(entry, "version weights must be >= 1")

        weights[version] = weight
    return weights


def resolve_version_aliases(
    weights: dict[str, int],
    repo_dir: Path,
    base_version: str,
    resolve_latest: LatestResolver = latest_release_version,
) -> dict[str, int]:
    """
    Replace the reserved aliases with concrete version strings.

    Weights follow their alias. `local` is renamed first, then `latest`; a
    renamed alias replaces any entry already listed under its new name. The
    resolver is only called when `latest` is present.

    Returns:
        A new mapping. The input is left untouched.
    """
    resolved = dict(weights)
    if LOCAL_ALIAS in resolved:
        resolved[LOCAL_VERSION] = resolved.pop(LOCAL_ALIAS)
    if LATEST_ALIAS in resolved:
        latest = resolve_latest(repo_dir, base_version)
        resolved[latest] = resolved.pop(LATEST_ALIAS)
    return resolved


def load_weighted_versions(
    spec: str,
    repo_dir: Path,
    base_version: str,
    resolve_latest: LatestResolver = latest_release_version,
) -> dict[str, int]:
    """Parse a specification and resolve its aliases."""
    return resolve_version_aliases(
        parse_weighted_versions(spec), repo_dir, base_version, resolve_latest
    )


def describe_version(version: str) -> str:
    """Human-readable name of a version, spelling the empty version as `local`."""
    return version or LOCAL_ALIAS
