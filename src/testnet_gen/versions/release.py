"""
Latest release lookup.

Resolves the symbolic `latest` node version to the newest released tag that is
compatible with the software under test. Compatibility follows caret ranges on
`major.minor`: for a base of `0.34.21` any `0.34.x` release qualifies, for a
base of `1.2.0` any `1.x` release at or above `1.2.0` does.

The tag listing itself comes from git. Everything else is pure and can be
exercised without a repository.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import Final, Self

from testnet_gen.types import StrictBaseModel, VersionResolutionError

logger = logging.getLogger(__name__)

VERSION_PREFIX: Final = "v"
"""Release tags, and the node images built from them, carry this prefix."""

_SEMVER_PATTERN: Final = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
"""Semantic version with an optional `v`, and optional minor and patch parts."""


class SemanticVersion(StrictBaseModel):
    """A parsed semantic version."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a version string such as `v0.34.21` or `0.35.0-rc1`.

        Raises:
            ValueError: If the string is not a semantic version.
        """
        match = _SEMVER_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"not a semantic version: {text!r}")
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"] or 0),
            patch=int(match["patch"] or 0),
            prerelease=match["prerelease"] or "",
            build=match["build"] or "",
        )

    def is_prerelease(self) -> bool:
        """Check whether this is a pre-release such as `-rc1`."""
        return self.prerelease != ""

    def release_key(self) -> tuple[int, int, int]:
        """Ordering key for releases. Build metadata never affects precedence."""
        return (self.major, self.minor, self.patch)

    def caret_allows(self, other: SemanticVersion) -> bool:
        """
        Check whether `other` lies in the caret range `^major.minor` of this version.

        The lower bound is `major.minor.0`. The upper bound is the next major, or
        the next minor while the major is 0.
        """
        lower = (self.major, self.minor, 0)
        upper = (self.major + 1, 0, 0) if self.major > 0 else (0, self.minor + 1, 0)
        return lower <= other.release_key() < upper

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def find_latest_release_tag(base_version: str, tags: Iterable[str]) -> str:
    """
    Pick the newest release tag compatible with a base version.

    Tags without the `v` prefix are ignored. Pre-releases are skipped.

    Args:
        base_version: Version of the software under test. A pre-release suffix
            is ignored.
        tags: Tag names to choose from.

    Returns:
        The chosen version with a `v` prefix, or an empty string when no tag
        qualifies (meaning: use the local build).

    Raises:
        VersionResolutionError: If the base version or a `v`-prefixed tag cannot
            be parsed.
    """
    try:
        base = SemanticVersion.parse(base_version.split("-")[0])
    except ValueError as e:
        raise VersionResolutionError(f"failed to parse base version {base_version!r}: {e}") from e

    latest: SemanticVersion | None = None
    for tag in tags:
        if not tag.startswith(VERSION_PREFIX):
            continue
        try:
            candidate = SemanticVersion.parse(tag)
        except ValueError as e:
            raise VersionResolutionError(
                f"failed to parse tag {tag!r} as semantic version: {e}"
            ) from e

        if candidate.is_prerelease() or not base.caret_allows(candidate):
            continue
        if latest is None or candidate.release_key() > latest.release_key():
            latest = candidate

    # No compatible release: nodes fall back to the tip of the current branch.
    if latest is None:
        return ""
    return f"{VERSION_PREFIX}{latest}"


def git_tags(repo_dir: Path | str) -> list[str]:
    """
    List the annotated tags of the repository containing `repo_dir`.

    Lightweight tags are not releases and are left out.

    Raises:
        VersionResolutionError: If git is unavailable or the directory is not
            inside a repository.
    """
    cmd = [
        "git",
        "-C",
        str(repo_dir),
        "for-each-ref",
        "--format=%(objecttype) %(refname:strip=2)",
        "refs/tags",
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise VersionResolutionError(f"git is not available: {e}") from e
    except subprocess.CalledProcessError as e:
        raise VersionResolutionError(
            f"failed to list tags in {str(repo_dir)!r}: {e.stderr.strip() or e}"
        ) from e

    tags = []
    for line in result.stdout.splitlines():
        object_type, _, name = line.partition(" ")
        if object_type == "tag":
            tags.append(name)
    return tags


def latest_release_version(repo_dir: Path | str, base_version: str) -> str:
    """
    Resolve the latest compatible release from a repository's tags.

    Returns:
        A `v`-prefixed version, or an empty string to use the local build.
    """
    tags = git_tags(repo_dir)
    latest = find_latest_release_tag(base_version, tags)
    logger.debug(
        "Resolved latest release %r from %d tags (base %s)", latest, len(tags), base_version
    )
    return latest
