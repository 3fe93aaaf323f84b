"""Node software version selection."""

from .release import (
    VERSION_PREFIX,
    SemanticVersion,
    find_latest_release_tag,
    git_tags,
    latest_release_version,
)
from .weighted import (
    LATEST_ALIAS,
    LOCAL_ALIAS,
    LOCAL_VERSION,
    LatestResolver,
    describe_version,
    load_weighted_versions,
    parse_weighted_versions,
    resolve_version_aliases,
)

__all__ = [
    "VERSION_PREFIX",
    "SemanticVersion",
    "find_latest_release_tag",
    "git_tags",
    "latest_release_version",
    "LATEST_ALIAS",
    "LOCAL_ALIAS",
    "LOCAL_VERSION",
    "LatestResolver",
    "describe_version",
    "load_weighted_versions",
    "parse_weighted_versions",
    "resolve_version_aliases",
]
