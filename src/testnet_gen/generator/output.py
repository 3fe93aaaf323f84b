"""Writing a batch of manifests to disk."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from testnet_gen.manifest import Manifest, save_manifest

from .generate import sort_manifests, split_groups

logger = logging.getLogger(__name__)


def write_manifests(
    manifests: Sequence[Manifest], directory: Path, groups: int = 0
) -> list[Path]:
    """
    Write manifests as `gen-NNNN.yaml` files.

    With `groups > 0` the manifests are first ordered by expected runtime, then
    dealt into groups and written as `gen-groupGG-NNNN.yaml`, so each group can
    run on its own machine in comparable time.

    Returns:
        The written paths, in write order.
    """
    directory.mkdir(parents=True, exist_ok=True)

    paths = []
    if groups <= 0:
        for i, manifest in enumerate(manifests):
            paths.append(save_manifest(manifest, directory / f"gen-{i:04d}.yaml"))
    else:
        for g, group in enumerate(split_groups(sort_manifests(manifests), groups)):
            for i, manifest in enumerate(group):
                path = directory / f"gen-group{g:02d}-{i:04d}.yaml"
                paths.append(save_manifest(manifest, path))

    logger.info("Wrote %d manifests to %s", len(paths), directory)
    return paths
