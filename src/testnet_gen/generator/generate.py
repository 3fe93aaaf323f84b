"""
Batch generation of testnet manifests.

One manifest is generated per option combination. All combinations share one
random stream and are processed strictly in enumeration order: a given seed
therefore always yields the same manifests, in the same order.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any

from testnet_gen.manifest import Manifest, validate_manifest
from testnet_gen.options import combinations, count_combinations
from testnet_gen.versions import (
    LatestResolver,
    describe_version,
    latest_release_version,
    load_weighted_versions,
)

from .config import TESTNET_COMBINATIONS, GenerateConfig, NodeChoices, default_node_choices
from .topology import generate_testnet

logger = logging.getLogger(__name__)


def node_choices_for(
    config: GenerateConfig, resolve_latest: LatestResolver = latest_release_version
) -> NodeChoices:
    """
    Build the choice tables for a run.

    A multi-version specification replaces the default version table. The
    specification is fully parsed and resolved before anything is generated.

    Raises:
        VersionSpecError: If the specification is malformed.
        VersionResolutionError: If `latest` cannot be resolved.
    """
    choices = default_node_choices()
    if config.multi_version:
        weights = load_weighted_versions(
            config.multi_version, config.output_dir, config.base_version, resolve_latest
        )
        choices = choices.with_versions(weights)
    return choices


def generate(
    config: GenerateConfig,
    rng: random.Random | None = None,
    *,
    axes: Mapping[str, Sequence[Any]] = TESTNET_COMBINATIONS,
    resolve_latest: LatestResolver = latest_release_version,
) -> list[Manifest]:
    """
    Generate one testnet per option combination.

    Args:
        config: Run settings.
        rng: Random stream to draw from. Seeded from `config.seed` when omitted.
        axes: Option axes to expand.
        resolve_latest: Lookup used for the `latest` version alias.

    Returns:
        Every manifest, in combination order.

    Raises:
        GeneratorError: Any failure aborts the whole batch.
    """
    if rng is None:
        rng = random.Random(config.seed)

    choices = node_choices_for(config, resolve_latest)

    logger.info("Generating testnets with weighted versions:")
    for version, weight in choices.versions.weights:
        logger.info("- %s: %d", describe_version(version), weight)

    logger.info("Expanding %d option combinations", count_combinations(axes))
    manifests = []
    for options in combinations(axes):
        manifest = generate_testnet(rng, choices, options)
        validate_manifest(manifest)
        manifests.append(manifest)
    return manifests


def sort_manifests(manifests: Sequence[Manifest]) -> list[Manifest]:
    """
    Order manifests by expected runtime.

    Fewer nodes come first; ties are broken by the total number of
    perturbations. The sort is stable.
    """
    return sorted(manifests, key=lambda m: (len(m.nodes), m.perturbation_count()))


def split_groups(manifests: Sequence[Manifest], groups: int) -> list[list[Manifest]]:
    """
    Deal manifests round-robin into `groups` lists.

    Dealing a runtime-sorted list spreads cheap and expensive testnets evenly.

    Raises:
        ValueError: If `groups` is not positive.
    """
    if groups < 1:
        raise ValueError(f"groups must be positive, got {groups}")
    split: list[list[Manifest]] = [[] for _ in range(groups)]
    for i, manifest in enumerate(manifests):
        split[i % groups].append(manifest)
    return split
