"""
Generator configuration.

Holds the option axes every testnet combination is drawn from, the per-node
choice tables, and the settings of one generation run.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final

from pydantic import Field

from testnet_gen.choice import ProbSetChoice, UniformChoice, WeightedChoice
from testnet_gen.types import StrictBaseModel

# --- Run Defaults ---

DEFAULT_SEED: Final = 4827085738
"""Seed of the random stream when none is given. Keeps nightly runs stable."""

DEFAULT_BASE_VERSION: Final = "0.34.24"
"""Version of the software under test. Anchors the `latest` release lookup."""

# --- Topology Parameters ---

EVIDENCE_AGE_HEIGHT: Final = 7
"""Blocks after which evidence expires. Retention is chosen as multiples of it."""

START_HEIGHT_SPACING: Final = 5
"""Blocks between the start heights of successive delayed nodes."""

MIN_VALIDATOR_POWER: Final = 30
"""Smallest voting power given to a validator."""

MAX_VALIDATOR_POWER: Final = 100
"""Largest voting power given to a validator."""

FORCED_ARCHIVE_VALIDATORS: Final = 2
"""The first validators are always archive nodes, so state sync and light
clients have at least this many data sources."""

ARCHIVE_SNAPSHOT_INTERVAL: Final = 3
"""Snapshot interval of forced archive nodes."""

TESTNET_COMBINATIONS: Final[dict[str, list[Any]]] = {
    "topology": ["single", "quad", "large"],
    "initial_height": [0, 1000],
    "initial_state": [
        {},
        {"initial01": "a", "initial02": "b", "initial03": "c"},
    ],
    "validators": ["genesis", "initchain"],
}
"""Global testnet options. One testnet is generated per combination."""

ABCI_DELAYS: Final[dict[str, tuple[int, int, int]]] = {
    "none": (0, 0, 0),
    "small": (100, 100, 0),
    "large": (200, 200, 20),
}
"""Delay tier -> (prepare proposal, process proposal, check tx) in milliseconds."""


@dataclass(frozen=True, slots=True)
class NodeChoices:
    """
    The random choice tables used for one generation run.

    Built once per run and handed down to every builder, so that a custom
    version specification in one run cannot leak into another.
    """

    versions: WeightedChoice[str]
    databases: UniformChoice[str]
    ipv6: UniformChoice[bool]
    abci_protocols: UniformChoice[str]
    privval_protocols: UniformChoice[str]
    block_syncs: UniformChoice[str]
    state_syncs: UniformChoice[bool]
    mempools: UniformChoice[str]
    persist_intervals: UniformChoice[int]
    snapshot_intervals: UniformChoice[int]
    retain_blocks: UniformChoice[int]
    evidence: UniformChoice[int]
    abci_delays: UniformChoice[str]
    perturbations: ProbSetChoice[str]

    def with_versions(self, versions: dict[str, int]) -> NodeChoices:
        """Return a copy that draws node versions from the given weights."""
        return replace(self, versions=WeightedChoice(versions))


def default_node_choices() -> NodeChoices:
    """Choice tables with every node running the local build."""
    return NodeChoices(
        versions=WeightedChoice({"": 2}),
        databases=UniformChoice(["goleveldb", "cleveldb", "rocksdb", "boltdb", "badgerdb"]),
        ipv6=UniformChoice([False, True]),
        # grpc is left out until the runner supports it again.
        abci_protocols=UniformChoice(["unix", "tcp", "builtin", "builtin_unsync"]),
        privval_protocols=UniformChoice(["file", "unix", "tcp"]),
        block_syncs=UniformChoice(["v0"]),
        state_syncs=UniformChoice([False, True]),
        mempools=UniformChoice(["v0", "v1"]),
        persist_intervals=UniformChoice([0, 1, 5]),
        snapshot_intervals=UniformChoice([0, 3]),
        retain_blocks=UniformChoice([0, 2 * EVIDENCE_AGE_HEIGHT, 4 * EVIDENCE_AGE_HEIGHT]),
        evidence=UniformChoice([0, 1, 10]),
        abci_delays=UniformChoice(list(ABCI_DELAYS)),
        perturbations=ProbSetChoice(
            {
                "disconnect": 0.1,
                "pause": 0.1,
                "kill": 0.1,
                "restart": 0.1,
            }
        ),
    )


class GenerateConfig(StrictBaseModel):
    """Settings of one generation run."""

    seed: int = DEFAULT_SEED
    """Seed of the random stream shared by every combination."""

    output_dir: Path = Path(".")
    """Where manifests are written. Also the repository searched for `latest`."""

    multi_version: str | None = None
    """Optional weighted version specification, e.g. `"local:1,latest:1"`."""

    base_version: str = DEFAULT_BASE_VERSION
    """Version of the software under test."""

    groups: int = Field(default=0, ge=0)
    """Number of groups to split the manifests into. 0 disables grouping."""
