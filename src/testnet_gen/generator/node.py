"""
Randomized node configuration.

Nodes are drawn field by field from the run's choice tables, then reconciled
so that the retention, persistence and snapshot settings never contradict each
other. Peer lists are left empty here: they depend on the whole topology and
are wired by the topology builder.
"""

from __future__ import annotations

import random

from testnet_gen.manifest import ManifestNode, Mode

from .config import ARCHIVE_SNAPSHOT_INTERVAL, NodeChoices


def generate_node(
    rng: random.Random,
    choices: NodeChoices,
    mode: Mode,
    start_at: int,
    force_archive: bool = False,
) -> ManifestNode:
    """
    Draw a seed, validator or full node.

    Draws happen in a fixed order so the stream stays reproducible. State sync
    is drawn for every node but only enabled for nodes joining after genesis,
    since there is nothing to sync from before the chain starts.

    Args:
        rng: The run's random stream.
        choices: The run's choice tables.
        mode: Role of the node.
        start_at: Height the node joins at (0 for genesis).
        force_archive: Keep every block and produce snapshots regardless of draws.

    Returns:
        A node without seeds or persistent peers.
    """
    version = choices.versions.choose(rng)
    database = choices.databases.choose(rng)
    privval_protocol = choices.privval_protocols.choose(rng)
    block_sync = choices.block_syncs.choose(rng)
    mempool = choices.mempools.choose(rng)
    state_sync = choices.state_syncs.choose(rng) and start_at > 0
    persist_interval: int | None = choices.persist_intervals.choose(rng)
    snapshot_interval = choices.snapshot_intervals.choose(rng)
    retain_blocks = choices.retain_blocks.choose(rng)
    perturb = choices.perturbations.choose(rng)

    if force_archive:
        retain_blocks = 0
        snapshot_interval = ARCHIVE_SNAPSHOT_INTERVAL

    # Pruning blocks whose state was never persisted cannot be recovered from:
    # either keep every block or persist at the retention boundary.
    if persist_interval == 0 and retain_blocks > 0:
        if rng.random() > 0.5:
            retain_blocks = 0
        else:
            persist_interval = retain_blocks

    # Never prune blocks still needed for persistence or snapshots.
    if retain_blocks > 0:
        if persist_interval is not None:
            retain_blocks = max(retain_blocks, persist_interval)
        retain_blocks = max(retain_blocks, snapshot_interval)

    return ManifestNode(
        mode=mode,
        version=version,
        start_at=start_at,
        database=database,
        privval_protocol=privval_protocol,
        block_sync=block_sync,
        mempool=mempool,
        state_sync=state_sync,
        persist_interval=persist_interval,
        snapshot_interval=snapshot_interval,
        retain_blocks=retain_blocks,
        perturb=perturb,
    )


def generate_light_node(
    rng: random.Random,
    choices: NodeChoices,
    start_at: int,
    providers: list[str],
) -> ManifestNode:
    """
    Draw a light client.

    Light clients only verify headers: they keep no blocks, persist nothing
    and connect exclusively to the given providers.
    """
    return ManifestNode(
        mode=Mode.LIGHT,
        version=choices.versions.choose(rng),
        start_at=start_at,
        database=choices.databases.choose(rng),
        persist_interval=0,
        persistent_peers=list(providers),
    )
