"""
Testnet topology synthesis.

Builds one complete manifest from one option combination. The builder decides
how many nodes of each role exist, when each joins, which validators hold power
at genesis and which are added later, and how nodes discover each other.

Guarantees on every manifest:

- A quorum of validators starts at genesis, so the chain can make progress
  before any delayed node catches up.
- The first two validators are archive nodes, giving state sync and light
  clients at least two complete data sources.
- Peers only ever point at seeds or at nodes that start no later than
  themselves, so the persistent peer graph follows start order and is acyclic.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from testnet_gen.choice import UniformSetChoice
from testnet_gen.manifest import Manifest, ManifestNode, Mode, is_light_provider, quorum_size
from testnet_gen.types import UnknownOptionError

from .config import (
    ABCI_DELAYS,
    FORCED_ARCHIVE_VALIDATORS,
    MAX_VALIDATOR_POWER,
    MIN_VALIDATOR_POWER,
    START_HEIGHT_SPACING,
    NodeChoices,
)
from .node import generate_light_node, generate_node

logger = logging.getLogger(__name__)


def node_name(mode: Mode, index: int) -> str:
    """Name of the `index`-th (1-based) node with the given role, e.g. `validator02`."""
    return f"{mode.value}{index:02d}"


def topology_size(rng: random.Random, topology: str) -> tuple[int, int, int, int]:
    """
    Decide how many nodes of each role a topology has.

    Large networks are kept small since the runner hosts every node on one machine.

    Returns:
        (seeds, validators, full nodes, light clients).

    Raises:
        UnknownOptionError: For an unrecognized topology.
    """
    match topology:
        case "single":
            return 0, 1, 0, 0
        case "quad":
            return 0, 4, 0, 0
        case "large":
            num_seeds = rng.randrange(2)
            num_light_clients = rng.randrange(3)
            num_validators = 4 + rng.randrange(4)
            num_fulls = rng.randrange(4)
            return num_seeds, num_validators, num_fulls, num_light_clients
        case _:
            raise UnknownOptionError("topology", topology)


def validator_power(rng: random.Random) -> int:
    """Draw a voting power uniformly from the allowed range."""
    return MIN_VALIDATOR_POWER + rng.randrange(MAX_VALIDATOR_POWER - MIN_VALIDATOR_POWER + 1)


def generate_testnet(
    rng: random.Random, choices: NodeChoices, options: dict[str, Any]
) -> Manifest:
    """
    Generate a single testnet for one option combination.

    Args:
        rng: The run's random stream. Advanced by every draw.
        choices: The run's choice tables.
        options: One combination of `topology`, `initial_height`,
            `initial_state` and `validators`.

    Returns:
        The finished, immutable manifest.

    Raises:
        UnknownOptionError: For an unrecognized topology or validators option.
            No partial manifest is produced.
    """
    initial_height: int = options["initial_height"]

    ipv6 = choices.ipv6.choose(rng)
    abci_protocol = choices.abci_protocols.choose(rng)
    evidence = choices.evidence.choose(rng)
    prepare_delay, process_delay, check_tx_delay = ABCI_DELAYS[choices.abci_delays.choose(rng)]

    num_seeds, num_validators, num_fulls, num_light_clients = topology_size(
        rng, options["topology"]
    )

    nodes: dict[str, ManifestNode] = {}
    validators: dict[str, int] = {}
    validator_updates: dict[str, dict[str, int]] = {}

    # Seed nodes first, all at genesis.
    for i in range(1, num_seeds + 1):
        nodes[node_name(Mode.SEED, i)] = generate_node(rng, choices, Mode.SEED, 0)

    # Validators. A quorum starts at genesis with power in the genesis set. The
    # rest join later, one every few blocks, and get power shortly after.
    next_start_at = initial_height + START_HEIGHT_SPACING
    quorum = quorum_size(num_validators)
    for i in range(1, num_validators + 1):
        start_at = 0
        if i > quorum:
            start_at = next_start_at
            next_start_at += START_HEIGHT_SPACING

        name = node_name(Mode.VALIDATOR, i)
        nodes[name] = generate_node(
            rng, choices, Mode.VALIDATOR, start_at, force_archive=i <= FORCED_ARCHIVE_VALIDATORS
        )

        if start_at == 0:
            validators[name] = validator_power(rng)
        else:
            validator_updates[str(start_at + START_HEIGHT_SPACING)] = {
                name: validator_power(rng)
            }

    # Optionally hand the initial set to the application at InitChain instead.
    match options["validators"]:
        case "genesis":
            pass
        case "initchain":
            validator_updates["0"] = validators
            validators = {}
        case other:
            raise UnknownOptionError("validators", other)

    # Full nodes start either at genesis or after the delayed validators.
    for i in range(1, num_fulls + 1):
        start_at = 0
        if rng.random() >= 0.5:
            start_at = next_start_at
            next_start_at += START_HEIGHT_SPACING
        nodes[node_name(Mode.FULL, i)] = generate_node(rng, choices, Mode.FULL, start_at)

    light_providers = wire_peers(rng, nodes, initial_height)

    # Light clients join last, each a few blocks after the previous one.
    for i in range(1, num_light_clients + 1):
        start_at = initial_height + START_HEIGHT_SPACING * (i + 1)
        nodes[node_name(Mode.LIGHT, i)] = generate_light_node(
            rng, choices, start_at, light_providers
        )

    manifest = Manifest(
        ipv6=ipv6,
        abci_protocol=abci_protocol,
        initial_height=initial_height,
        initial_state=dict(options["initial_state"]),
        validators=validators,
        validator_updates=validator_updates,
        evidence=evidence,
        prepare_proposal_delay_ms=prepare_delay,
        process_proposal_delay_ms=process_delay,
        check_tx_delay_ms=check_tx_delay,
        nodes=nodes,
    )
    logger.debug(
        "Generated %s testnet: %d seeds, %d validators, %d full, %d light",
        options["topology"],
        num_seeds,
        num_validators,
        num_fulls,
        num_light_clients,
    )
    return manifest


def wire_peers(
    rng: random.Random, nodes: dict[str, ManifestNode], initial_height: int
) -> list[str]:
    """
    Set up peer discovery, replacing wired nodes in `nodes`.

    Seeds are fully meshed with each other. Every other node, taken in order of
    start height (then name), either uses a random set of seeds or a random set
    of the nodes ordered before it. The first node always uses seeds when there
    are any.

    Names are visited in sorted order before the height sort, so the outcome
    only depends on the random stream.

    Returns:
        Names of the nodes suitable as light client providers, sorted.
    """
    seed_names = sorted(name for name, node in nodes.items() if node.mode is Mode.SEED)
    peer_names = sorted(name for name, node in nodes.items() if node.mode is not Mode.SEED)
    light_providers = [
        name for name in peer_names if is_light_provider(nodes[name], initial_height)
    ]

    for name in seed_names:
        nodes[name] = nodes[name].copy(seeds=[other for other in seed_names if other != name])

    peer_names.sort(key=lambda name: (nodes[name].start_at, name))
    for i, name in enumerate(peer_names):
        if seed_names and (i == 0 or rng.random() >= 0.5):
            nodes[name] = nodes[name].copy(seeds=UniformSetChoice(seed_names).choose(rng))
        elif i > 0:
            nodes[name] = nodes[name].copy(
                persistent_peers=UniformSetChoice(peer_names[:i]).choose(rng)
            )

    return light_providers
