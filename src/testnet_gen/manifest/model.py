"""
Manifest data model.

A manifest is the declarative description of one test network: network-wide
settings plus the configuration of every node in it. Manifests are built once
by the topology builder and are immutable afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from testnet_gen.types import StrictBaseModel


class Mode(str, Enum):
    """The role a node plays in the network."""

    SEED = "seed"
    """Peer discovery bootstrap only. Does not serve data."""

    VALIDATOR = "validator"
    """Participates in consensus with voting power."""

    FULL = "full"
    """Follows the chain without voting."""

    LIGHT = "light"
    """Verifies headers through trusted providers."""


class ManifestNode(StrictBaseModel):
    """Configuration of a single node."""

    mode: Mode
    """Role of the node."""

    version: str = ""
    """Software version to run. Empty means the locally built software."""

    start_at: int = Field(default=0, ge=0)
    """Height at which the node joins the network. 0 means genesis."""

    database: str = ""
    """Storage engine."""

    privval_protocol: str = ""
    """Transport used to reach the validator signing key."""

    block_sync: str = ""
    """Strategy used to catch up with the chain head."""

    mempool: str = ""
    """Mempool implementation."""

    state_sync: bool = False
    """Bootstrap from a snapshot instead of replaying history."""

    persist_interval: int | None = Field(default=None, ge=0)
    """
    Persist application state every N blocks.

    None means persist every block. 0 means never persist, which is only
    consistent when no blocks are pruned.
    """

    snapshot_interval: int = Field(default=0, ge=0)
    """Take a state sync snapshot every N blocks. 0 disables snapshots."""

    retain_blocks: int = Field(default=0, ge=0)
    """Number of trailing blocks kept. 0 keeps every block (archive)."""

    perturb: list[str] = Field(default_factory=list)
    """Fault-injection perturbations applied to the running node."""

    seeds: list[str] = Field(default_factory=list)
    """Seed nodes used to bootstrap peer discovery."""

    persistent_peers: list[str] = Field(default_factory=list)
    """Nodes this node always connects to."""

    def is_archive(self) -> bool:
        """Archive nodes keep every block and produce snapshots."""
        return self.retain_blocks == 0 and self.snapshot_interval > 0


class Manifest(StrictBaseModel):
    """One generated test network."""

    ipv6: bool = False
    """Use IPv6 addresses for the network."""

    abci_protocol: str = ""
    """Transport between the consensus engine and the application."""

    initial_height: int = Field(default=0, ge=0)
    """Height of the first block."""

    initial_state: dict[str, str] = Field(default_factory=dict)
    """Initial key-value application state."""

    validators: dict[str, int] = Field(default_factory=dict)
    """
    Genesis validator set: node name -> voting power.

    Empty when the validators are instead installed by the height "0" update.
    """

    validator_updates: dict[str, dict[str, int]] = Field(default_factory=dict)
    """
    Validator set transitions keyed by decimal height string.

    Heights are strings so the mapping serializes unchanged; consumers sort
    them numerically.
    """

    evidence: int = Field(default=0, ge=0)
    """Number of pieces of misbehaviour evidence to inject."""

    prepare_proposal_delay_ms: int = Field(default=0, ge=0)
    """Artificial delay added to the prepare-proposal callback."""

    process_proposal_delay_ms: int = Field(default=0, ge=0)
    """Artificial delay added to the process-proposal callback."""

    check_tx_delay_ms: int = Field(default=0, ge=0)
    """Artificial delay added to the check-tx callback."""

    nodes: dict[str, ManifestNode] = Field(default_factory=dict)
    """Node name -> node configuration."""

    def nodes_by_mode(self, mode: Mode) -> dict[str, ManifestNode]:
        """Nodes with the given role, sorted by name."""
        return {
            name: self.nodes[name] for name in sorted(self.nodes) if self.nodes[name].mode is mode
        }

    def perturbation_count(self) -> int:
        """Total number of perturbations across all nodes."""
        return sum(len(node.perturb) for node in self.nodes.values())
