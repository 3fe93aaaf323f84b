"""Randomized, reproducible testnet generation."""

from .config import (
    DEFAULT_BASE_VERSION,
    DEFAULT_SEED,
    TESTNET_COMBINATIONS,
    GenerateConfig,
    NodeChoices,
    default_node_choices,
)
from .generate import generate, node_choices_for, sort_manifests, split_groups
from .node import generate_light_node, generate_node
from .output import write_manifests
from .topology import generate_testnet, node_name, topology_size, wire_peers

__all__ = [
    "DEFAULT_BASE_VERSION",
    "DEFAULT_SEED",
    "TESTNET_COMBINATIONS",
    "GenerateConfig",
    "NodeChoices",
    "default_node_choices",
    "generate",
    "generate_light_node",
    "generate_node",
    "generate_testnet",
    "node_choices_for",
    "node_name",
    "sort_manifests",
    "split_groups",
    "topology_size",
    "wire_peers",
    "write_manifests",
]
