"""
Structural checks for generated manifests.

These re-verify, on a finished manifest, the guarantees the topology builder
is meant to provide. The builder runs them on everything it returns, so a
regression in the generation logic surfaces as an error instead of as a
testnet that cannot reach consensus.
"""

from __future__ import annotations

import re

from testnet_gen.types import ManifestValidationError

from .model import Manifest, ManifestNode, Mode

_NAME_PATTERN = re.compile(r"^(seed|validator|full|light)(\d{2,})$")
"""Generated names are the role followed by a zero-padded index."""

MIN_ARCHIVE_VALIDATORS = 2
"""Archive validators required once a network has at least two validators."""


def quorum_size(num_validators: int) -> int:
    """Smallest validator count strictly above two thirds."""
    return num_validators * 2 // 3 + 1


def is_light_provider(node: ManifestNode, initial_height: int) -> bool:
    """
    Check whether a node can serve light clients.

    Providers must have been present from the start and keep every block.
    """
    return (
        node.mode in (Mode.VALIDATOR, Mode.FULL)
        and node.start_at in (0, initial_height)
        and node.retain_blocks == 0
    )


def validate_manifest(manifest: Manifest) -> None:
    """
    Verify every structural invariant of a manifest.

    Raises:
        ManifestValidationError: On the first violated invariant.
    """
    for name, node in manifest.nodes.items():
        _check_name(name, node)
        _check_retention(name, node)
        _check_references(manifest, name, node)
    _check_validators(manifest)


def _check_name(name: str, node: ManifestNode) -> None:
    match = _NAME_PATTERN.match(name)
    if match is None or match.group(1) != node.mode.value:
        raise ManifestValidationError(f"name does not match mode {node.mode.value}", node=name)


def _check_retention(name: str, node: ManifestNode) -> None:
    if node.mode is Mode.LIGHT or node.retain_blocks == 0:
        return

    if node.persist_interval == 0:
        raise ManifestValidationError(
            f"prunes to {node.retain_blocks} blocks but never persists state", node=name
        )
    if node.persist_interval is not None and node.retain_blocks < node.persist_interval:
        raise ManifestValidationError(
            f"retain_blocks {node.retain_blocks} below persist_interval {node.persist_interval}",
            node=name,
        )
    if node.retain_blocks < node.snapshot_interval:
        raise ManifestValidationError(
            f"retain_blocks {node.retain_blocks} below snapshot_interval {node.snapshot_interval}",
            node=name,
        )


def _check_references(manifest: Manifest, name: str, node: ManifestNode) -> None:
    for seed in node.seeds:
        target = manifest.nodes.get(seed)
        if target is None or target.mode is not Mode.SEED:
            raise ManifestValidationError(f"unknown seed {seed!r}", node=name)
        if seed == name:
            raise ManifestValidationError("lists itself as a seed", node=name)

    for peer in node.persistent_peers:
        target = manifest.nodes.get(peer)
        if target is None:
            raise ManifestValidationError(f"unknown persistent peer {peer!r}", node=name)
        if node.mode is Mode.LIGHT:
            if not is_light_provider(target, manifest.initial_height):
                raise ManifestValidationError(f"{peer!r} cannot serve light clients", node=name)
        elif target.mode is not Mode.SEED and target.start_at > node.start_at:
            raise ManifestValidationError(
                f"persistent peer {peer!r} starts at {target.start_at}, after {node.start_at}",
                node=name,
            )


def _check_validators(manifest: Manifest) -> None:
    validators = manifest.nodes_by_mode(Mode.VALIDATOR)
    if not validators:
        return

    at_genesis = sum(1 for node in validators.values() if node.start_at == 0)
    if at_genesis < quorum_size(len(validators)):
        raise ManifestValidationError(
            f"only {at_genesis} of {len(validators)} validators start at genesis"
        )

    if len(validators) >= MIN_ARCHIVE_VALIDATORS:
        archives = sum(1 for node in validators.values() if node.is_archive())
        if archives < MIN_ARCHIVE_VALIDATORS:
            raise ManifestValidationError(f"only {archives} archive validators")

    # The initial set comes from genesis or from the height 0 update, never both.
    if bool(manifest.validators) == bool(manifest.validator_updates.get("0")):
        raise ManifestValidationError(
            "exactly one of the genesis validator set and the height 0 update must be set"
        )

    for height, update in manifest.validator_updates.items():
        if not height.isdecimal():
            raise ManifestValidationError(f"validator update height {height!r} is not decimal")
        for validator in update:
            if validator not in validators:
                raise ManifestValidationError(
                    f"validator update at height {height} names unknown validator {validator!r}"
                )
    for validator in manifest.validators:
        if validator not in validators:
            raise ManifestValidationError(f"genesis names unknown validator {validator!r}")
