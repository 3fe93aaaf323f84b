"""Tests for manifest structural checks."""

from __future__ import annotations

import pytest

from testnet_gen.manifest import Manifest, Mode, is_light_provider, quorum_size, validate_manifest
from testnet_gen.types import ManifestValidationError
from tests.testnet_gen.helpers import make_archive_validator, make_node, make_quad_manifest


def _with_node(manifest: Manifest, name: str, **fields: object) -> Manifest:
    """Return the manifest with one node's fields replaced."""
    nodes = dict(manifest.nodes)
    nodes[name] = nodes[name].copy(**fields)
    return manifest.copy(nodes=nodes)


@pytest.mark.parametrize(("n", "expected"), [(1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (7, 5)])
def test_quorum_size(n: int, expected: int) -> None:
    """Quorum is strictly more than two thirds of the validators."""
    assert quorum_size(n) == expected


class TestIsLightProvider:
    """Tests for is_light_provider."""

    def test_genesis_archive_validator(self) -> None:
        """A validator present from genesis that keeps every block qualifies."""
        assert is_light_provider(make_archive_validator(), 1000)

    def test_start_at_initial_height(self) -> None:
        """Starting exactly at the initial height also counts as present from the start."""
        assert is_light_provider(make_node(Mode.FULL, start_at=1000), 1000)

    def test_late_or_pruning_nodes_excluded(self) -> None:
        """Delayed or pruning nodes do not qualify, nor do seeds and light clients."""
        assert not is_light_provider(make_node(start_at=1005), 1000)
        assert not is_light_provider(make_node(retain_blocks=14, persist_interval=1), 0)
        assert not is_light_provider(make_node(Mode.SEED), 0)
        assert not is_light_provider(make_node(Mode.LIGHT), 0)


class TestValidateManifest:
    """Tests for validate_manifest."""

    def test_valid_manifest_passes(self) -> None:
        """A well-formed manifest raises nothing."""
        validate_manifest(make_quad_manifest())

    def test_initchain_variant_passes(self) -> None:
        """The initial set may live in the height 0 update instead."""
        manifest = make_quad_manifest()
        updates = {"0": manifest.validators}
        validate_manifest(manifest.copy(validators={}, validator_updates=updates))

    def test_both_initial_sets_rejected(self) -> None:
        """Genesis set and height 0 update are mutually exclusive."""
        manifest = make_quad_manifest()
        broken = manifest.copy(validator_updates={"0": manifest.validators})
        with pytest.raises(ManifestValidationError, match="exactly one"):
            validate_manifest(broken)

    def test_no_initial_set_rejected(self) -> None:
        """Validators must get power from somewhere."""
        with pytest.raises(ManifestValidationError, match="exactly one"):
            validate_manifest(make_quad_manifest(validators={}))

    def test_missing_quorum_rejected(self) -> None:
        """Fewer than a quorum at genesis cannot make progress."""
        manifest = _with_node(make_quad_manifest(), "validator04", start_at=5, persistent_peers=[])
        manifest = _with_node(manifest, "validator03", start_at=10, persistent_peers=[])
        with pytest.raises(ManifestValidationError, match="start at genesis"):
            validate_manifest(manifest)

    def test_missing_archives_rejected(self) -> None:
        """At least two validators must be archive nodes."""
        manifest = _with_node(make_quad_manifest(), "validator02", snapshot_interval=0)
        with pytest.raises(ManifestValidationError, match="archive"):
            validate_manifest(manifest)

    def test_bad_name_rejected(self) -> None:
        """Names carry the node's role."""
        manifest = make_quad_manifest()
        nodes = dict(manifest.nodes)
        nodes["full01"] = nodes.pop("validator04")
        with pytest.raises(ManifestValidationError, match="name does not match"):
            validate_manifest(manifest.copy(nodes=nodes))

    def test_pruning_without_persistence_rejected(self) -> None:
        """Never persisting while pruning is contradictory."""
        manifest = _with_node(
            make_quad_manifest(), "validator04", retain_blocks=14, persist_interval=0
        )
        with pytest.raises(ManifestValidationError, match="never persists"):
            validate_manifest(manifest)

    @pytest.mark.parametrize(
        ("fields", "match"),
        [
            ({"retain_blocks": 3, "persist_interval": 5}, "persist_interval"),
            ({"retain_blocks": 2, "snapshot_interval": 3}, "snapshot_interval"),
        ],
    )
    def test_retention_below_intervals_rejected(self, fields: dict, match: str) -> None:
        """Retention must cover the persist and snapshot intervals."""
        manifest = _with_node(make_quad_manifest(), "validator04", **fields)
        with pytest.raises(ManifestValidationError, match=match) as exc_info:
            validate_manifest(manifest)
        assert exc_info.value.node == "validator04"

    def test_unknown_peer_rejected(self) -> None:
        """Peers must exist in the manifest."""
        manifest = _with_node(make_quad_manifest(), "validator04", persistent_peers=["full09"])
        with pytest.raises(ManifestValidationError, match="unknown persistent peer"):
            validate_manifest(manifest)

    def test_unknown_seed_rejected(self) -> None:
        """Seeds must exist and be seed nodes."""
        manifest = _with_node(make_quad_manifest(), "validator04", seeds=["validator01"])
        with pytest.raises(ManifestValidationError, match="unknown seed"):
            validate_manifest(manifest)

    def test_forward_reference_rejected(self) -> None:
        """Peers may not start after the node referencing them."""
        manifest = make_quad_manifest()
        nodes = dict(manifest.nodes)
        nodes["full01"] = make_node(Mode.FULL, start_at=20)
        nodes["validator04"] = nodes["validator04"].copy(persistent_peers=["full01"])
        with pytest.raises(ManifestValidationError, match="starts at 20"):
            validate_manifest(manifest.copy(nodes=nodes))

    def test_light_client_needs_providers(self) -> None:
        """Light clients only connect to archive nodes present from the start."""
        manifest = make_quad_manifest()
        nodes = dict(manifest.nodes)
        nodes["light01"] = make_node(Mode.LIGHT, start_at=10, persistent_peers=["validator01"])
        validate_manifest(manifest.copy(nodes=nodes))

        nodes["full01"] = make_node(Mode.FULL, start_at=5)
        nodes["light01"] = make_node(Mode.LIGHT, start_at=10, persistent_peers=["full01"])
        with pytest.raises(ManifestValidationError, match="cannot serve light clients"):
            validate_manifest(manifest.copy(nodes=nodes))

    def test_update_for_unknown_validator_rejected(self) -> None:
        """Validator updates only name validators."""
        manifest = make_quad_manifest(validator_updates={"15": {"validator09": 40}})
        with pytest.raises(ManifestValidationError, match="unknown validator"):
            validate_manifest(manifest)

    def test_update_height_must_be_decimal(self) -> None:
        """Update heights are decimal strings."""
        manifest = make_quad_manifest(validator_updates={"x15": {"validator01": 40}})
        with pytest.raises(ManifestValidationError, match="not decimal"):
            validate_manifest(manifest)
