"""Tests for writing manifest batches."""

from __future__ import annotations

from pathlib import Path

from testnet_gen.generator import GenerateConfig, generate, write_manifests
from testnet_gen.manifest import load_manifest
from tests.testnet_gen.helpers import make_quad_manifest


class TestWriteManifests:
    """Tests for write_manifests."""

    def test_flat_names(self, tmp_path: Path) -> None:
        """Without groups files are numbered in generation order."""
        manifests = [make_quad_manifest(evidence=i) for i in range(3)]

        paths = write_manifests(manifests, tmp_path)

        assert [p.name for p in paths] == ["gen-0000.yaml", "gen-0001.yaml", "gen-0002.yaml"]
        assert [load_manifest(p).evidence for p in paths] == [0, 1, 2]

    def test_grouped_names(self, tmp_path: Path) -> None:
        """Groups are numbered, and so are the files within each group."""
        manifests = [make_quad_manifest(evidence=i) for i in range(5)]

        paths = write_manifests(manifests, tmp_path, groups=2)

        assert [p.name for p in paths] == [
            "gen-group00-0000.yaml",
            "gen-group00-0001.yaml",
            "gen-group00-0002.yaml",
            "gen-group01-0000.yaml",
            "gen-group01-0001.yaml",
        ]

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        directory = tmp_path / "networks" / "generated"
        write_manifests([make_quad_manifest()], directory)
        assert (directory / "gen-0000.yaml").is_file()

    def test_generated_batch_round_trips(self, tmp_path: Path) -> None:
        """A generated batch reads back unchanged."""
        manifests = generate(GenerateConfig(seed=11))

        paths = write_manifests(manifests, tmp_path)

        assert len(paths) == 24
        assert [load_manifest(p) for p in paths] == manifests

    def test_grouped_batch_balanced(self, tmp_path: Path) -> None:
        """Each group receives a near equal share."""
        manifests = generate(GenerateConfig(seed=11))

        write_manifests(manifests, tmp_path, groups=5)

        sizes = [len(list(tmp_path.glob(f"gen-group{g:02d}-*.yaml"))) for g in range(5)]
        assert sizes == [5, 5, 5, 5, 4]
