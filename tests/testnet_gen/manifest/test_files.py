"""Tests for manifest files."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from testnet_gen.manifest import Mode, dump_manifest, load_manifest, save_manifest
from tests.testnet_gen.helpers import make_node, make_quad_manifest


class TestDumpManifest:
    """Tests for dump_manifest."""

    def test_snake_case_keys(self) -> None:
        """Keys are written as the runner expects them."""
        data = yaml.safe_load(dump_manifest(make_quad_manifest(initial_height=1000)))

        assert data["initial_height"] == 1000
        assert data["abci_protocol"] == "builtin"
        assert data["nodes"]["validator01"]["mode"] == "validator"
        assert "prepare_proposal_delay_ms" in data

    def test_absent_persist_interval_omitted(self) -> None:
        """An absent interval is left out, an explicit 0 is kept."""
        manifest = make_quad_manifest()
        nodes = dict(manifest.nodes)
        nodes["validator04"] = make_node(persist_interval=0)
        data = yaml.safe_load(dump_manifest(manifest.copy(nodes=nodes)))

        assert "persist_interval" not in data["nodes"]["validator01"]
        assert data["nodes"]["validator04"]["persist_interval"] == 0

    def test_validator_update_heights_stay_strings(self) -> None:
        """Height keys survive serialization as strings."""
        manifest = make_quad_manifest(validator_updates={"1010": {"validator04": 60}})
        data = yaml.safe_load(dump_manifest(manifest))
        assert list(data["validator_updates"]) == ["1010"]


class TestSaveAndLoad:
    """Tests for writing and reading manifest files."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        """A saved manifest loads back equal, enums included."""
        manifest = make_quad_manifest(initial_state={"initial01": "a"})
        path = save_manifest(manifest, tmp_path / "gen-0000.yaml")

        loaded = load_manifest(path)

        assert loaded == manifest
        assert loaded.nodes["validator01"].mode is Mode.VALIDATOR

    def test_load_hand_written(self, tmp_path: Path) -> None:
        """Plain YAML written by hand is accepted."""
        path = tmp_path / "manual.yaml"
        path.write_text(
            "initial_height: 5\n"
            "validators:\n"
            "  validator01: 100\n"
            "nodes:\n"
            "  validator01:\n"
            "    mode: validator\n"
            "    persist_interval: 1\n"
        )

        manifest = load_manifest(path)

        assert manifest.initial_height == 5
        assert manifest.nodes["validator01"].persist_interval == 1

    def test_load_rejects_unknown_mode(self, tmp_path: Path) -> None:
        """Invalid data surfaces as a validation error."""
        path = tmp_path / "bad.yaml"
        path.write_text("nodes:\n  validator01:\n    mode: observer\n")
        with pytest.raises(ValidationError):
            load_manifest(path)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """A missing file is reported as such."""
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path / "missing.yaml")
