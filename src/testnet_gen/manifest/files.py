"""
Manifest files.

Manifests are stored as YAML with snake_case keys. An absent
`persist_interval` is omitted rather than written as null: the runner reads a
missing key as "persist every block".
"""

from __future__ import annotations

from pathlib import Path

import yaml

from .model import Manifest


def dump_manifest(manifest: Manifest) -> str:
    """Render a manifest as a YAML document."""
    data = manifest.model_dump(mode="json", exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False)


def save_manifest(manifest: Manifest, path: Path | str) -> Path:
    """Write a manifest to `path`, replacing any existing file."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        f.write(dump_manifest(manifest))
    return path


def load_manifest(path: Path | str) -> Manifest:
    """
    Load a manifest from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the data is not a valid manifest.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    # Files carry plain strings for enums, so validate in lax mode.
    return Manifest.model_validate(data, strict=False)
