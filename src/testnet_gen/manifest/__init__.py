"""Declarative testnet descriptions, their structural checks and files."""

from .files import dump_manifest, load_manifest, save_manifest
from .model import Manifest, ManifestNode, Mode
from .validation import is_light_provider, quorum_size, validate_manifest

__all__ = [
    "Manifest",
    "ManifestNode",
    "Mode",
    "dump_manifest",
    "is_light_provider",
    "load_manifest",
    "quorum_size",
    "save_manifest",
    "validate_manifest",
]
