"""Test helpers for testnet_gen unit tests."""

from .builders import FakeLatestResolver, make_archive_validator, make_node, make_quad_manifest

__all__ = [
    "FakeLatestResolver",
    "make_archive_validator",
    "make_node",
    "make_quad_manifest",
]
