"""Reusable type definitions for testnet generation."""

from .base import ManifestBaseModel, StrictBaseModel
from .exceptions import (
    GeneratorError,
    ManifestValidationError,
    UnknownOptionError,
    VersionResolutionError,
    VersionSpecError,
)

__all__ = [
    # Models
    "ManifestBaseModel",
    "StrictBaseModel",
    # Exceptions
    "GeneratorError",
    "UnknownOptionError",
    "VersionSpecError",
    "VersionResolutionError",
    "ManifestValidationError",
]
