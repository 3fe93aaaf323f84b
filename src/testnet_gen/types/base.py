"""Reusable, strict base models for generated manifests."""

from copy import deepcopy
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class ManifestBaseModel(BaseModel):
    """
    A base model for declarative testnet descriptions.

    Field names are kept in snake case when serialized, matching the keys the
    testnet runner reads from manifest files.
    """

    model_config = ConfigDict(validate_default=True)

    def copy(self: Self, **kwargs: Any) -> Self:
        """Create a copy of the model with the updated fields that are validated."""
        fields = {name: deepcopy(getattr(self, name)) for name in self.model_fields_set}
        return self.__class__(**(fields | kwargs))


class StrictBaseModel(ManifestBaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ManifestBaseModel.model_config | {
        "extra": "forbid",
        "frozen": True,
        "strict": True,
    }
