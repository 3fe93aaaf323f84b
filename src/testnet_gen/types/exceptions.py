"""Exception hierarchy for testnet generation."""

from __future__ import annotations

from typing import Any


class GeneratorError(Exception):
    """
    Base exception for all generation errors.

    Any of these aborts the whole batch: there is no partial result.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class UnknownOptionError(GeneratorError):
    """
    Raised when a combination carries a value the builder cannot interpret.

    Attributes:
        option: The option axis name (e.g. "topology").
        value: The offending value.
    """

    def __init__(self, option: str, value: Any) -> None:
        self.option = option
        self.value = value
        super().__init__(f"unknown {option} option {value!r}")


class VersionSpecError(GeneratorError):
    """
    Raised when a weighted version specification cannot be parsed.

    Attributes:
        entry: The `version:weight` entry that failed.
        detail: What is wrong with it.
    """

    def __init__(self, entry: str, detail: str) -> None:
        self.entry = entry
        self.detail = detail
        super().__init__(f"invalid weighted version {entry!r}: {detail}")


class VersionResolutionError(GeneratorError):
    """
    Raised when the latest release version cannot be determined.

    Covers repository access failures, unparsable tags and an unparsable
    base version.
    """


class ManifestValidationError(GeneratorError):
    """
    Raised when a generated manifest breaks a structural invariant.

    Attributes:
        detail: Description of the violated invariant.
        node: The node the violation was found on (if any).
    """

    def __init__(self, detail: str, *, node: str | None = None) -> None:
        self.detail = detail
        self.node = node

        msg = f"invalid manifest: {detail}"
        if node is not None:
            msg = f"invalid manifest: node {node!r}: {detail}"

        super().__init__(msg)
