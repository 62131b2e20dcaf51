"""Exception types raised by floxsdk."""

from __future__ import annotations


class FloxError(Exception):
    """Base class for all floxsdk errors."""


class MissingRequiredField(FloxError, ValueError):
    """A mandatory builder field was never set."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing required field '{field}'")
        self.field = field


class EnvironmentDerivationFailed(FloxError):
    """The environment for a nix invocation could not be derived."""


class ConfigurationBuildFailed(FloxError, ValueError):
    """The nix configuration object rejected its options."""
