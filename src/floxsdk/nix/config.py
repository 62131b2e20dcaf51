"""NixConfig: the nix.conf options a backend passes on the command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from ..errors import ConfigurationBuildFailed

logger = logging.getLogger(__name__)


class NixConfig(BaseModel):
    """Typed subset of nix.conf settings; unset options are not rendered."""

    model_config = {"frozen": True, "extra": "forbid"}

    accept_flake_config: bool | None = None
    warn_dirty: bool | None = None
    show_trace: bool | None = None
    netrc_file: Path | None = None
    extra_experimental_features: tuple[str, ...] | None = None
    extra_substituters: tuple[str, ...] | None = None
    extra_trusted_public_keys: tuple[str, ...] | None = None

    @field_validator(
        "extra_experimental_features",
        "extra_substituters",
        "extra_trusted_public_keys",
    )
    @classmethod
    def _ordered_set(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        """Deduplicate entries, keeping the first occurrence of each."""
        if value is None:
            return None
        entries: list[str] = []
        for entry in value:
            if not entry or any(ch.isspace() for ch in entry):
                raise ValueError(f"invalid entry: '{entry}'")
            if entry not in entries:
                entries.append(entry)
        return tuple(entries)

    @classmethod
    def build(cls, **options: Any) -> NixConfig:
        """Construct a config, raising ConfigurationBuildFailed on bad options."""
        try:
            return cls(**options)
        except ValidationError as exc:
            raise ConfigurationBuildFailed(str(exc)) from exc

    def to_args(self) -> list[str]:
        """Render set options as `--option <name> <value>` flags."""
        args: list[str] = []
        for name, value in self:
            if value is None:
                continue
            if isinstance(value, bool):
                rendered = "true" if value else "false"
            elif isinstance(value, tuple):
                rendered = " ".join(value)
            else:
                rendered = str(value)
            args.extend(["--option", name.replace("_", "-"), rendered])
        return args
