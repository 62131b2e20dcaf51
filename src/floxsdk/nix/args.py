"""Argument groups shared by nix subcommands."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, Field, field_validator


def read_only(value: Mapping[str, str]) -> Mapping[str, str]:
    """Freeze a validated mapping so frozen models stay immutable."""
    return MappingProxyType(dict(value))


class NixCommonArgs(BaseModel):
    """Flags understood by every nix subcommand."""

    model_config = {"frozen": True, "extra": "forbid"}

    store: str | None = None
    quiet: bool = False
    print_build_logs: bool = False

    def to_args(self) -> list[str]:
        args: list[str] = []
        if self.store is not None:
            args.extend(["--store", self.store])
        if self.quiet:
            args.append("--quiet")
        if self.print_build_logs:
            args.append("--print-build-logs")
        return args


class FlakeArgs(BaseModel):
    """Flags controlling flake input and lock file handling."""

    model_config = {"frozen": True, "extra": "forbid"}

    override_inputs: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    no_write_lock_file: bool = False
    recreate_lock_file: bool = False

    @field_validator("override_inputs")
    @classmethod
    def _freeze_inputs(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only(value)

    def to_args(self) -> list[str]:
        args: list[str] = []
        for input_path, flakeref in self.override_inputs.items():
            args.extend(["--override-input", input_path, flakeref])
        if self.no_write_lock_file:
            args.append("--no-write-lock-file")
        if self.recreate_lock_file:
            args.append("--recreate-lock-file")
        return args


class EvaluationArgs(BaseModel):
    """Flags for commands that evaluate nix expressions."""

    model_config = {"frozen": True, "extra": "forbid"}

    impure: bool = False
    eval_store: str | None = None

    def to_args(self) -> list[str]:
        args: list[str] = []
        if self.impure:
            args.append("--impure")
        if self.eval_store is not None:
            args.extend(["--eval-store", self.eval_store])
        return args
