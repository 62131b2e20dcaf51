"""NixCommandLine: the default backend, driving the nix CLI."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, Field, field_validator

from .. import environment
from .args import EvaluationArgs, FlakeArgs, NixCommonArgs, read_only
from .backend import NixBackend, Runner, subprocess_runner
from .config import NixConfig

if TYPE_CHECKING:
    from ..flox import Flox

logger = logging.getLogger(__name__)

EXPERIMENTAL_FEATURES = ("nix-command", "flakes")
FLOX_SUBSTITUTERS = ("https://cache.floxdev.com?trusted=1",)


class NixCommandLine(BaseModel, NixBackend):
    """A fully configured handle for invoking the nix binary."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    nix_bin: str
    env: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    common_args: NixCommonArgs = Field(default_factory=NixCommonArgs)
    flake_args: FlakeArgs = Field(default_factory=FlakeArgs)
    eval_args: EvaluationArgs = Field(default_factory=EvaluationArgs)
    nix_config: NixConfig = Field(default_factory=NixConfig)
    extra_args: tuple[str, ...] = ()
    runner: Runner = Field(default=subprocess_runner)

    @field_validator("env")
    @classmethod
    def _freeze_env(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only(value)

    @classmethod
    def instance(cls, flox: Flox[Any]) -> Self:
        nix_config = NixConfig.build(
            accept_flake_config=True,
            warn_dirty=False,
            extra_experimental_features=EXPERIMENTAL_FEATURES,
            extra_substituters=FLOX_SUBSTITUTERS,
        )
        return cls(
            nix_bin=environment.NIX_BIN,
            env=environment.build_flox_env(),
            common_args=NixCommonArgs(),
            flake_args=FlakeArgs(),
            eval_args=EvaluationArgs(),
            nix_config=nix_config,
            extra_args=flox.extra_nix_args,
        )

    def command(self, args: Sequence[str]) -> list[str]:
        """Assemble the full argv for a nix subcommand.

        Flake and evaluation flags follow the subcommand arguments but stay
        ahead of a `--` separator, so nix reads them instead of forwarding
        them to the program it runs.
        """
        args = list(args)
        passthrough: list[str] = []
        if "--" in args:
            split = args.index("--")
            args, passthrough = args[:split], args[split:]
        return [
            self.nix_bin,
            *self.common_args.to_args(),
            *self.nix_config.to_args(),
            *self.extra_args,
            *args,
            *self.flake_args.to_args(),
            *self.eval_args.to_args(),
            *passthrough,
        ]

    def run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        argv = self.command(args)
        logger.debug("Running %s", " ".join(argv))
        return self.runner(argv, self.env)
