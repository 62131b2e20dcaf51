"""Package operations scoped to a Flox context."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .nix import NixBackend

if TYPE_CHECKING:
    from .flox import Flox

logger = logging.getLogger(__name__)


class Installable(BaseModel):
    """A flake reference plus an optional attribute path."""

    model_config = {"frozen": True}

    flakeref: str
    attr_path: str = ""

    @classmethod
    def parse(cls, value: str) -> Installable:
        """Parse `flakeref#attr.path` (the attribute part is optional)."""
        flakeref, _, attr_path = value.partition("#")
        if not flakeref:
            raise ValueError(f"Invalid installable: '{value}'")
        return cls(flakeref=flakeref, attr_path=attr_path)

    def __str__(self) -> str:
        if self.attr_path:
            return f"{self.flakeref}#{self.attr_path}"
        return self.flakeref


class Package[N: NixBackend]:
    """A single installable, operated on through its context's backend."""

    def __init__(self, flox: Flox[N], installable: Installable) -> None:
        self.flox = flox
        self.installable = installable

    def build(self) -> subprocess.CompletedProcess[str]:
        """Build the installable with `nix build`."""
        logger.info("Building %s", self.installable)
        return self.flox.nix().run(["build", str(self.installable)])

    def eval(self, *, json: bool = False) -> subprocess.CompletedProcess[str]:
        """Evaluate the installable with `nix eval`, optionally as JSON."""
        logger.info("Evaluating %s", self.installable)
        args = ["eval", str(self.installable)]
        if json:
            args.append("--json")
        return self.flox.nix().run(args)

    def run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run the installable with `nix run`, forwarding args to the program."""
        logger.info("Running %s", self.installable)
        cmd = ["run", str(self.installable)]
        if args:
            cmd.extend(["--", *args])
        return self.flox.nix().run(cmd)

    def __repr__(self) -> str:
        return f"Package(installable='{self.installable}')"
