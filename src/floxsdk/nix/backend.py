"""NixBackend ABC and the process runner it delegates to."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from ..flox import Flox

Runner = Callable[[list[str], Mapping[str, str]], subprocess.CompletedProcess[str]]


def subprocess_runner(argv: list[str], env: Mapping[str, str]) -> subprocess.CompletedProcess[str]:
    """Run argv to completion and capture its output."""
    return subprocess.run(argv, env=dict(env), capture_output=True, text=True, check=False)


class NixBackend(ABC):
    """Base class for anything a Flox context can use to talk to nix."""

    @classmethod
    @abstractmethod
    def instance(cls, flox: Flox[Any]) -> Self:
        """Create a backend preconfigured for the given context."""

    @abstractmethod
    def run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        """Invoke nix with the given subcommand arguments."""
