"""Flox: the per-session context that nix backends and packages are derived from."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from .errors import MissingRequiredField
from .nix import NixBackend, NixCommandLine
from .package import Installable, Package

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Flox[N: NixBackend]:
    """Immutable context for nix invocations.

    One invocation of an application normally shares a single instance.
    The context hands out preconfigured backends through `nix()`; the
    backend type is chosen at construction and defaults to the nix CLI.
    """

    config_dir: Path
    cache_dir: Path
    data_dir: Path

    # declared for future use; has no effect yet
    collect_metrics: bool = False

    extra_nix_args: tuple[str, ...] = ()
    nix_backend: type[N] = NixCommandLine  # type: ignore[assignment]

    @classmethod
    def builder(
        cls,
        nix_backend: type[N] = NixCommandLine,  # type: ignore[assignment]
    ) -> FloxBuilder[N]:
        return FloxBuilder(nix_backend)

    def package(self, installable: Installable) -> Package[N]:
        return Package(self, installable)

    def nix(self) -> N:
        """Return a fresh backend instance configured for this context."""
        logger.debug("Instantiating %s", self.nix_backend.__name__)
        return self.nix_backend.instance(self)


class FloxBuilder[N: NixBackend]:
    """Collects Flox fields and validates them on `build()`."""

    def __init__(
        self,
        nix_backend: type[N] = NixCommandLine,  # type: ignore[assignment]
    ) -> None:
        self._nix_backend = nix_backend
        self._config_dir: Path | None = None
        self._cache_dir: Path | None = None
        self._data_dir: Path | None = None
        self._collect_metrics = False
        self._extra_nix_args: tuple[str, ...] = ()

    def config_dir(self, path: str | os.PathLike[str]) -> Self:
        self._config_dir = Path(path)
        return self

    def cache_dir(self, path: str | os.PathLike[str]) -> Self:
        self._cache_dir = Path(path)
        return self

    def data_dir(self, path: str | os.PathLike[str]) -> Self:
        self._data_dir = Path(path)
        return self

    def collect_metrics(self, enabled: bool) -> Self:
        self._collect_metrics = enabled
        return self

    def extra_nix_args(self, args: Iterable[str]) -> Self:
        self._extra_nix_args = tuple(args)
        return self

    def build(self) -> Flox[N]:
        """Finalize the context.

        Mandatory directories are checked in order (config, cache, data);
        the first one left unset raises MissingRequiredField. Paths are
        taken as given and never touched on disk.
        """
        if self._config_dir is None:
            raise MissingRequiredField("config_dir")
        if self._cache_dir is None:
            raise MissingRequiredField("cache_dir")
        if self._data_dir is None:
            raise MissingRequiredField("data_dir")

        return Flox(
            config_dir=self._config_dir,
            cache_dir=self._cache_dir,
            data_dir=self._data_dir,
            collect_metrics=self._collect_metrics,
            extra_nix_args=self._extra_nix_args,
            nix_backend=self._nix_backend,
        )


DefaultFlox = Flox[NixCommandLine]
DefaultFloxBuilder = FloxBuilder[NixCommandLine]
