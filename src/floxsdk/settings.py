"""Load Flox builder settings from HCL files."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import hcl2
import jinja2
from pydantic import BaseModel

from .flox import FloxBuilder
from .nix import NixBackend, NixCommandLine

logger = logging.getLogger(__name__)

# ${env.NAME} or ${CWD}; any other ${...} is left untouched
_REF_PATTERN = re.compile(r"\$\{(?:env\.(\w+)|(CWD))\}")


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Render a settings file as a Jinja2 template and parse it as HCL.

    The template sees the process environment as `env` alongside any
    caller-supplied context values.
    """
    template_vars: dict[str, Any] = {"env": dict(os.environ), **(context or {})}
    renderer = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)
    try:
        text = renderer.from_string(file.read_text()).render(template_vars)
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc
    return hcl2.loads(text)


def _expand_ref(match: re.Match[str]) -> str:
    env_name = match.group(1)
    if env_name is None:
        return os.getcwd()
    if env_name not in os.environ:
        raise ValueError(f"environment variable '{env_name}' is not set")
    return os.environ[env_name]


def expand_refs(value: Any) -> Any:
    """Expand ${env.NAME} and ${CWD} in strings, recursing into lists."""
    if isinstance(value, list):
        return [expand_refs(item) for item in value]
    if isinstance(value, str) and "${" in value:
        return _REF_PATTERN.sub(_expand_ref, value)
    return value


class FloxSettings(BaseModel):
    """Builder values read from a settings file; unset values stay unset."""

    model_config = {"extra": "forbid"}

    config_dir: Path | None = None
    cache_dir: Path | None = None
    data_dir: Path | None = None
    collect_metrics: bool | None = None
    extra_nix_args: list[str] | None = None

    def apply[N: NixBackend](self, builder: FloxBuilder[N]) -> FloxBuilder[N]:
        """Copy every set value onto the builder."""
        if self.config_dir is not None:
            builder.config_dir(self.config_dir)
        if self.cache_dir is not None:
            builder.cache_dir(self.cache_dir)
        if self.data_dir is not None:
            builder.data_dir(self.data_dir)
        if self.collect_metrics is not None:
            builder.collect_metrics(self.collect_metrics)
        if self.extra_nix_args is not None:
            builder.extra_nix_args(self.extra_nix_args)
        return builder


def builder_from_file[N: NixBackend](
    file: str | Path,
    *,
    context: dict[str, Any] | None = None,
    nix_backend: type[N] = NixCommandLine,  # type: ignore[assignment]
) -> FloxBuilder[N]:
    """Return a builder preloaded with the settings in an HCL file.

    Directories the file does not set remain unset, so `build()` still
    reports them.
    """
    path = Path(file)
    logger.debug("Loading settings from %s", path)
    data = {key: expand_refs(value) for key, value in load(path, context=context).items()}
    settings = FloxSettings.model_validate(data)
    return settings.apply(FloxBuilder(nix_backend))
