"""Process-level inputs for nix invocations: the binary and its environment."""

from __future__ import annotations

import logging
import os

from .errors import EnvironmentDerivationFailed

logger = logging.getLogger(__name__)

NIX_BIN: str = os.environ.get("FLOX_NIX_BIN", "nix")

DEFAULT_SSL_CERT_FILE = "/etc/ssl/certs/ca-certificates.crt"


def build_flox_env() -> dict[str, str]:
    """Derive the environment passed to nix from the current process."""
    env = dict(os.environ)

    if not env.get("HOME"):
        raise EnvironmentDerivationFailed("HOME is not set; nix cannot locate its user configuration")

    cert_file = env.get("NIX_SSL_CERT_FILE") or env.get("SSL_CERT_FILE") or DEFAULT_SSL_CERT_FILE
    env["NIX_SSL_CERT_FILE"] = cert_file
    logger.debug("Using NIX_SSL_CERT_FILE=%s", cert_file)

    return env
