"""Backends for invoking nix."""

from .args import EvaluationArgs as EvaluationArgs
from .args import FlakeArgs as FlakeArgs
from .args import NixCommonArgs as NixCommonArgs
from .backend import NixBackend as NixBackend
from .backend import Runner as Runner
from .backend import subprocess_runner as subprocess_runner
from .command_line import NixCommandLine as NixCommandLine
from .config import NixConfig as NixConfig
