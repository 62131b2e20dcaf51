"""floxsdk - A preconfigured context for invoking nix on behalf of flox."""

from .errors import ConfigurationBuildFailed as ConfigurationBuildFailed
from .errors import EnvironmentDerivationFailed as EnvironmentDerivationFailed
from .errors import FloxError as FloxError
from .errors import MissingRequiredField as MissingRequiredField
from .flox import DefaultFlox as DefaultFlox
from .flox import DefaultFloxBuilder as DefaultFloxBuilder
from .flox import Flox as Flox
from .flox import FloxBuilder as FloxBuilder
from .nix import NixBackend as NixBackend
from .nix import NixCommandLine as NixCommandLine
from .nix import NixConfig as NixConfig
from .package import Installable as Installable
from .package import Package as Package
from .settings import builder_from_file as builder_from_file
