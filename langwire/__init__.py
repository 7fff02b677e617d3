"""langwire package entry point."""

from .compiler import compile_specification
from .exceptions import (
    ConfigurationWarning,
    LangwireError,
    MissingModesError,
    NoFeatureRequestedError,
    SpecValidationError,
    UnknownToggleError,
    UnsupportedBackendError,
    UnsupportedLspIntegrationError,
)
from .specification import validate
from .types import (
    Action,
    Buffer,
    CompiledUnit,
    DefinedLanguage,
    LinterKind,
    LinterSpec,
    LspSpec,
    Specification,
)
from .workspace import Workspace

__all__ = [
    "Action",
    "Buffer",
    "CompiledUnit",
    "ConfigurationWarning",
    "DefinedLanguage",
    "LangwireError",
    "LinterKind",
    "LinterSpec",
    "LspSpec",
    "MissingModesError",
    "NoFeatureRequestedError",
    "SpecValidationError",
    "Specification",
    "UnknownToggleError",
    "UnsupportedBackendError",
    "UnsupportedLspIntegrationError",
    "Workspace",
    "compile_specification",
    "validate",
]
