"""Custom exceptions for the specification compiler."""

from __future__ import annotations


class LangwireError(RuntimeError):
    """Base exception for definition and compilation failures."""


class SpecValidationError(LangwireError, ValueError):
    """Raised when a raw specification cannot be normalized."""


class MissingModesError(SpecValidationError):
    """Raised when a specification names no editing mode."""


class NoFeatureRequestedError(SpecValidationError):
    """Raised when a specification asks for neither an LSP nor a linter."""


class UnsupportedBackendError(LangwireError):
    """Raised when no code generator is registered for a backend id."""

    def __init__(
        self, axis: str, backend_id: str, *, declared: bool = False
    ) -> None:
        self.axis = axis
        self.backend_id = backend_id
        self.declared = declared
        if declared:
            detail = "is declared but has no code generator"
        else:
            detail = "is unknown"
        super().__init__(f"{axis} backend '{backend_id}' {detail}")


class UnsupportedLspIntegrationError(UnsupportedBackendError):
    """Raised when a linter cannot piggyback on the configured LSP client."""

    def __init__(self, linter_client_id: str, lsp_client_id: str) -> None:
        self.linter_client_id = linter_client_id
        self.lsp_client_id = lsp_client_id
        LangwireError.__init__(
            self,
            f"linter backend '{linter_client_id}' has no integration "
            f"with LSP client '{lsp_client_id}'",
        )
        self.axis = "linter"
        self.backend_id = linter_client_id
        self.declared = True


class UnknownToggleError(LangwireError, KeyError):
    """Raised when a runtime call names a toggle or setup id never defined."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ConfigurationWarning(UserWarning):
    """Non-fatal warning about a suspicious but compilable specification."""
