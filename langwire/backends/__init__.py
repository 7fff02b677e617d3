"""Backend dispatch tables and built-in code generators."""

from .registry import (
    BackendRegistry,
    LinterRule,
    LspRule,
    register_linter_backend,
    register_lsp_backend,
    register_lsp_integration,
    unregister_linter_backend,
    unregister_lsp_backend,
    unregister_lsp_integration,
)

__all__ = [
    "BackendRegistry",
    "LinterRule",
    "LspRule",
    "register_linter_backend",
    "register_lsp_backend",
    "register_lsp_integration",
    "unregister_linter_backend",
    "unregister_lsp_backend",
    "unregister_lsp_integration",
]
