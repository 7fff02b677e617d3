"""Backends that ship with langwire."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langwire.backends.eglot import eglot_action
from langwire.backends.flycheck import FLYCHECK_EGLOT, flycheck_action
from langwire.constants import LINTER_CLIENT_FLYCHECK, LSP_CLIENT_EGLOT

if TYPE_CHECKING:  # pragma: no cover
    from langwire.backends.registry import BackendRegistry


def register_builtin_backends(registry: "BackendRegistry") -> None:
    # lsp-mode, lsp-bridge and flymake are declared in constants but have no
    # rule yet, so selecting them fails at compile time.
    registry.register_lsp(LSP_CLIENT_EGLOT, eglot_action)
    registry.register_linter(LINTER_CLIENT_FLYCHECK, flycheck_action)
    registry.register_lsp_integration(
        LINTER_CLIENT_FLYCHECK, LSP_CLIENT_EGLOT, FLYCHECK_EGLOT
    )
