"""Dispatch tables from backend identifiers to code-generation rules."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from langwire.constants import (
    AXIS_LINTER,
    AXIS_LSP,
    KNOWN_LINTER_CLIENTS,
    KNOWN_LSP_CLIENTS,
)
from langwire.exceptions import UnsupportedBackendError
from langwire.types import Action, LspPresence, Specification

LspRule = Callable[[Specification], Action]
LinterRule = Callable[[Specification, LspPresence], Action]


class BackendRegistry:
    """Keeps one code-generation rule per backend id, for each axis.

    Each linter backend also owns a table of the LSP clients whose sessions
    it can reuse, keyed by LSP client id.
    """

    _instance: "BackendRegistry | None" = None

    def __init__(self) -> None:
        self._lsp: Dict[str, LspRule] = {}
        self._linter: Dict[str, LinterRule] = {}
        self._lsp_integrations: Dict[str, Dict[str, str]] = {}

    @classmethod
    def get_registry(cls) -> "BackendRegistry":
        if cls._instance is None:
            from langwire.backends.builtin import register_builtin_backends

            registry = BackendRegistry()
            register_builtin_backends(registry)
            cls._instance = registry
        return cls._instance

    def register_lsp(self, backend_id: str, rule: LspRule) -> None:
        self._lsp[backend_id] = rule

    def unregister_lsp(self, backend_id: str) -> None:
        self._lsp.pop(backend_id, None)

    def register_linter(self, backend_id: str, rule: LinterRule) -> None:
        self._linter[backend_id] = rule

    def unregister_linter(self, backend_id: str) -> None:
        self._linter.pop(backend_id, None)

    def register_lsp_integration(
        self, linter_client_id: str, lsp_client_id: str, name: str
    ) -> None:
        table = self._lsp_integrations.setdefault(linter_client_id, {})
        table[lsp_client_id] = name

    def unregister_lsp_integration(
        self, linter_client_id: str, lsp_client_id: str
    ) -> None:
        table = self._lsp_integrations.get(linter_client_id)
        if table is not None:
            table.pop(lsp_client_id, None)

    def lsp_integrations(self, linter_client_id: str) -> Mapping[str, str]:
        """Read-only snapshot of ``linter_client_id``'s integration table."""

        return MappingProxyType(
            dict(self._lsp_integrations.get(linter_client_id, {}))
        )

    def lsp_rule(self, backend_id: str) -> LspRule:
        rule = self._lsp.get(backend_id)
        if rule is None:
            raise UnsupportedBackendError(
                AXIS_LSP,
                backend_id,
                declared=backend_id in KNOWN_LSP_CLIENTS,
            )
        return rule

    def linter_rule(self, backend_id: str) -> LinterRule:
        rule = self._linter.get(backend_id)
        if rule is None:
            raise UnsupportedBackendError(
                AXIS_LINTER,
                backend_id,
                declared=backend_id in KNOWN_LINTER_CLIENTS,
            )
        return rule

    def lsp_backends(self) -> Tuple[str, ...]:
        return tuple(sorted(self._lsp))

    def linter_backends(self) -> Tuple[str, ...]:
        return tuple(sorted(self._linter))

    def copy(self) -> "BackendRegistry":
        clone = BackendRegistry()
        clone._lsp = dict(self._lsp)
        clone._linter = dict(self._linter)
        clone._lsp_integrations = {
            linter_id: dict(table)
            for linter_id, table in self._lsp_integrations.items()
        }
        return clone


def register_lsp_backend(
    backend_id: str,
    rule: LspRule,
    *,
    registry: Optional[BackendRegistry] = None,
) -> None:
    """Register or override the LSP rule for ``backend_id``."""

    (registry or BackendRegistry.get_registry()).register_lsp(backend_id, rule)


def unregister_lsp_backend(
    backend_id: str, *, registry: Optional[BackendRegistry] = None
) -> None:
    (registry or BackendRegistry.get_registry()).unregister_lsp(backend_id)


def register_linter_backend(
    backend_id: str,
    rule: LinterRule,
    *,
    registry: Optional[BackendRegistry] = None,
) -> None:
    """Register or override the linter rule for ``backend_id``."""

    (registry or BackendRegistry.get_registry()).register_linter(
        backend_id, rule
    )


def unregister_linter_backend(
    backend_id: str, *, registry: Optional[BackendRegistry] = None
) -> None:
    (registry or BackendRegistry.get_registry()).unregister_linter(backend_id)


def register_lsp_integration(
    linter_client_id: str,
    lsp_client_id: str,
    name: str,
    *,
    registry: Optional[BackendRegistry] = None,
) -> None:
    """Let ``linter_client_id`` reuse sessions from ``lsp_client_id``."""

    (registry or BackendRegistry.get_registry()).register_lsp_integration(
        linter_client_id, lsp_client_id, name
    )


def unregister_lsp_integration(
    linter_client_id: str,
    lsp_client_id: str,
    *,
    registry: Optional[BackendRegistry] = None,
) -> None:
    (registry or BackendRegistry.get_registry()).unregister_lsp_integration(
        linter_client_id, lsp_client_id
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
