"""Compile specifications into toggle/setup units."""

from __future__ import annotations

import logging
import warnings

from typing import Any, List, Mapping, Optional, Union

from langwire.backends.registry import BackendRegistry
from langwire.constants import (
    HOOK_ID_TEMPLATE,
    SETUP_ACTION_ID_TEMPLATE,
    TOGGLE_ID_TEMPLATE,
)
from langwire.exceptions import ConfigurationWarning
from langwire.specification import validate
from langwire.types import (
    Action,
    CompiledUnit,
    LinterKind,
    LspPresence,
    ServerProgram,
    Specification,
)

LOGGER = logging.getLogger(__name__)


def toggle_id_for(language_id: str) -> str:
    return TOGGLE_ID_TEMPLATE.format(language_id=language_id)


def setup_action_id_for(language_id: str) -> str:
    return SETUP_ACTION_ID_TEMPLATE.format(language_id=language_id)


def hook_id_for(mode: str) -> str:
    return HOOK_ID_TEMPLATE.format(mode=mode)


def compile_specification(
    spec: Union[Specification, Mapping[str, Any]],
    lsp_client_id: str,
    linter_client_id: str,
    *,
    warn_on_missing_lsp_for_reuse: bool = True,
    registry: Optional[BackendRegistry] = None,
) -> CompiledUnit:
    """Validate ``spec`` and generate its actions with the given backends.

    Every rule lookup happens before the unit is assembled, so an
    unsupported backend raises without leaving anything behind. The
    compiler performs no collaborator calls.
    """

    spec = validate(spec)
    registry = registry or BackendRegistry.get_registry()

    actions: List[Action] = []
    server_programs: List[ServerProgram] = []
    if spec.lsp is not None:
        rule = registry.lsp_rule(lsp_client_id)
        actions.append(rule(spec))
        server_programs.append(
            ServerProgram(modes=spec.modes, argv=spec.lsp.argv)
        )

    if spec.linter is not None and spec.linter.active:
        rule = registry.linter_rule(linter_client_id)
        presence = LspPresence(
            client_id=lsp_client_id,
            requested=spec.lsp is not None,
            integrations=registry.lsp_integrations(linter_client_id),
        )
        actions.append(rule(spec, presence))
        if (
            warn_on_missing_lsp_for_reuse
            and spec.linter.kind is LinterKind.REUSE_LSP
            and spec.lsp is None
        ):
            message = (
                f"{spec.id}: linter reuses the LSP session but no lsp "
                "server was specified"
            )
            warnings.warn(message, ConfigurationWarning, stacklevel=2)
            LOGGER.warning(message)

    unit = CompiledUnit(
        language_id=spec.id,
        toggle_id=toggle_id_for(spec.id),
        setup_action_id=setup_action_id_for(spec.id),
        actions=tuple(actions),
        hook_targets=tuple(hook_id_for(mode) for mode in spec.modes),
        modes=spec.modes,
        server_programs=tuple(server_programs),
        lsp_client_id=lsp_client_id if spec.lsp is not None else None,
        linter_client_id=linter_client_id if spec.wants_linter else None,
    )
    LOGGER.debug(
        "compiled %s: %s",
        unit.language_id,
        ", ".join(action.kind for action in unit.actions),
    )
    return unit


__all__ = [
    "compile_specification",
    "hook_id_for",
    "setup_action_id_for",
    "toggle_id_for",
]
