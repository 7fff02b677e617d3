"""Code generation for the flycheck linter client."""

from __future__ import annotations

from langwire.constants import AXIS_LINTER, LINTER_CLIENT_FLYCHECK
from langwire.exceptions import UnsupportedLspIntegrationError
from langwire.types import (
    Action,
    LinterKind,
    LspPresence,
    SetupContext,
    Specification,
)

FLYCHECK_EGLOT = "flycheck-eglot"


def resolve_lsp_integration(presence: LspPresence) -> str:
    """Name of the flycheck plugin that reuses ``presence.client_id``."""

    integration = presence.integrations.get(presence.client_id)
    if integration is None:
        raise UnsupportedLspIntegrationError(
            LINTER_CLIENT_FLYCHECK, presence.client_id
        )
    return integration


def _enable(ctx: SetupContext) -> None:
    ctx.linter.enable(ctx.buffer)


def _named_checker(checker_id: str):
    def _run(ctx: SetupContext) -> None:
        ctx.linter.set_checker(ctx.buffer, checker_id)
        ctx.linter.enable(ctx.buffer)

    return _run


def _reuse_lsp(integration: str):
    def _run(ctx: SetupContext) -> None:
        ctx.bridge.run_when_managed(
            ctx,
            lambda buffer: ctx.linter.enable_lsp_integration(
                buffer, integration
            ),
        )

    return _run


def flycheck_action(spec: Specification, presence: LspPresence) -> Action:
    """Build the linter action for ``spec.linter``."""

    linter = spec.linter
    if linter is None or linter.kind is LinterKind.NONE:
        raise ValueError(f"{spec.id}: no linter requested")

    if linter.kind is LinterKind.DEFAULT:
        return Action(
            axis=AXIS_LINTER,
            kind="flycheck.enable",
            description="enable flycheck with its default checker",
            run=_enable,
        )

    if linter.kind is LinterKind.NAMED:
        checker_id = str(linter.checker_id)
        return Action(
            axis=AXIS_LINTER,
            kind="flycheck.select-checker",
            description=f"set checker {checker_id}; enable flycheck",
            run=_named_checker(checker_id),
            params={"checker": checker_id},
        )

    integration = resolve_lsp_integration(presence)
    return Action(
        axis=AXIS_LINTER,
        kind="flycheck.lsp-integration",
        description=(
            f"enable {integration} once {presence.client_id} "
            "manages the buffer"
        ),
        run=_reuse_lsp(integration),
        params={
            "lsp_client": presence.client_id,
            "integration": integration,
            "lsp_requested": presence.requested,
        },
    )


__all__ = [
    "FLYCHECK_EGLOT",
    "flycheck_action",
    "resolve_lsp_integration",
]
