"""Code generation for the editor's built-in LSP client."""

from __future__ import annotations

from langwire.constants import AXIS_LSP
from langwire.types import Action, SetupContext, Specification


def _ensure_attached(ctx: SetupContext) -> None:
    ctx.lsp.request_attach(ctx.buffer)


def eglot_action(spec: Specification) -> Action:
    """Attach the buffer to the server declared by ``spec.lsp``.

    The server program itself is recorded when the compiled unit is
    installed; the action only asks the client to attach.
    """

    if spec.lsp is None:
        raise ValueError(f"{spec.id}: eglot rule needs an lsp command")
    argv = spec.lsp.argv
    return Action(
        axis=AXIS_LSP,
        kind="eglot.ensure",
        description=(
            f"attach '{' '.join(argv)}' to {', '.join(spec.modes)} buffers"
        ),
        run=_ensure_attached,
        params={"modes": spec.modes, "argv": argv},
    )


__all__ = ["eglot_action"]
