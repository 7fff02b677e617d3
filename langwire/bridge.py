"""One-shot bridging between synchronous setup and asynchronous LSP startup."""

from __future__ import annotations

import logging

from typing import Callable, Dict, Optional, Tuple

from langwire.host.base import ListenerHandle, LspSubsystem
from langwire.types import Buffer, SetupContext

LOGGER = logging.getLogger(__name__)

Activation = Callable[[Buffer], None]
_PendingKey = Tuple[str, str]


class DeferredActivation:
    """Runs an activation once the LSP subsystem manages a buffer.

    If the buffer is already managed the activation runs immediately.
    Otherwise a one-shot listener is installed on the subsystem-wide
    "became managed" event. The listener removes its own handle before doing
    anything else, so a second event can never reach it, and it never
    touches other languages' listeners.
    """

    def __init__(self, lsp: LspSubsystem) -> None:
        self._lsp = lsp
        self._pending: Dict[_PendingKey, ListenerHandle] = {}

    def run_when_managed(
        self, ctx: SetupContext, activate: Activation
    ) -> bool:
        """Return ``True`` if handled immediately, ``False`` if deferred."""

        buffer = ctx.buffer
        if self._lsp.is_managed(buffer):
            activate(buffer)
            return True

        key = (ctx.language_id, buffer.name)
        if key in self._pending:
            LOGGER.debug(
                "%s: activation already pending for %s",
                ctx.language_id,
                buffer.name,
            )
            return False

        handle: Optional[ListenerHandle] = None
        fired = False

        def _on_managed(event_buffer: Buffer) -> None:
            nonlocal fired
            if event_buffer.name != buffer.name or fired:
                return
            fired = True
            self._release(key, handle)
            if event_buffer.mode not in ctx.modes:
                LOGGER.debug(
                    "%s: %s left modes %s before LSP was ready",
                    ctx.language_id,
                    event_buffer.name,
                    ", ".join(ctx.modes),
                )
                return
            if not ctx.is_enabled():
                LOGGER.debug(
                    "%s: toggle disabled before %s became managed",
                    ctx.language_id,
                    event_buffer.name,
                )
                return
            activate(event_buffer)

        handle = self._lsp.on_became_managed(
            _on_managed, label=f"{ctx.language_id}:{buffer.name}"
        )
        if fired:
            # Notified while subscribing, before ``handle`` was bound.
            self._lsp.remove_listener(handle)
            return True
        self._pending[key] = handle
        return False

    def _release(
        self, key: _PendingKey, handle: Optional[ListenerHandle]
    ) -> None:
        if handle is None:
            return
        if self._pending.get(key) is handle:
            del self._pending[key]
        self._lsp.remove_listener(handle)

    def cancel(self, language_id: str) -> int:
        """Drop every pending listener for ``language_id``."""

        keys = [key for key in self._pending if key[0] == language_id]
        for key in keys:
            self._release(key, self._pending[key])
        return len(keys)

    def pending(self, language_id: Optional[str] = None) -> int:
        if language_id is None:
            return len(self._pending)
        return sum(1 for key in self._pending if key[0] == language_id)


__all__ = ["Activation", "DeferredActivation"]
