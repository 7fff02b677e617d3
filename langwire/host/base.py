"""Contracts for the editor subsystems langwire drives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Sequence

from langwire.types import Buffer

ManagedListener = Callable[[Buffer], None]


@dataclass(eq=False)
class ListenerHandle:
    """Opaque token for a "became managed" listener; compared by identity."""

    listener: ManagedListener = field(repr=False)
    label: str = ""


class ModeHooks(ABC):
    """Host mode/hook subsystem: runs actions when a buffer enters a mode."""

    @abstractmethod
    def register_on_enter(self, hook_id: str, action_id: str) -> None:
        """Run ``action_id`` whenever ``hook_id`` fires."""

    @abstractmethod
    def unregister_on_enter(self, hook_id: str, action_id: str) -> None:
        """Undo one :meth:`register_on_enter`; unknown pairs are ignored."""


class LspSubsystem(ABC):
    """Asynchronous LSP client as seen from setup actions."""

    @abstractmethod
    def register_server_program(
        self, modes: Sequence[str], argv: Sequence[str]
    ) -> None:
        """Record which command serves buffers in ``modes``."""

    @abstractmethod
    def request_attach(self, buffer: Buffer) -> None:
        """Ask the client to manage ``buffer``; returns before it is ready."""

    @abstractmethod
    def is_managed(self, buffer: Buffer) -> bool:
        """Whether an LSP session currently manages ``buffer``."""

    @abstractmethod
    def on_became_managed(
        self, listener: ManagedListener, *, label: str = ""
    ) -> ListenerHandle:
        """Subscribe to the subsystem-wide "buffer became managed" event."""

    @abstractmethod
    def remove_listener(self, handle: ListenerHandle) -> None:
        """Remove exactly ``handle``; removing twice is a no-op."""


class LinterSubsystem(ABC):
    """Synchronous linter client."""

    @abstractmethod
    def set_checker(self, buffer: Buffer, checker_id: str) -> None:
        ...

    @abstractmethod
    def enable(self, buffer: Buffer) -> None:
        ...

    @abstractmethod
    def enable_lsp_integration(self, buffer: Buffer, integration: str) -> None:
        """Turn on linting fed by the buffer's LSP session."""


__all__ = [
    "LinterSubsystem",
    "ListenerHandle",
    "LspSubsystem",
    "ManagedListener",
    "ModeHooks",
]
