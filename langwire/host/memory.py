"""In-memory editor subsystems used by the CLI simulator and tests."""

from __future__ import annotations

import logging

from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from langwire.constants import HOOK_ID_TEMPLATE
from langwire.host.base import (
    LinterSubsystem,
    ListenerHandle,
    LspSubsystem,
    ManagedListener,
    ModeHooks,
)
from langwire.types import Buffer

LOGGER = logging.getLogger(__name__)

CallLog = List[Tuple[str, ...]]
ActionResolver = Callable[[str, Buffer], None]


class InMemoryModeHooks(ModeHooks):
    """Ordered hook lists keyed by hook id, like an editor's mode hooks."""

    def __init__(
        self,
        resolver: Optional[ActionResolver] = None,
        *,
        log: Optional[CallLog] = None,
    ) -> None:
        self.resolver = resolver
        self.log: CallLog = log if log is not None else []
        self._hooks: Dict[str, List[str]] = {}

    def register_on_enter(self, hook_id: str, action_id: str) -> None:
        self.log.append(("hooks.register", hook_id, action_id))
        self._hooks.setdefault(hook_id, []).append(action_id)

    def unregister_on_enter(self, hook_id: str, action_id: str) -> None:
        self.log.append(("hooks.unregister", hook_id, action_id))
        actions = self._hooks.get(hook_id)
        if not actions or action_id not in actions:
            return
        actions.remove(action_id)
        if not actions:
            del self._hooks[hook_id]

    def actions_for(self, hook_id: str) -> Tuple[str, ...]:
        return tuple(self._hooks.get(hook_id, ()))

    def snapshot(self) -> Dict[str, Tuple[str, ...]]:
        """Copy of every hook's action list, for before/after comparisons."""

        return {hook: tuple(actions) for hook, actions in self._hooks.items()}

    def enter_mode(self, buffer: Buffer) -> None:
        """Fire the mode hook for ``buffer`` as the host would."""

        hook_id = HOOK_ID_TEMPLATE.format(mode=buffer.mode)
        self.log.append(("hooks.fire", hook_id, buffer.name))
        if self.resolver is None:
            raise RuntimeError("InMemoryModeHooks has no action resolver")
        for action_id in self.actions_for(hook_id):
            self.resolver(action_id, buffer)


class InMemoryLspSubsystem(LspSubsystem):
    """LSP client whose sessions become ready only when told to."""

    def __init__(
        self, *, auto_manage: bool = False, log: Optional[CallLog] = None
    ) -> None:
        self.auto_manage = auto_manage
        self.log: CallLog = log if log is not None else []
        self.server_programs: Dict[str, Tuple[str, ...]] = {}
        self.attach_requests: List[str] = []
        self._managed: Set[str] = set()
        self._listeners: List[ListenerHandle] = []

    def register_server_program(
        self, modes: Sequence[str], argv: Sequence[str]
    ) -> None:
        self.log.append(("lsp.register", ",".join(modes), " ".join(argv)))
        for mode in modes:
            self.server_programs[mode] = tuple(argv)

    def request_attach(self, buffer: Buffer) -> None:
        self.log.append(("lsp.attach", buffer.name))
        self.attach_requests.append(buffer.name)
        if self.auto_manage:
            self.mark_managed(buffer)

    def is_managed(self, buffer: Buffer) -> bool:
        return buffer.name in self._managed

    def on_became_managed(
        self, listener: ManagedListener, *, label: str = ""
    ) -> ListenerHandle:
        handle = ListenerHandle(listener=listener, label=label)
        self._listeners.append(handle)
        self.log.append(("lsp.listen", label))
        return handle

    def remove_listener(self, handle: ListenerHandle) -> None:
        for index, candidate in enumerate(self._listeners):
            if candidate is handle:
                del self._listeners[index]
                self.log.append(("lsp.unlisten", handle.label))
                return

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def mark_managed(self, buffer: Buffer) -> None:
        """Simulate the session for ``buffer`` finishing its startup."""

        self._managed.add(buffer.name)
        LOGGER.debug("buffer %s became LSP-managed", buffer.name)
        self.log.append(("lsp.managed", buffer.name))
        for handle in list(self._listeners):
            # A listener earlier in this pass may have removed a later one.
            if any(h is handle for h in self._listeners):
                handle.listener(buffer)

    def shutdown(self, buffer: Buffer) -> None:
        self._managed.discard(buffer.name)


class InMemoryLinterSubsystem(LinterSubsystem):
    """Records the linter state requested for each buffer."""

    def __init__(self, *, log: Optional[CallLog] = None) -> None:
        self.log: CallLog = log if log is not None else []
        self.checkers: Dict[str, str] = {}
        self.enabled: Set[str] = set()
        self.integrations: Dict[str, List[str]] = {}

    def set_checker(self, buffer: Buffer, checker_id: str) -> None:
        self.log.append(("linter.checker", buffer.name, checker_id))
        self.checkers[buffer.name] = checker_id

    def enable(self, buffer: Buffer) -> None:
        self.log.append(("linter.enable", buffer.name))
        self.enabled.add(buffer.name)

    def enable_lsp_integration(self, buffer: Buffer, integration: str) -> None:
        self.log.append(("linter.lsp", buffer.name, integration))
        self.integrations.setdefault(buffer.name, []).append(integration)
        self.enabled.add(buffer.name)


class InMemoryHost:
    """Bundle of in-memory subsystems sharing one call log."""

    def __init__(
        self,
        resolver: Optional[ActionResolver] = None,
        *,
        auto_manage: bool = False,
    ) -> None:
        self.log: CallLog = []
        self.hooks = InMemoryModeHooks(resolver, log=self.log)
        self.lsp = InMemoryLspSubsystem(auto_manage=auto_manage, log=self.log)
        self.linter = InMemoryLinterSubsystem(log=self.log)


__all__ = [
    "InMemoryHost",
    "InMemoryLinterSubsystem",
    "InMemoryLspSubsystem",
    "InMemoryModeHooks",
]
