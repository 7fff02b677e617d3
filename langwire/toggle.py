"""Global per-language toggles bound to mode-activation hooks."""

from __future__ import annotations

import logging

from typing import Dict, List, Set, Tuple

from langwire.host.base import ModeHooks
from langwire.types import CompiledUnit

LOGGER = logging.getLogger(__name__)

_Registration = Tuple[str, str]


class ToggleBinder:
    """Adds and removes a unit's setup action on its mode hooks.

    The binder remembers exactly which (hook, action) pairs it installed for
    each language, so disabling never touches registrations made by anyone
    else and enabling twice never registers a pair twice.
    """

    def __init__(self, hooks: ModeHooks) -> None:
        self._hooks = hooks
        self._installed: Dict[str, List[_Registration]] = {}
        self._enabled: Dict[str, bool] = {}

    def bind(self, unit: CompiledUnit, enabled: bool) -> None:
        if enabled:
            self._enable(unit)
        else:
            self._disable(unit.language_id)

    def _enable(self, unit: CompiledUnit) -> None:
        installed = self._installed.setdefault(unit.language_id, [])
        seen: Set[_Registration] = set(installed)
        for hook_id in unit.hook_targets:
            pair = (hook_id, unit.setup_action_id)
            if pair in seen:
                continue
            self._hooks.register_on_enter(hook_id, unit.setup_action_id)
            installed.append(pair)
            seen.add(pair)
        self._enabled[unit.language_id] = True
        LOGGER.info(
            "enabled %s on %s",
            unit.toggle_id,
            ", ".join(unit.hook_targets),
        )

    def _disable(self, language_id: str) -> None:
        for hook_id, action_id in reversed(
            self._installed.pop(language_id, [])
        ):
            self._hooks.unregister_on_enter(hook_id, action_id)
        if self._enabled.get(language_id):
            LOGGER.info("disabled toggle for %s", language_id)
        self._enabled[language_id] = False

    def is_enabled(self, language_id: str) -> bool:
        return self._enabled.get(language_id, False)

    def installed(self, language_id: str) -> Tuple[_Registration, ...]:
        return tuple(self._installed.get(language_id, ()))

    def forget(self, language_id: str) -> None:
        """Unbind ``language_id`` and drop its state entirely."""

        self._disable(language_id)
        self._enabled.pop(language_id, None)


__all__ = ["ToggleBinder"]
