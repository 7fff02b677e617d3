"""Definition and runtime surface that ties compiler, toggles and bridge."""

from __future__ import annotations

import logging

from typing import Any, Dict, Optional, Tuple

from langwire.backends.registry import BackendRegistry
from langwire.bridge import DeferredActivation
from langwire.compiler import compile_specification
from langwire.configuration import BackendSettings, LangwireSettings
from langwire.exceptions import UnknownToggleError
from langwire.host.base import LinterSubsystem, LspSubsystem, ModeHooks
from langwire.host.memory import InMemoryHost
from langwire.rendering import UnitRenderer
from langwire.specification import validate
from langwire.toggle import ToggleBinder
from langwire.types import (
    Buffer,
    CompiledUnit,
    DefinedLanguage,
    SetupContext,
    Specification,
)

LOGGER = logging.getLogger(__name__)


class Workspace:
    """Holds every defined language and wires it into the editor subsystems.

    Backends are resolved from ``settings`` when a language is defined; later
    changes to ``settings`` only take effect through :meth:`recompile_all`.
    """

    def __init__(
        self,
        hooks: ModeHooks,
        lsp: LspSubsystem,
        linter: LinterSubsystem,
        *,
        settings: Optional[BackendSettings] = None,
        registry: Optional[BackendRegistry] = None,
    ) -> None:
        self.hooks = hooks
        self.lsp = lsp
        self.linter = linter
        self.settings = settings or BackendSettings()
        self._registry = registry
        self.binder = ToggleBinder(hooks)
        self.bridge = DeferredActivation(lsp)
        self._specs: Dict[str, Specification] = {}
        self._units: Dict[str, CompiledUnit] = {}
        self._by_toggle: Dict[str, str] = {}
        self._by_setup: Dict[str, str] = {}
        self.host: Optional[InMemoryHost] = None

    @classmethod
    def in_memory(
        cls,
        *,
        settings: Optional[BackendSettings] = None,
        registry: Optional[BackendRegistry] = None,
        auto_manage: bool = False,
    ) -> "Workspace":
        """Build a workspace over :class:`InMemoryHost` subsystems."""

        host = InMemoryHost(auto_manage=auto_manage)
        workspace = cls(
            host.hooks,
            host.lsp,
            host.linter,
            settings=settings,
            registry=registry,
        )
        host.hooks.resolver = workspace.invoke_setup
        workspace.host = host
        return workspace

    # -- definition surface -------------------------------------------------

    def define(
        self,
        language_id: str,
        *,
        modes: Any = None,
        lsp: Any = None,
        linter: Any = None,
        enable: bool = False,
        **extra: Any,
    ) -> DefinedLanguage:
        """Compile and install tooling for ``language_id``.

        Redefining a language replaces its previous unit: the old hook
        registrations and pending listeners are removed first. A toggle
        that was enabled stays enabled.
        """

        raw: Dict[str, Any] = dict(extra)
        if modes is not None:
            raw["modes"] = modes
        raw["lsp"] = lsp
        raw["linter"] = linter
        spec = validate(raw, language_id=language_id)
        unit = self._compile(spec)
        self._install(spec, unit, enable=enable)
        return DefinedLanguage(
            toggle_id=unit.toggle_id, setup_action_id=unit.setup_action_id
        )

    def define_from_settings(
        self, settings: LangwireSettings
    ) -> Tuple[DefinedLanguage, ...]:
        """Define every configured language, or none of them.

        All languages are validated and compiled against
        ``settings.backends`` first; a failure leaves the workspace and its
        settings unchanged.
        """

        backends = settings.backends
        compiled = []
        for language_id, raw in settings.languages.items():
            options = dict(raw)
            enable = bool(options.pop("enable", False))
            spec = validate(options, language_id=language_id)
            compiled.append((spec, self._compile(spec, backends), enable))
        self.settings = backends
        for spec, unit, enable in compiled:
            self._install(spec, unit, enable=enable)
        return tuple(
            DefinedLanguage(unit.toggle_id, unit.setup_action_id)
            for _, unit, _ in compiled
        )

    def recompile_all(
        self, settings: Optional[BackendSettings] = None
    ) -> Tuple[CompiledUnit, ...]:
        """Re-resolve every defined language against ``settings``.

        All languages are compiled before any is reinstalled, so a failure
        leaves the existing units and the current settings in place.
        """

        backends = settings if settings is not None else self.settings
        compiled = [
            (spec, self._compile(spec, backends))
            for spec in self._specs.values()
        ]
        self.settings = backends
        for spec, unit in compiled:
            self._install(spec, unit, enable=False)
        return tuple(unit for _, unit in compiled)

    def _compile(
        self,
        spec: Specification,
        backends: Optional[BackendSettings] = None,
    ) -> CompiledUnit:
        backends = backends or self.settings
        return compile_specification(
            spec,
            backends.lsp_client,
            backends.linter_client,
            warn_on_missing_lsp_for_reuse=(
                backends.warn_on_missing_lsp_for_reuse
            ),
            registry=self._registry,
        )

    def _install(
        self, spec: Specification, unit: CompiledUnit, *, enable: bool
    ) -> None:
        was_enabled = self.binder.is_enabled(spec.id)
        previous = self._units.get(spec.id)
        if previous is not None:
            self._uninstall(previous)
            LOGGER.info("redefining %s", spec.id)
        for program in unit.server_programs:
            self.lsp.register_server_program(program.modes, program.argv)
        self._specs[spec.id] = spec
        self._units[spec.id] = unit
        self._by_toggle[unit.toggle_id] = spec.id
        self._by_setup[unit.setup_action_id] = spec.id
        if enable or was_enabled:
            self.binder.bind(unit, True)

    def _uninstall(self, unit: CompiledUnit) -> None:
        self.binder.forget(unit.language_id)
        cancelled = self.bridge.cancel(unit.language_id)
        if cancelled:
            LOGGER.debug(
                "%s: dropped %d pending activation(s)",
                unit.language_id,
                cancelled,
            )
        self._by_toggle.pop(unit.toggle_id, None)
        self._by_setup.pop(unit.setup_action_id, None)

    # -- runtime surface ----------------------------------------------------

    def enable(self, toggle_id: str) -> None:
        self.binder.bind(self._unit_for_toggle(toggle_id), True)

    def disable(self, toggle_id: str) -> None:
        self.binder.bind(self._unit_for_toggle(toggle_id), False)

    def toggle(self, toggle_id: str) -> bool:
        """Flip ``toggle_id`` and return its new state."""

        unit = self._unit_for_toggle(toggle_id)
        state = not self.binder.is_enabled(unit.language_id)
        self.binder.bind(unit, state)
        return state

    def is_enabled(self, toggle_id: str) -> bool:
        unit = self._unit_for_toggle(toggle_id)
        return self.binder.is_enabled(unit.language_id)

    def invoke_setup(self, setup_action_id: str, buffer: Buffer) -> None:
        """Run a unit's actions, in order, for ``buffer``."""

        language_id = self._by_setup.get(setup_action_id)
        if language_id is None:
            raise UnknownToggleError(
                f"no setup action named '{setup_action_id}'"
            )
        unit = self._units[language_id]
        ctx = SetupContext(
            language_id=language_id,
            modes=unit.modes,
            buffer=buffer,
            lsp=self.lsp,
            linter=self.linter,
            bridge=self.bridge,
            is_enabled=lambda: self.binder.is_enabled(language_id),
        )
        LOGGER.debug("%s: setting up %s", language_id, buffer.name)
        for action in unit.actions:
            action(ctx)

    # -- introspection ------------------------------------------------------

    def unit(self, language_id: str) -> CompiledUnit:
        try:
            return self._units[language_id]
        except KeyError:
            raise UnknownToggleError(
                f"language '{language_id}' is not defined"
            ) from None

    def units(self) -> Tuple[CompiledUnit, ...]:
        return tuple(self._units.values())

    def specification(self, language_id: str) -> Specification:
        self.unit(language_id)
        return self._specs[language_id]

    def describe(
        self, language_id: str, renderer: Optional[UnitRenderer] = None
    ) -> str:
        renderer = renderer or UnitRenderer()
        return renderer.render(
            self.unit(language_id),
            enabled=self.binder.is_enabled(language_id),
        )

    def _unit_for_toggle(self, toggle_id: str) -> CompiledUnit:
        language_id = self._by_toggle.get(toggle_id)
        if language_id is None:
            raise UnknownToggleError(f"no toggle named '{toggle_id}'")
        return self._units[language_id]

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._units


__all__ = ["Workspace"]
