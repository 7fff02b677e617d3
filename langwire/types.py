"""Core dataclasses used throughout langwire."""

from __future__ import annotations

import enum

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Tuple,
)

if TYPE_CHECKING:  # pragma: no cover
    from langwire.bridge import DeferredActivation
    from langwire.host.base import LinterSubsystem, LspSubsystem


@dataclass(frozen=True)
class LspSpec:
    """How to launch or attach a language server."""

    command: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.command, *self.args)


class LinterKind(enum.Enum):
    NONE = "none"
    DEFAULT = "default"
    REUSE_LSP = "reuse-lsp"
    NAMED = "named"


@dataclass(frozen=True)
class LinterSpec:
    """Tagged linter request; ``checker_id`` is set only for ``NAMED``."""

    kind: LinterKind
    checker_id: Optional[str] = None

    @classmethod
    def none(cls) -> "LinterSpec":
        return cls(LinterKind.NONE)

    @classmethod
    def default(cls) -> "LinterSpec":
        return cls(LinterKind.DEFAULT)

    @classmethod
    def reuse_lsp(cls) -> "LinterSpec":
        return cls(LinterKind.REUSE_LSP)

    @classmethod
    def named(cls, checker_id: str) -> "LinterSpec":
        return cls(LinterKind.NAMED, checker_id)

    @property
    def active(self) -> bool:
        return self.kind is not LinterKind.NONE


@dataclass(frozen=True)
class Specification:
    """Validated description of one language's tooling needs."""

    id: str
    modes: Tuple[str, ...]
    lsp: Optional[LspSpec] = None
    linter: Optional[LinterSpec] = None

    @property
    def wants_linter(self) -> bool:
        return self.linter is not None and self.linter.active


@dataclass(frozen=True)
class Buffer:
    """Identity of an editor buffer as seen by setup actions."""

    name: str
    mode: str


@dataclass(frozen=True)
class ServerProgram:
    """Mode-to-command mapping handed to the LSP subsystem."""

    modes: Tuple[str, ...]
    argv: Tuple[str, ...]


@dataclass(frozen=True)
class LspPresence:
    """What a linter rule may know about the LSP axis of its unit."""

    client_id: str
    requested: bool
    # LSP client id -> integration name, from the linter backend's table.
    integrations: Mapping[str, str] = field(
        default_factory=dict, hash=False
    )


@dataclass
class SetupContext:
    """Everything an action needs when the setup runs for one buffer."""

    language_id: str
    modes: Tuple[str, ...]
    buffer: Buffer
    lsp: "LspSubsystem"
    linter: "LinterSubsystem"
    bridge: "DeferredActivation"
    is_enabled: Callable[[], bool] = lambda: True


@dataclass(frozen=True)
class Action:
    """Backend-specific operation executed by a setup action."""

    axis: str
    kind: str
    description: str
    run: Callable[[SetupContext], None] = field(compare=False, repr=False)
    params: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        frozen = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in self.params.items()
        }
        object.__setattr__(self, "params", MappingProxyType(frozen))

    def __call__(self, ctx: SetupContext) -> None:
        self.run(ctx)


@dataclass(frozen=True)
class CompiledUnit:
    """Generated toggle/setup artifact for a single specification."""

    language_id: str
    toggle_id: str
    setup_action_id: str
    actions: Tuple[Action, ...]
    hook_targets: Tuple[str, ...]
    modes: Tuple[str, ...]
    server_programs: Tuple[ServerProgram, ...] = ()
    lsp_client_id: Optional[str] = None
    linter_client_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language_id": self.language_id,
            "toggle_id": self.toggle_id,
            "setup_action_id": self.setup_action_id,
            "modes": list(self.modes),
            "hook_targets": list(self.hook_targets),
            "actions": [
                {
                    "axis": action.axis,
                    "kind": action.kind,
                    "description": action.description,
                    "params": {
                        key: list(value) if isinstance(value, tuple) else value
                        for key, value in action.params.items()
                    },
                }
                for action in self.actions
            ],
            "server_programs": [
                {"modes": list(p.modes), "argv": list(p.argv)}
                for p in self.server_programs
            ],
            "lsp_client_id": self.lsp_client_id,
            "linter_client_id": self.linter_client_id,
        }


@dataclass(frozen=True)
class DefinedLanguage:
    """Identifiers returned by a definition, for introspection."""

    toggle_id: str
    setup_action_id: str


__all__ = [
    "Action",
    "Buffer",
    "CompiledUnit",
    "DefinedLanguage",
    "LinterKind",
    "LinterSpec",
    "LspPresence",
    "LspSpec",
    "ServerProgram",
    "SetupContext",
    "Specification",
]
