"""Editor subsystem contracts and in-memory implementations."""

from .base import (
    LinterSubsystem,
    ListenerHandle,
    LspSubsystem,
    ManagedListener,
    ModeHooks,
)
from .memory import (
    InMemoryHost,
    InMemoryLinterSubsystem,
    InMemoryLspSubsystem,
    InMemoryModeHooks,
)

__all__ = [
    "InMemoryHost",
    "InMemoryLinterSubsystem",
    "InMemoryLspSubsystem",
    "InMemoryModeHooks",
    "LinterSubsystem",
    "ListenerHandle",
    "LspSubsystem",
    "ManagedListener",
    "ModeHooks",
]
