"""Normalization of raw user input into validated specifications."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

from langwire.exceptions import (
    MissingModesError,
    NoFeatureRequestedError,
    SpecValidationError,
)
from langwire.types import LinterSpec, LspSpec, Specification

_NONE_WORDS = {"none", "off", "nil"}
_DEFAULT_WORDS = {"default", "on", "t"}
_REUSE_WORDS = {"lsp", "reuse-lsp", "reuse_lsp"}


def _coerce_modes(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items: Sequence[Any] = [value] if value.strip() else []
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise SpecValidationError(
            f"modes must be a string or a sequence, got {type(value).__name__}"
        )
    modes: list[str] = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise SpecValidationError(f"invalid mode identifier {item!r}")
        mode = item.strip()
        if mode not in modes:
            modes.append(mode)
    return tuple(modes)


def _coerce_lsp(value: Any) -> Optional[LspSpec]:
    if value is None or value is False:
        return None
    if isinstance(value, LspSpec):
        return value
    if isinstance(value, str):
        parts: Sequence[Any] = [value]
    elif isinstance(value, Mapping):
        args = value.get("args") or ()
        if isinstance(args, str):
            args = [args]
        parts = [value.get("command"), *args]
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise SpecValidationError(
            f"lsp must be a command string, a sequence or a mapping, "
            f"got {type(value).__name__}"
        )
    if not parts or not isinstance(parts[0], str) or not parts[0].strip():
        raise SpecValidationError("lsp command must be a non-empty string")
    for arg in parts[1:]:
        if not isinstance(arg, str):
            raise SpecValidationError(f"invalid lsp argument {arg!r}")
    return LspSpec(command=parts[0].strip(), args=tuple(parts[1:]))


def _coerce_linter(value: Any) -> Optional[LinterSpec]:
    if isinstance(value, LinterSpec):
        return value
    if value is None:
        return None
    if value is False:
        return LinterSpec.none()
    if value is True:
        return LinterSpec.default()
    if isinstance(value, Mapping):
        checker = value.get("checker")
        if not isinstance(checker, str) or not checker.strip():
            raise SpecValidationError("linter.checker must be a string")
        return LinterSpec.named(checker.strip())
    if isinstance(value, str):
        word = value.strip()
        lowered = word.lower()
        if not word:
            raise SpecValidationError("linter must not be an empty string")
        if lowered in _NONE_WORDS:
            return LinterSpec.none()
        if lowered in _DEFAULT_WORDS:
            return LinterSpec.default()
        if lowered in _REUSE_WORDS:
            return LinterSpec.reuse_lsp()
        return LinterSpec.named(word)
    raise SpecValidationError(
        f"unsupported linter value {value!r}"
    )


def validate(
    raw: Mapping[str, Any] | Specification,
    *,
    language_id: Optional[str] = None,
) -> Specification:
    """Return a normalized :class:`Specification` or raise.

    ``raw`` may carry extra keys; they are ignored. ``language_id`` takes
    precedence over ``raw["id"]``.
    """

    if isinstance(raw, Specification):
        raw = {
            "id": raw.id,
            "modes": raw.modes,
            "lsp": raw.lsp,
            "linter": raw.linter,
        }
    lang = language_id if language_id is not None else raw.get("id")
    if not isinstance(lang, str) or not lang.strip():
        raise SpecValidationError("language id must be a non-empty string")

    modes = _coerce_modes(raw.get("modes", raw.get("mode")))
    if not modes:
        raise MissingModesError(f"{lang}: at least one mode is required")

    lsp = _coerce_lsp(raw.get("lsp"))
    linter = _coerce_linter(raw.get("linter"))
    if lsp is None and (linter is None or not linter.active):
        raise NoFeatureRequestedError(
            f"{lang}: neither an lsp server nor a linter was requested"
        )
    return Specification(id=lang.strip(), modes=modes, lsp=lsp, linter=linter)


__all__ = ["validate"]
