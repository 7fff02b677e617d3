"""Typed helpers for parsing langwire configuration dictionaries."""

from __future__ import annotations

import os

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from langwire.constants import DEFAULT_LINTER_CLIENT, DEFAULT_LSP_CLIENT

DEFAULT_CONFIG_PATH = Path("configs/default_config.yaml")
ENV_LSP_CLIENT = "LANGWIRE_LSP_CLIENT"
ENV_LINTER_CLIENT = "LANGWIRE_LINTER_CLIENT"


def _ensure_path(
    value: Optional[str | Path], *, config_root: Path
) -> Optional[Path]:
    if value is None:
        return None
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class BackendSettings:
    """Process-wide backend selection, read when a language is defined."""

    lsp_client: str = DEFAULT_LSP_CLIENT
    linter_client: str = DEFAULT_LINTER_CLIENT
    warn_on_missing_lsp_for_reuse: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    file: Optional[Path] = None


@dataclass(frozen=True)
class LangwireSettings:
    backends: BackendSettings = field(default_factory=BackendSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    languages: Dict[str, Dict[str, Any]] = field(default_factory=dict)


def build_settings(
    config: Mapping[str, Any],
    *,
    config_root: Path,
    environ: Optional[Mapping[str, str]] = None,
) -> LangwireSettings:
    """Parse the ``langwire:`` section of a config dictionary.

    ``LANGWIRE_LSP_CLIENT`` and ``LANGWIRE_LINTER_CLIENT`` in ``environ``
    (``os.environ`` by default) override the file.
    """

    env = os.environ if environ is None else environ
    root_cfg = config.get("langwire") or {}

    lsp_client = env.get(ENV_LSP_CLIENT) or root_cfg.get("lsp_client")
    linter_client = env.get(ENV_LINTER_CLIENT) or root_cfg.get(
        "linter_client"
    )
    backends = BackendSettings(
        lsp_client=str(lsp_client or DEFAULT_LSP_CLIENT),
        linter_client=str(linter_client or DEFAULT_LINTER_CLIENT),
        warn_on_missing_lsp_for_reuse=_coerce_bool(
            root_cfg.get("warn_on_missing_lsp_for_reuse"), True
        ),
    )

    logging_cfg = root_cfg.get("logging") or {}
    logging_settings = LoggingSettings(
        level=str(logging_cfg.get("level", "INFO")).upper(),
        file=_ensure_path(logging_cfg.get("file"), config_root=config_root),
    )

    languages_cfg = root_cfg.get("languages") or {}
    if not isinstance(languages_cfg, Mapping):
        raise ValueError("langwire.languages must be a mapping")
    languages = {
        str(name): deepcopy(dict(raw or {}))
        for name, raw in languages_cfg.items()
    }

    return LangwireSettings(
        backends=backends,
        logging=logging_settings,
        languages=languages,
    )


def load_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' not found.")
    return yaml.safe_load(config_path.read_text()) or {}


def load_settings(
    config_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> LangwireSettings:
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    return build_settings(
        load_config(path),
        config_root=path.resolve().parent,
        environ=environ,
    )


__all__ = [
    "BackendSettings",
    "DEFAULT_CONFIG_PATH",
    "LangwireSettings",
    "LoggingSettings",
    "build_settings",
    "load_config",
    "load_settings",
]
