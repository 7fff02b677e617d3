"""CLI entrypoints for langwire."""

from __future__ import annotations

import argparse
import json
import sys

from dataclasses import replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from langwire.backends.registry import BackendRegistry
from langwire.configuration import (
    DEFAULT_CONFIG_PATH,
    LangwireSettings,
    load_settings,
)
from langwire.constants import KNOWN_LINTER_CLIENTS, KNOWN_LSP_CLIENTS
from langwire.exceptions import LangwireError
from langwire.logging import configure_logging
from langwire.types import Buffer
from langwire.workspace import Workspace


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Compile language tooling specifications into editor toggles."
        )
    )
    parser.add_argument(
        "--config",
        type=str,
        required=False,
        help=(
            "Path to a YAML config. If omitted, uses "
            "configs/default_config.yaml."
        ),
    )
    parser.add_argument(
        "--lsp-client",
        type=str,
        help="Override the LSP client backend (e.g., eglot).",
    )
    parser.add_argument(
        "--linter-client",
        type=str,
        help="Override the linter backend (e.g., flycheck).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write log records to this rotating log file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level for langwire loggers (default from config).",
    )
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="List declared and implemented backends and exit.",
    )
    parser.add_argument(
        "--describe",
        nargs="*",
        metavar="LANGUAGE",
        help="Print compiled units (all languages when none are given).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print compiled units as JSON instead of text.",
    )
    parser.add_argument(
        "--simulate",
        type=str,
        metavar="MODE",
        help=(
            "Enable every toggle, open a buffer in MODE on an in-memory "
            "host, and print the resulting subsystem calls."
        ),
    )
    parser.add_argument(
        "--buffer",
        type=str,
        help="Buffer name used by --simulate (default: scratch.<MODE>).",
    )
    return parser


def _list_backends() -> int:
    registry = BackendRegistry.get_registry()
    lsp_impl = set(registry.lsp_backends())
    linter_impl = set(registry.linter_backends())
    print("lsp clients:")
    for backend_id in sorted(set(KNOWN_LSP_CLIENTS) | lsp_impl):
        status = "implemented" if backend_id in lsp_impl else "declared"
        print(f"  {backend_id} ({status})")
    print("linter clients:")
    for backend_id in sorted(set(KNOWN_LINTER_CLIENTS) | linter_impl):
        status = "implemented" if backend_id in linter_impl else "declared"
        print(f"  {backend_id} ({status})")
        integrations = registry.lsp_integrations(backend_id)
        for lsp_client_id, name in sorted(integrations.items()):
            print(f"    reuses {lsp_client_id} via {name}")
    return 0


def _apply_cli_overrides(
    args: argparse.Namespace, settings: LangwireSettings
) -> LangwireSettings:
    backends = settings.backends
    if args.lsp_client:
        backends = replace(backends, lsp_client=args.lsp_client)
    if args.linter_client:
        backends = replace(backends, linter_client=args.linter_client)
    logging_settings = settings.logging
    if args.log_file:
        logging_settings = replace(
            logging_settings, file=Path(args.log_file).expanduser()
        )
    if args.log_level:
        logging_settings = replace(
            logging_settings, level=args.log_level.upper()
        )
    return replace(settings, backends=backends, logging=logging_settings)


def _simulate(workspace: Workspace, mode: str, buffer_name: str) -> int:
    host = workspace.host
    if host is None:  # pragma: no cover - in_memory always sets a host
        raise RuntimeError("simulation requires an in-memory workspace")
    for unit in workspace.units():
        workspace.enable(unit.toggle_id)
    buffer = Buffer(name=buffer_name, mode=mode)
    start = len(host.log)
    host.hooks.enter_mode(buffer)
    if buffer.name in host.lsp.attach_requests:
        host.lsp.mark_managed(buffer)
    for entry in host.log[start:]:
        print(" ".join(entry))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        load_dotenv()
    except Exception:
        pass

    if args.list_backends:
        return _list_backends()

    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    try:
        settings = load_settings(config_path)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    settings = _apply_cli_overrides(args, settings)
    configure_logging(settings.logging.level, settings.logging.file)

    workspace = Workspace.in_memory(settings=settings.backends)
    try:
        workspace.define_from_settings(settings)
        if args.simulate:
            buffer_name = args.buffer or f"scratch.{args.simulate}"
            return _simulate(workspace, args.simulate, buffer_name)
        languages = args.describe or [
            unit.language_id for unit in workspace.units()
        ]
        if args.json:
            payload = [workspace.unit(lang).to_dict() for lang in languages]
            print(json.dumps(payload, indent=2))
            return 0
        for lang in languages:
            print(workspace.describe(lang), end="")
    except LangwireError as exc:
        print(f"langwire: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
