from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from langwire.configuration import (
    BackendSettings,
    build_settings,
    load_settings,
)


def test_build_settings_reads_backends_and_languages(tmp_path: Path) -> None:
    config = {
        "langwire": {
            "lsp_client": "lsp-mode",
            "linter_client": "flymake",
            "warn_on_missing_lsp_for_reuse": False,
            "logging": {"level": "debug", "file": "logs/langwire.log"},
            "languages": {
                "python": {"modes": ["python-mode"], "lsp": "pylsp"},
            },
        }
    }
    settings = build_settings(config, config_root=tmp_path, environ={})
    assert settings.backends == BackendSettings(
        lsp_client="lsp-mode",
        linter_client="flymake",
        warn_on_missing_lsp_for_reuse=False,
    )
    assert settings.logging.level == "DEBUG"
    assert settings.logging.file == (tmp_path / "logs/langwire.log").resolve()
    assert settings.languages == {
        "python": {"modes": ["python-mode"], "lsp": "pylsp"}
    }


def test_build_settings_defaults(tmp_path: Path) -> None:
    settings = build_settings({}, config_root=tmp_path, environ={})
    assert settings.backends.lsp_client == "eglot"
    assert settings.backends.linter_client == "flycheck"
    assert settings.backends.warn_on_missing_lsp_for_reuse is True
    assert settings.logging.file is None
    assert settings.languages == {}


def test_environment_overrides_file(tmp_path: Path) -> None:
    config = {"langwire": {"lsp_client": "eglot"}}
    settings = build_settings(
        config,
        config_root=tmp_path,
        environ={
            "LANGWIRE_LSP_CLIENT": "lsp-bridge",
            "LANGWIRE_LINTER_CLIENT": "flymake",
        },
    )
    assert settings.backends.lsp_client == "lsp-bridge"
    assert settings.backends.linter_client == "flymake"


def test_languages_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        build_settings(
            {"langwire": {"languages": ["python"]}},
            config_root=tmp_path,
            environ={},
        )


def test_load_settings_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "langwire.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "langwire": {
                    "languages": {"rust": {"modes": "rust-mode", "lsp": "ra"}}
                }
            }
        )
    )
    settings = load_settings(path, environ={})
    assert list(settings.languages) == ["rust"]


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml", environ={})


def test_default_config_defines_every_language(registry) -> None:
    from langwire.workspace import Workspace

    settings = load_settings(
        Path(__file__).resolve().parents[1] / "configs/default_config.yaml",
        environ={},
    )
    workspace = Workspace.in_memory(registry=registry)
    defined = workspace.define_from_settings(settings)
    assert [d.toggle_id for d in defined] == [
        f"langwire-{name}-mode" for name in settings.languages
    ]
