import warnings

import pytest

from langwire.compiler import compile_specification
from langwire.constants import AXIS_LINTER, AXIS_LSP
from langwire.exceptions import (
    ConfigurationWarning,
    MissingModesError,
    UnsupportedBackendError,
    UnsupportedLspIntegrationError,
)
from langwire.types import Action


def _compile(raw, registry, *, lsp="eglot", linter="flycheck", **kwargs):
    return compile_specification(
        raw, lsp, linter, registry=registry, **kwargs
    )


def test_lsp_only_compiles_single_lsp_action(registry):
    unit = _compile(
        {"id": "x", "modes": {"x-mode"}, "lsp": "serverA", "linter": None},
        registry,
    )
    assert [action.axis for action in unit.actions] == [AXIS_LSP]
    action = unit.actions[0]
    assert action.kind == "eglot.ensure"
    assert action.params["modes"] == ("x-mode",)
    assert action.params["argv"] == ("serverA",)
    assert len(unit.server_programs) == 1
    assert unit.server_programs[0].modes == ("x-mode",)
    assert unit.server_programs[0].argv == ("serverA",)
    assert unit.linter_client_id is None


def test_named_checker_over_two_modes(registry):
    unit = _compile(
        {"id": "y", "modes": ["x-mode", "y-mode"], "linter": "checkerA"},
        registry,
    )
    assert unit.hook_targets == ("x-mode-hook", "y-mode-hook")
    assert len(unit.actions) == 1
    action = unit.actions[0]
    assert action.axis == AXIS_LINTER
    assert action.kind == "flycheck.select-checker"
    assert dict(action.params) == {"checker": "checkerA"}
    assert action.description == "set checker checkerA; enable flycheck"
    assert unit.server_programs == ()
    assert unit.lsp_client_id is None


def test_lsp_action_precedes_linter_action(registry):
    unit = _compile(
        {"id": "py", "modes": ["python-mode"], "lsp": "pylsp", "linter": True},
        registry,
    )
    assert [action.axis for action in unit.actions] == [AXIS_LSP, AXIS_LINTER]


def test_hook_targets_one_per_mode(registry):
    modes = ["a-mode", "b-mode", "c-mode"]
    unit = _compile({"id": "z", "modes": modes, "lsp": "s"}, registry)
    assert len(unit.hook_targets) == len(modes)
    assert unit.hook_targets == tuple(f"{mode}-hook" for mode in modes)


def test_generated_identifiers(registry):
    unit = _compile(
        {"id": "go", "modes": "go-mode", "lsp": "gopls"}, registry
    )
    assert unit.toggle_id == "langwire-go-mode"
    assert unit.setup_action_id == "langwire-go-setup"


def test_reuse_lsp_without_lsp_warns_but_compiles(registry):
    with pytest.warns(ConfigurationWarning):
        unit = _compile(
            {"id": "x", "modes": "x-mode", "lsp": None, "linter": "lsp"},
            registry,
        )
    assert [action.kind for action in unit.actions] == [
        "flycheck.lsp-integration"
    ]
    assert unit.actions[0].params["lsp_requested"] is False


def test_reuse_lsp_warning_can_be_silenced(registry):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        unit = _compile(
            {"id": "x", "modes": "x-mode", "linter": "lsp"},
            registry,
            warn_on_missing_lsp_for_reuse=False,
        )
    assert len(unit.actions) == 1


def test_unknown_linter_backend_is_rejected(registry):
    with pytest.raises(UnsupportedBackendError) as excinfo:
        _compile(
            {"id": "x", "modes": "x-mode", "lsp": "s", "linter": True},
            registry,
            linter="no-such-linter",
        )
    assert excinfo.value.axis == AXIS_LINTER
    assert excinfo.value.backend_id == "no-such-linter"
    assert excinfo.value.declared is False


def test_declared_but_unimplemented_backends(registry):
    with pytest.raises(UnsupportedBackendError) as excinfo:
        _compile(
            {"id": "x", "modes": "m", "linter": True},
            registry,
            linter="flymake",
        )
    assert excinfo.value.declared is True
    assert "declared" in str(excinfo.value)

    with pytest.raises(UnsupportedBackendError) as excinfo:
        _compile(
            {"id": "x", "modes": "m", "lsp": "s"}, registry, lsp="lsp-mode"
        )
    assert excinfo.value.axis == AXIS_LSP


def test_lsp_backend_not_consulted_without_lsp(registry):
    unit = _compile(
        {"id": "x", "modes": "m", "linter": True}, registry, lsp="lsp-bridge"
    )
    assert len(unit.actions) == 1


def test_reuse_lsp_needs_integration_for_lsp_client(registry):
    registry.register_lsp("custom-lsp", registry.lsp_rule("eglot"))
    with pytest.raises(UnsupportedLspIntegrationError) as excinfo:
        _compile(
            {"id": "x", "modes": "m", "lsp": "s", "linter": "lsp"},
            registry,
            lsp="custom-lsp",
        )
    assert excinfo.value.lsp_client_id == "custom-lsp"
    assert isinstance(excinfo.value, UnsupportedBackendError)


def test_validation_errors_propagate(registry):
    with pytest.raises(MissingModesError):
        _compile({"id": "x", "modes": [], "lsp": "s"}, registry)


def test_custom_linter_backend_is_dispatched(registry):
    def rule(spec, presence):
        return Action(
            axis=AXIS_LINTER,
            kind="custom.enable",
            description=f"custom for {spec.id}",
            run=lambda ctx: None,
            params={"lsp": presence.client_id},
        )

    registry.register_linter("custom", rule)
    unit = _compile(
        {"id": "x", "modes": "m", "linter": True}, registry, linter="custom"
    )
    assert unit.actions[0].kind == "custom.enable"
    assert unit.linter_client_id == "custom"


def test_unsupported_linter_backend_does_not_warn(registry):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        with pytest.raises(UnsupportedBackendError):
            _compile(
                {"id": "x", "modes": "x-mode", "linter": "lsp"},
                registry,
                linter="flymake",
            )
    assert not [w for w in caught if w.category is ConfigurationWarning]


def test_compiled_unit_is_immutable_and_hashable(registry):
    unit = _compile(
        {"id": "go", "modes": "go-mode", "lsp": "gopls", "linter": True},
        registry,
    )
    params = unit.actions[0].params
    with pytest.raises(TypeError):
        params["argv"] = ("other",)
    assert params["argv"] == ("gopls",)
    assert hash(unit) == hash(unit)
    assert unit.to_dict()["actions"][0]["params"] == {
        "modes": ["go-mode"],
        "argv": ["gopls"],
    }
