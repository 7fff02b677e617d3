from langwire.bridge import DeferredActivation
from langwire.host.memory import InMemoryLspSubsystem
from langwire.types import Buffer, SetupContext


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, buffer):
        self.calls.append(buffer.name)


def _ctx(lsp, bridge, buffer, *, language_id="py", enabled=lambda: True):
    return SetupContext(
        language_id=language_id,
        modes=("python-mode",),
        buffer=buffer,
        lsp=lsp,
        linter=None,  # not used by the bridge
        bridge=bridge,
        is_enabled=enabled,
    )


def test_runs_immediately_when_already_managed(py_buffer):
    lsp = InMemoryLspSubsystem()
    lsp.mark_managed(py_buffer)
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    assert bridge.run_when_managed(_ctx(lsp, bridge, py_buffer), activate)
    assert activate.calls == ["main.py"]
    assert lsp.listener_count == 0


def test_defers_until_managed_then_removes_itself(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    ran = bridge.run_when_managed(_ctx(lsp, bridge, py_buffer), activate)
    assert ran is False
    assert lsp.listener_count == 1
    assert activate.calls == []

    lsp.mark_managed(py_buffer)
    assert activate.calls == ["main.py"]
    assert lsp.listener_count == 0
    assert bridge.pending() == 0

    lsp.mark_managed(py_buffer)
    lsp.mark_managed(py_buffer)
    assert activate.calls == ["main.py"]


def test_events_for_other_buffers_leave_listener_pending(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    bridge.run_when_managed(_ctx(lsp, bridge, py_buffer), activate)

    lsp.mark_managed(Buffer(name="other.py", mode="python-mode"))
    assert activate.calls == []
    assert lsp.listener_count == 1

    lsp.mark_managed(py_buffer)
    assert activate.calls == ["main.py"]
    assert lsp.listener_count == 0


def test_no_op_when_buffer_changed_mode(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    bridge.run_when_managed(_ctx(lsp, bridge, py_buffer), activate)

    lsp.mark_managed(Buffer(name=py_buffer.name, mode="fundamental-mode"))
    assert activate.calls == []
    assert lsp.listener_count == 0


def test_no_op_when_toggle_disabled_before_ready(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    state = {"enabled": True}
    ctx = _ctx(lsp, bridge, py_buffer, enabled=lambda: state["enabled"])
    bridge.run_when_managed(ctx, activate)

    state["enabled"] = False
    lsp.mark_managed(py_buffer)
    assert activate.calls == []
    assert lsp.listener_count == 0


def test_repeated_setup_installs_one_listener(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    ctx = _ctx(lsp, bridge, py_buffer)
    bridge.run_when_managed(ctx, activate)
    bridge.run_when_managed(ctx, activate)
    assert lsp.listener_count == 1
    lsp.mark_managed(py_buffer)
    assert activate.calls == ["main.py"]


def test_languages_remove_only_their_own_listener(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    first, second = _Recorder(), _Recorder()
    other_buffer = Buffer(name="lib.py", mode="python-mode")
    bridge.run_when_managed(
        _ctx(lsp, bridge, py_buffer, language_id="py"), first
    )
    bridge.run_when_managed(
        _ctx(lsp, bridge, other_buffer, language_id="cython"), second
    )
    assert lsp.listener_count == 2

    lsp.mark_managed(other_buffer)
    assert second.calls == ["lib.py"]
    assert first.calls == []
    assert lsp.listener_count == 1
    assert bridge.pending("py") == 1

    lsp.mark_managed(py_buffer)
    assert first.calls == ["main.py"]
    assert lsp.listener_count == 0


def test_shared_buffer_listeners_each_fire_once(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    first, second = _Recorder(), _Recorder()
    bridge.run_when_managed(
        _ctx(lsp, bridge, py_buffer, language_id="py"), first
    )
    bridge.run_when_managed(
        _ctx(lsp, bridge, py_buffer, language_id="py-extra"), second
    )
    lsp.mark_managed(py_buffer)
    lsp.mark_managed(py_buffer)
    assert first.calls == ["main.py"]
    assert second.calls == ["main.py"]
    assert lsp.listener_count == 0


def test_cancel_drops_pending_listeners_for_language(py_buffer):
    lsp = InMemoryLspSubsystem()
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    keep = _Recorder()
    bridge.run_when_managed(_ctx(lsp, bridge, py_buffer), activate)
    bridge.run_when_managed(
        _ctx(lsp, bridge, py_buffer, language_id="keep"), keep
    )
    assert bridge.cancel("py") == 1
    assert lsp.listener_count == 1
    lsp.mark_managed(py_buffer)
    assert activate.calls == []
    assert keep.calls == ["main.py"]


class _EagerLspSubsystem(InMemoryLspSubsystem):
    """Notifies each new listener while it is still subscribing."""

    def __init__(self, ready):
        super().__init__()
        self._ready = ready

    def on_became_managed(self, listener, *, label=""):
        handle = super().on_became_managed(listener, label=label)
        listener(self._ready)
        return handle


def test_notification_during_subscription_leaves_nothing_pending(py_buffer):
    lsp = _EagerLspSubsystem(py_buffer)
    bridge = DeferredActivation(lsp)
    activate = _Recorder()
    ctx = _ctx(lsp, bridge, py_buffer)

    assert bridge.run_when_managed(ctx, activate) is True
    assert activate.calls == ["main.py"]
    assert lsp.listener_count == 0
    assert bridge.pending() == 0

    bridge.run_when_managed(ctx, activate)
    assert activate.calls == ["main.py", "main.py"]
    assert lsp.listener_count == 0
