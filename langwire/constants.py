"""Shared identifiers for backends, axes, and generated names."""

LSP_CLIENT_EGLOT = "eglot"
LSP_CLIENT_LSP_MODE = "lsp-mode"
LSP_CLIENT_LSP_BRIDGE = "lsp-bridge"

LINTER_CLIENT_FLYMAKE = "flymake"
LINTER_CLIENT_FLYCHECK = "flycheck"

# Every backend langwire knows about, implemented or not.
KNOWN_LSP_CLIENTS = (
    LSP_CLIENT_EGLOT,
    LSP_CLIENT_LSP_MODE,
    LSP_CLIENT_LSP_BRIDGE,
)
KNOWN_LINTER_CLIENTS = (
    LINTER_CLIENT_FLYMAKE,
    LINTER_CLIENT_FLYCHECK,
)

DEFAULT_LSP_CLIENT = LSP_CLIENT_EGLOT
DEFAULT_LINTER_CLIENT = LINTER_CLIENT_FLYCHECK

AXIS_LSP = "lsp"
AXIS_LINTER = "linter"

TOGGLE_ID_TEMPLATE = "langwire-{language_id}-mode"
SETUP_ACTION_ID_TEMPLATE = "langwire-{language_id}-setup"
HOOK_ID_TEMPLATE = "{mode}-hook"
