"""doors94: author agent manifests and chat with the prompts they compile to."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from doors94.core.profile import Profile as Profile
    from doors94.gateway.service import ChatGateway as ChatGateway

_LAZY_EXPORTS = {
    "Profile": "doors94.core.profile",
    "ChatGateway": "doors94.gateway.service",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'doors94' has no attribute {name!r}")
