"""Lazy exports for gateway utilities to avoid import cycles."""

from __future__ import annotations

from importlib import import_module
from typing import Any


_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    # base
    "ImageGenerator": ("sitesmith.llm.base", "ImageGenerator"),
    "Message": ("sitesmith.llm.base", "Message"),
    "TextGenerator": ("sitesmith.llm.base", "TextGenerator"),
    # gateway
    "CHAT_COMPLETIONS_PATH": ("sitesmith.llm.gateway", "CHAT_COMPLETIONS_PATH"),
    "GatewayClient": ("sitesmith.llm.gateway", "GatewayClient"),
    "translate_status": ("sitesmith.llm.gateway", "translate_status"),
}


__all__ = sorted(_LAZY_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    target = _LAZY_EXPORTS.get(name)
    if not target:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr = target
    module = import_module(module_name)
    value = getattr(module, attr)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
