"""Capability interfaces for the upstream AI gateway.

Text generation and image generation are separate protocols so each has its
own error policy: text failures abort a pipeline run, image failures degrade
to a fallback picture.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


Message = Dict[str, Any]


@runtime_checkable
class TextGenerator(Protocol):
    async def generate_text(self, messages: List[Message], *, json_output: bool = True) -> str:
        """Run one chat completion and return the message content.

        Raises a GatewayError subclass on any non-2xx status or when the
        response body has no text content.
        """
        ...


@runtime_checkable
class ImageGenerator(Protocol):
    async def generate_image(self, prompt: str) -> Optional[str]:
        """Generate one image and return its URL (remote or data URI).

        Returns None when the gateway answered successfully but without an
        image. Raises a GatewayError subclass on non-2xx statuses.
        """
        ...


__all__ = ["ImageGenerator", "Message", "TextGenerator"]
