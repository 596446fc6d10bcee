from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

import httpx

from ..config import Settings, get_settings
from ..exceptions import (
    ConfigError,
    GatewayError,
    MalformedResponseError,
    QuotaExhaustedError,
    RateLimitedError,
    UpstreamError,
)
from ..log import GatewayCallLogger
from .base import Message

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"
_ERROR_BODY_LOG_CHARS = 500

# Provider specific status conventions; everything else non-2xx is UpstreamError.
_STATUS_ERRORS: Dict[int, Type[GatewayError]] = {
    429: RateLimitedError,
    402: QuotaExhaustedError,
}


def translate_status(status_code: int) -> GatewayError:
    error_cls = _STATUS_ERRORS.get(status_code)
    if error_cls is not None:
        return error_cls()
    return UpstreamError(f"AI Gateway error: {status_code}", upstream_status=status_code)


class GatewayClient:
    """Client for a chat-completions style gateway serving text and image models.

    Implements both ``TextGenerator`` and ``ImageGenerator``. One instance owns
    one ``httpx.AsyncClient``; use it as an async context manager so the
    connection pool is closed when the request is done.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        resolved_settings = settings or get_settings()
        if not api_key:
            raise ConfigError("GATEWAY_API_KEY is not configured")
        self.api_key = api_key
        self.base_url = base_url or resolved_settings.gateway_base_url
        self.text_model = text_model or resolved_settings.text_model
        self.image_model = image_model or resolved_settings.image_model
        timeout = timeout_seconds if timeout_seconds is not None else resolved_settings.gateway_timeout_seconds
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GatewayClient":
        return cls(
            api_key=settings.gateway_api_key,
            base_url=settings.gateway_base_url,
            text_model=settings.text_model,
            image_model=settings.image_model,
            timeout_seconds=settings.gateway_timeout_seconds,
            settings=settings,
            transport=transport,
        )

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def generate_text(self, messages: List[Message], *, json_output: bool = True) -> str:
        payload: Dict[str, Any] = {
            "model": self.text_model,
            "messages": messages,
        }
        if json_output:
            payload["response_format"] = {"type": "json_object"}
        response_json = await self._post(payload, model=self.text_model, kind="text")
        content = self._extract_content(response_json)
        if not content:
            raise MalformedResponseError("AI response did not include any content")
        return content

    async def generate_image(self, prompt: str) -> Optional[str]:
        payload: Dict[str, Any] = {
            "model": self.image_model,
            "messages": [{"role": "user", "content": prompt}],
            "modalities": ["image", "text"],
        }
        response_json = await self._post(payload, model=self.image_model, kind="image")
        return self._extract_image_url(response_json)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: Dict[str, Any], *, model: str, kind: str) -> Dict[str, Any]:
        with GatewayCallLogger(model=model, kind=kind) as call_log:
            try:
                response = await self._client.post(CHAT_COMPLETIONS_PATH, json=payload, headers=self._headers())
            except httpx.HTTPError as exc:
                call_log.error(str(exc))
                raise UpstreamError(f"AI Gateway request failed: {exc}") from exc

            if not response.is_success:
                call_log.error(response.text[:_ERROR_BODY_LOG_CHARS], status_code=response.status_code)
                raise translate_status(response.status_code)

            try:
                data = response.json()
            except ValueError as exc:
                call_log.error("response body is not JSON", status_code=response.status_code)
                raise MalformedResponseError("AI Gateway returned a non-JSON body") from exc
            if not isinstance(data, dict):
                call_log.error("response body is not a JSON object", status_code=response.status_code)
                raise MalformedResponseError("AI Gateway returned an unexpected body")
            call_log.success(response.status_code, content_len=len(response.content))
            return data

    def _first_message(self, response_json: Dict[str, Any]) -> Dict[str, Any]:
        choices = response_json.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return {}
        message = choices[0].get("message")
        return message if isinstance(message, dict) else {}

    def _extract_content(self, response_json: Dict[str, Any]) -> str:
        content = self._first_message(response_json).get("content")
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            text_parts: List[str] = []
            for part in content:
                if isinstance(part, dict) and part.get("type") in {"text", "output_text"}:
                    text = part.get("text") or ""
                    if text:
                        text_parts.append(str(text))
            return "".join(text_parts).strip()
        return ""

    def _extract_image_url(self, response_json: Dict[str, Any]) -> Optional[str]:
        images = self._first_message(response_json).get("images")
        if not isinstance(images, list) or not images or not isinstance(images[0], dict):
            return None
        image_url = images[0].get("image_url")
        if isinstance(image_url, dict):
            url = image_url.get("url")
        else:
            url = image_url
        if isinstance(url, str) and url.strip():
            return url.strip()
        return None


__all__ = ["CHAT_COMPLETIONS_PATH", "GatewayClient", "translate_status"]
