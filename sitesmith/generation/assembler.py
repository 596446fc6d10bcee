from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import MalformedResponseError
from ..schemas.generation import CodeBundle
from ..utils.html import find_placeholder_indices, replace_image_placeholders
from .images import GeneratedImage

logger = logging.getLogger(__name__)

_FENCE = "```"


@dataclass(frozen=True)
class ModelOutput:
    html: str = ""
    css: str = ""
    js: str = ""
    image_prompts: List[str] = field(default_factory=list)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class ResponseAssembler:
    """Parses the model's JSON answer and places generated images into it."""

    def parse(self, raw: str) -> ModelOutput:
        data = self._load_json(raw)
        prompts_payload = data.get("imagePrompts")
        image_prompts: List[str] = []
        if isinstance(prompts_payload, list):
            image_prompts = [item.strip() for item in prompts_payload if isinstance(item, str) and item.strip()]
        return ModelOutput(
            html=_as_text(data.get("html")),
            css=_as_text(data.get("css")),
            js=_as_text(data.get("js")),
            image_prompts=image_prompts,
        )

    def substitute(self, html: str, images: Sequence[GeneratedImage]) -> str:
        """Replace ``data-ai-image="i"`` placeholders with ``images[i]``.

        Placeholders with no matching image are left as they are.
        """
        if not images:
            return html
        sources = {index: (image.url, image.alt_text) for index, image in enumerate(images)}
        result, count = replace_image_placeholders(html, sources)
        logger.debug("Replaced %d placeholder tags with %d images", count, len(images))
        leftover = [index for index in find_placeholder_indices(html) if index >= len(images)]
        if leftover:
            logger.info("Placeholders without a generated image: %s", leftover)
        return result

    def assemble(self, raw: str, images: Sequence[GeneratedImage] = ()) -> CodeBundle:
        output = self.parse(raw)
        return self.build(output, images)

    def build(self, output: ModelOutput, images: Sequence[GeneratedImage] = ()) -> CodeBundle:
        return CodeBundle(
            html=self.substitute(output.html, images),
            css=output.css,
            js=output.js,
        )

    def _load_json(self, raw: str) -> Dict[str, Any]:
        text = (raw or "").strip()
        if not text:
            raise MalformedResponseError()
        fenced = self._extract_fenced_json(text)
        if fenced is not None:
            text = fenced
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Model response is not valid JSON: %s", exc)
            raise MalformedResponseError() from exc
        if not isinstance(data, dict):
            logger.warning("Model response is JSON but not an object: %s", type(data).__name__)
            raise MalformedResponseError()
        return data

    def _extract_fenced_json(self, text: str) -> Optional[str]:
        if not text.startswith(_FENCE) or not text.endswith(_FENCE) or len(text) < 2 * len(_FENCE):
            return None
        inner = text[len(_FENCE) : -len(_FENCE)]
        first_line, _, rest = inner.partition("\n")
        if first_line.strip().lower() in {"", "json"}:
            inner = rest
        return inner.strip()


__all__ = ["ModelOutput", "ResponseAssembler"]
