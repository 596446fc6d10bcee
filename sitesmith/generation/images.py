from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx

from ..exceptions import GatewayError
from ..llm.base import ImageGenerator
from .prompts import HERO_IMAGE_PROMPT

logger = logging.getLogger(__name__)

MAX_ALT_TEXT_CHARS = 125
DEFAULT_ALT_TEXT = "Website image"

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s")


@dataclass(frozen=True)
class GeneratedImage:
    prompt_text: str
    url: str
    alt_text: str
    fallback: bool = False


def derive_alt_text(prompt_text: str, limit: int = MAX_ALT_TEXT_CHARS) -> str:
    """First sentence of the prompt, whitespace collapsed, cut at ``limit`` chars."""
    collapsed = _WHITESPACE_RE.sub(" ", prompt_text or "").strip()
    if not collapsed:
        return DEFAULT_ALT_TEXT
    sentence = _SENTENCE_END_RE.split(collapsed, maxsplit=1)[0].rstrip(".!? ")
    if not sentence:
        sentence = collapsed
    if len(sentence) <= limit:
        return sentence
    cut = sentence[:limit].rstrip()
    # prefer a word boundary
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut


def build_hero_prompt(description: str) -> str:
    collapsed = _WHITESPACE_RE.sub(" ", description or "").strip()
    return HERO_IMAGE_PROMPT.format(description=collapsed)


class ImageSynthesizer:
    """Turns image prompts into images, one gateway call at a time.

    A failed call yields a fallback image instead of an error, so one bad
    prompt never aborts the site generation.
    """

    def __init__(self, image_generator: ImageGenerator, fallback_url: str) -> None:
        self.image_generator = image_generator
        self.fallback_url = fallback_url

    async def synthesize(self, prompt_texts: Sequence[str]) -> List[GeneratedImage]:
        images: List[GeneratedImage] = []
        for index, prompt_text in enumerate(prompt_texts):
            images.append(await self.synthesize_one(prompt_text, index=index))
        return images

    async def synthesize_one(self, prompt_text: str, *, index: int = 0) -> GeneratedImage:
        alt_text = derive_alt_text(prompt_text)
        url: Optional[str] = None
        try:
            url = await self.image_generator.generate_image(prompt_text)
        except GatewayError as exc:
            logger.warning(
                "Image generation failed for prompt %d, using fallback: %s",
                index,
                exc.with_trace(),
            )
        except httpx.HTTPError as exc:
            logger.warning("Image generation transport error for prompt %d, using fallback: %s", index, exc)
        else:
            if not url:
                logger.warning("Image response for prompt %d had no image, using fallback", index)

        if not url:
            return GeneratedImage(prompt_text=prompt_text, url=self.fallback_url, alt_text=alt_text, fallback=True)
        return GeneratedImage(prompt_text=prompt_text, url=url, alt_text=alt_text)


__all__ = [
    "DEFAULT_ALT_TEXT",
    "GeneratedImage",
    "ImageSynthesizer",
    "MAX_ALT_TEXT_CHARS",
    "build_hero_prompt",
    "derive_alt_text",
]
