from __future__ import annotations

import logging
import time
from typing import List, Optional

from ..config import Settings, get_settings
from ..llm.base import ImageGenerator, TextGenerator
from ..log import log_stage
from ..schemas.generation import CodeBundle, GenerationRequest
from .assembler import ResponseAssembler
from .compiler import PromptCompiler
from .images import GeneratedImage, ImageSynthesizer, build_hero_prompt
from .modes import GenerationMode, ModeNew, ModeRevise, resolve_mode

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """Runs one generation request end to end.

    New sites: hero image, main text call, then the model's own image
    prompts, substituted into the markup. Revisions: a single text call and
    no image work at all. Errors from the main call propagate; image errors
    become fallback images.
    """

    def __init__(
        self,
        text_generator: TextGenerator,
        image_generator: ImageGenerator,
        settings: Optional[Settings] = None,
        compiler: Optional[PromptCompiler] = None,
        assembler: Optional[ResponseAssembler] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.text_generator = text_generator
        self.synthesizer = ImageSynthesizer(image_generator, self.settings.fallback_image_url)
        self.compiler = compiler or PromptCompiler(self.settings)
        self.assembler = assembler or ResponseAssembler()

    async def run(self, request: GenerationRequest) -> CodeBundle:
        mode = resolve_mode(request)
        started = time.monotonic()
        if isinstance(mode, ModeRevise):
            bundle = await self._run_revise(mode)
        else:
            bundle = await self._run_new(mode)
        log_stage(
            "complete",
            mode=self._mode_name(mode),
            elapsed_s=round(time.monotonic() - started, 3),
            html_len=len(bundle.html),
            css_len=len(bundle.css),
            js_len=len(bundle.js),
        )
        return bundle

    async def _run_new(self, mode: ModeNew) -> CodeBundle:
        hero: Optional[GeneratedImage] = None
        if self.settings.hero_image:
            hero = await self.synthesizer.synthesize_one(build_hero_prompt(mode.prompt))
            log_stage("hero_image", fallback=hero.fallback)
            if hero.fallback:
                hero = None

        compiled = self.compiler.compile(mode, hero_image=hero)
        raw = await self.text_generator.generate_text(compiled.to_messages(), json_output=True)
        output = self.assembler.parse(raw)
        log_stage("model_output", image_prompts=len(output.image_prompts))

        images: List[GeneratedImage] = []
        if self.compiler.image_aware and output.image_prompts:
            prompts = output.image_prompts[: self.settings.max_image_prompts]
            images = await self.synthesizer.synthesize(prompts)
            log_stage(
                "inline_images",
                requested=len(output.image_prompts),
                generated=len(images),
                fallbacks=sum(1 for image in images if image.fallback),
            )
        return self.assembler.build(output, images)

    async def _run_revise(self, mode: ModeRevise) -> CodeBundle:
        compiled = self.compiler.compile(mode)
        raw = await self.text_generator.generate_text(compiled.to_messages(), json_output=True)
        output = self.assembler.parse(raw)
        if output.image_prompts:
            logger.info("Ignoring %d image prompts in revise mode", len(output.image_prompts))
        return self.assembler.build(output)

    def _mode_name(self, mode: GenerationMode) -> str:
        return "revise" if isinstance(mode, ModeRevise) else "new"


__all__ = ["GenerationPipeline"]
