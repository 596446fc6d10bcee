from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..config import Settings, get_settings
from ..llm.base import Message
from .images import GeneratedImage
from .modes import GenerationMode, ModeRevise
from .prompts import (
    CURRENT_CODE_HEADING,
    CURRENT_CODE_TEMPLATE,
    HERO_IMAGE_INSTRUCTION,
    INTERACTIVITY_REQUIREMENTS,
    NEW_SITE_INTRO,
    NEW_SITE_USER_TEMPLATE,
    REFERENCE_IMAGE_NEW_INSTRUCTION,
    REFERENCE_IMAGE_REVISE_INSTRUCTION,
    REVISE_INTRO,
    REVISE_RULES,
    REVISE_USER_TEMPLATE,
    get_image_placeholder_rules,
    get_output_format,
)

UserContent = Union[str, List[Dict[str, Any]]]


@dataclass(frozen=True)
class CompiledPrompt:
    system_instruction: str
    user_turns: List[UserContent] = field(default_factory=list)

    def to_messages(self) -> List[Message]:
        messages: List[Message] = [{"role": "system", "content": self.system_instruction}]
        for content in self.user_turns:
            messages.append({"role": "user", "content": content})
        return messages


class PromptCompiler:
    """Builds the instruction and user turn for one generation call."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    @property
    def image_aware(self) -> bool:
        return self.settings.inline_images and self.settings.max_image_prompts > 0

    def compile(self, mode: GenerationMode, hero_image: Optional[GeneratedImage] = None) -> CompiledPrompt:
        if isinstance(mode, ModeRevise):
            system_instruction = self._revise_system(mode)
            text = REVISE_USER_TEMPLATE.format(prompt=mode.prompt)
            reference_note = REFERENCE_IMAGE_REVISE_INSTRUCTION
        else:
            system_instruction = self._new_site_system()
            text = NEW_SITE_USER_TEMPLATE.format(prompt=mode.prompt)
            reference_note = REFERENCE_IMAGE_NEW_INSTRUCTION
            if hero_image is not None:
                text = "\n\n".join(
                    [text, HERO_IMAGE_INSTRUCTION.format(url=hero_image.url, alt=hero_image.alt_text)]
                )

        if not mode.reference_image:
            return CompiledPrompt(system_instruction=system_instruction, user_turns=[text])

        parts: List[Dict[str, Any]] = [
            {"type": "text", "text": "\n\n".join([text, reference_note])},
            {"type": "image_url", "image_url": {"url": mode.reference_image}},
        ]
        return CompiledPrompt(system_instruction=system_instruction, user_turns=[parts])

    def _new_site_system(self) -> str:
        sections = [NEW_SITE_INTRO, INTERACTIVITY_REQUIREMENTS]
        if self.image_aware:
            sections.append(get_image_placeholder_rules(self.settings.max_image_prompts))
        sections.append(get_output_format(self.image_aware))
        return "\n\n".join(sections)

    def _revise_system(self, mode: ModeRevise) -> str:
        current_code = CURRENT_CODE_TEMPLATE.format(
            heading=CURRENT_CODE_HEADING,
            html=mode.existing_code.html,
            css=mode.existing_code.css,
            js=mode.existing_code.js,
        )
        sections = [REVISE_INTRO, current_code, REVISE_RULES, get_output_format(False)]
        return "\n\n".join(sections)


__all__ = ["CompiledPrompt", "PromptCompiler", "UserContent"]
