from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..schemas.generation import CodeBundle, GenerationRequest


@dataclass(frozen=True)
class ModeNew:
    """Build a site from scratch; image synthesis is allowed."""

    prompt: str
    reference_image: Optional[str] = None


@dataclass(frozen=True)
class ModeRevise:
    """Rewrite an existing site; image synthesis never runs."""

    prompt: str
    existing_code: CodeBundle
    reference_image: Optional[str] = None


GenerationMode = Union[ModeNew, ModeRevise]


def resolve_mode(request: GenerationRequest) -> GenerationMode:
    if request.existing_code is not None:
        return ModeRevise(
            prompt=request.prompt,
            existing_code=request.existing_code,
            reference_image=request.reference_image,
        )
    return ModeNew(prompt=request.prompt, reference_image=request.reference_image)


__all__ = ["GenerationMode", "ModeNew", "ModeRevise", "resolve_mode"]
