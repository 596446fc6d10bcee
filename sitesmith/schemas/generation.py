from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_IMAGE_BATCH = 10


def _is_image_source(value: str) -> bool:
    lowered = value.strip().lower()
    return lowered.startswith("data:image/") or lowered.startswith(("http://", "https://"))


class CodeBundle(BaseModel):
    html: str = ""
    css: str = ""
    js: str = ""

    model_config = ConfigDict(frozen=True)


class GenerationRequest(BaseModel):
    prompt: str = Field(min_length=1)
    existing_code: Optional[CodeBundle] = Field(default=None, alias="existingCode")
    reference_image: Optional[str] = Field(default=None, alias="image")

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be blank")
        return value

    @field_validator("reference_image")
    @classmethod
    def validate_reference_image(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if not _is_image_source(value):
            raise ValueError("image must be a data:image/... URI or an http(s) URL")
        return value.strip()

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "prompt": "A portfolio site for a landscape photographer",
                "existingCode": None,
                "image": None,
            }
        },
    )


class GenerateImagesRequest(BaseModel):
    prompts: List[str] = Field(min_length=1, max_length=MAX_IMAGE_BATCH)

    @field_validator("prompts")
    @classmethod
    def validate_prompts(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip() for item in value if item and item.strip()]
        if not cleaned:
            raise ValueError("prompts must contain at least one non-empty prompt")
        return cleaned


class GeneratedImagePayload(BaseModel):
    prompt: str
    url: str
    alt: str
    fallback: bool = False


class GenerateImagesResponse(BaseModel):
    images: List[GeneratedImagePayload] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str


__all__ = [
    "CodeBundle",
    "ErrorResponse",
    "GenerateImagesRequest",
    "GenerateImagesResponse",
    "GeneratedImagePayload",
    "GenerationRequest",
    "MAX_IMAGE_BATCH",
]
