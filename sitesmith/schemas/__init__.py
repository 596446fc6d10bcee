from .generation import (
    CodeBundle,
    ErrorResponse,
    GenerateImagesRequest,
    GenerateImagesResponse,
    GeneratedImagePayload,
    GenerationRequest,
)

__all__ = [
    "CodeBundle",
    "ErrorResponse",
    "GenerateImagesRequest",
    "GenerateImagesResponse",
    "GeneratedImagePayload",
    "GenerationRequest",
]
