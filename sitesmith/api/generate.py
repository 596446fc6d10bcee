from __future__ import annotations

import logging
from typing import AsyncGenerator

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..generation import GenerationPipeline, ImageSynthesizer
from ..llm.gateway import GatewayClient
from ..schemas.generation import (
    CodeBundle,
    ErrorResponse,
    GenerateImagesRequest,
    GenerateImagesResponse,
    GeneratedImagePayload,
    GenerationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _get_settings() -> Settings:
    return get_settings()


async def get_gateway(settings: Settings = Depends(_get_settings)) -> AsyncGenerator[GatewayClient, None]:
    async with GatewayClient.from_settings(settings) as client:
        yield client


@router.post("/generate-website", response_model=CodeBundle, responses=_ERROR_RESPONSES)
async def generate_website(
    payload: GenerationRequest,
    gateway: GatewayClient = Depends(get_gateway),
    settings: Settings = Depends(_get_settings),
) -> CodeBundle:
    logger.info(
        "generate-website request (revise=%s, reference_image=%s, prompt_len=%d)",
        payload.existing_code is not None,
        payload.reference_image is not None,
        len(payload.prompt),
    )
    pipeline = GenerationPipeline(gateway, gateway, settings)
    return await pipeline.run(payload)


@router.post("/generate-images", response_model=GenerateImagesResponse, responses=_ERROR_RESPONSES)
async def generate_images(
    payload: GenerateImagesRequest,
    gateway: GatewayClient = Depends(get_gateway),
    settings: Settings = Depends(_get_settings),
) -> GenerateImagesResponse:
    logger.info("generate-images request (prompts=%d)", len(payload.prompts))
    synthesizer = ImageSynthesizer(gateway, settings.fallback_image_url)
    images = await synthesizer.synthesize(payload.prompts)
    return GenerateImagesResponse(
        images=[
            GeneratedImagePayload(
                prompt=image.prompt_text,
                url=image.url,
                alt=image.alt_text,
                fallback=image.fallback,
            )
            for image in images
        ]
    )


__all__ = ["get_gateway", "router"]
