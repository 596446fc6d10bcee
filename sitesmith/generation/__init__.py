from .assembler import ModelOutput, ResponseAssembler
from .compiler import CompiledPrompt, PromptCompiler
from .images import GeneratedImage, ImageSynthesizer, build_hero_prompt, derive_alt_text
from .modes import GenerationMode, ModeNew, ModeRevise, resolve_mode
from .orchestrator import GenerationPipeline

__all__ = [
    "CompiledPrompt",
    "GeneratedImage",
    "GenerationMode",
    "GenerationPipeline",
    "ImageSynthesizer",
    "ModeNew",
    "ModeRevise",
    "ModelOutput",
    "PromptCompiler",
    "ResponseAssembler",
    "build_hero_prompt",
    "derive_alt_text",
    "resolve_mode",
]
