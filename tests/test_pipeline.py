import asyncio
import json

import pytest

from sitesmith.config import Settings
from sitesmith.exceptions import MalformedResponseError, RateLimitedError, UpstreamError
from sitesmith.generation import GenerationPipeline
from sitesmith.schemas.generation import CodeBundle, GenerationRequest

FALLBACK = "https://fallback.test/image.png"


class DummyTextGenerator:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_text(self, messages, *, json_output=True):
        self.calls.append({"messages": messages, "json_output": json_output})
        if self.error is not None:
            raise self.error
        return self.response


class DummyImageGenerator:
    def __init__(self, results=None, error=None):
        self._results = list(results or [])
        self.error = error
        self.prompts = []

    async def generate_image(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self._results:
            return self._results.pop(0)
        return f"https://img.test/{len(self.prompts)}.png"


def _settings(**overrides) -> Settings:
    values = dict(
        gateway_api_key="test-key",
        fallback_image_url=FALLBACK,
        hero_image=True,
        inline_images=True,
        max_image_prompts=5,
    )
    values.update(overrides)
    return Settings(**values)


def _run(pipeline, request):
    return asyncio.run(pipeline.run(request))


def test_portfolio_scenario_returns_upstream_fields_unchanged():
    text = DummyTextGenerator(json.dumps({"html": "<h1>Hi</h1>", "css": "h1{color:red}", "js": ""}))
    images = DummyImageGenerator(error=UpstreamError("AI Gateway error: 500", upstream_status=500))
    pipeline = GenerationPipeline(text, images, _settings())

    bundle = _run(pipeline, GenerationRequest(prompt="portfolio site"))

    assert bundle == CodeBundle(html="<h1>Hi</h1>", css="h1{color:red}", js="")
    # hero attempt happened and fell back, the main call still ran
    assert len(images.prompts) == 1
    assert len(text.calls) == 1
    user_turn = text.calls[0]["messages"][1]["content"]
    assert FALLBACK not in user_turn
    assert "hero/banner" not in user_turn


def test_new_mode_generates_hero_then_inline_images():
    raw = json.dumps(
        {
            "html": '<header><img data-ai-image="0" alt="x"></header><img data-ai-image="1">',
            "css": "",
            "js": "",
            "imagePrompts": ["A bright cafe interior", "Latte art close-up"],
        }
    )
    text = DummyTextGenerator(raw)
    images = DummyImageGenerator(["https://img.test/hero.png", "https://img.test/a.png", "https://img.test/b.png"])
    pipeline = GenerationPipeline(text, images, _settings())

    bundle = _run(pipeline, GenerationRequest(prompt="A coffee shop"))

    assert "coffee shop" in images.prompts[0]
    assert images.prompts[1:] == ["A bright cafe interior", "Latte art close-up"]
    assert 'src="https://img.test/a.png" alt="A bright cafe interior"' in bundle.html
    assert 'src="https://img.test/b.png"' in bundle.html
    assert "data-ai-image" not in bundle.html
    assert "https://img.test/hero.png" in text.calls[0]["messages"][1]["content"]
    assert text.calls[0]["json_output"] is True


def test_image_prompts_are_capped():
    raw = json.dumps({"html": "", "imagePrompts": [f"prompt {i}" for i in range(8)]})
    images = DummyImageGenerator()
    pipeline = GenerationPipeline(DummyTextGenerator(raw), images, _settings(hero_image=False, max_image_prompts=3))

    _run(pipeline, GenerationRequest(prompt="A gallery"))

    assert images.prompts == ["prompt 0", "prompt 1", "prompt 2"]


def test_image_failure_uses_fallback_without_aborting():
    raw = json.dumps({"html": '<img data-ai-image="0">', "css": "", "js": "", "imagePrompts": ["A dog"]})
    images = DummyImageGenerator(error=RateLimitedError())
    pipeline = GenerationPipeline(DummyTextGenerator(raw), images, _settings(hero_image=False))

    bundle = _run(pipeline, GenerationRequest(prompt="A dog groomer"))

    assert f'src="{FALLBACK}"' in bundle.html
    assert 'alt="A dog"' in bundle.html


def test_revise_mode_never_calls_image_generator():
    existing = {"html": "<h1>Old</h1>", "css": "h1{}", "js": "console.log(1)"}
    raw = json.dumps(
        {
            "html": '<h1>New</h1><img data-ai-image="0">',
            "css": "h1{color:blue}",
            "js": "",
            "imagePrompts": ["should be ignored"],
        }
    )
    text = DummyTextGenerator(raw)
    images = DummyImageGenerator()
    pipeline = GenerationPipeline(text, images, _settings())
    request = GenerationRequest.model_validate({"prompt": "Make it blue", "existingCode": existing})

    bundle = _run(pipeline, request)

    assert images.prompts == []
    assert bundle.html == '<h1>New</h1><img data-ai-image="0">'
    assert bundle.css == "h1{color:blue}"
    system = text.calls[0]["messages"][0]["content"]
    assert "<h1>Old</h1>" in system
    assert "console.log(1)" in system


def test_hero_image_can_be_disabled():
    text = DummyTextGenerator(json.dumps({"html": "<p>x</p>"}))
    images = DummyImageGenerator()
    pipeline = GenerationPipeline(text, images, _settings(hero_image=False))

    _run(pipeline, GenerationRequest(prompt="A blog"))

    assert images.prompts == []


def test_main_call_errors_propagate():
    pipeline = GenerationPipeline(
        DummyTextGenerator(error=RateLimitedError()),
        DummyImageGenerator(),
        _settings(hero_image=False),
    )
    with pytest.raises(RateLimitedError):
        _run(pipeline, GenerationRequest(prompt="A blog"))


def test_malformed_main_output_propagates():
    pipeline = GenerationPipeline(DummyTextGenerator("not json"), DummyImageGenerator(), _settings(hero_image=False))
    with pytest.raises(MalformedResponseError):
        _run(pipeline, GenerationRequest(prompt="A blog"))
