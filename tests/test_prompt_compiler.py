from sitesmith.config import Settings
from sitesmith.generation.compiler import PromptCompiler
from sitesmith.generation.images import GeneratedImage
from sitesmith.generation.modes import ModeNew, ModeRevise, resolve_mode
from sitesmith.generation.prompts import CURRENT_CODE_HEADING, INTERACTIVITY_REQUIREMENTS
from sitesmith.schemas.generation import CodeBundle, GenerationRequest


def _compiler(**overrides) -> PromptCompiler:
    values = dict(gateway_api_key="test-key", inline_images=True, max_image_prompts=5)
    values.update(overrides)
    return PromptCompiler(Settings(**values))


def test_new_mode_lists_interactivity_requirements_without_current_code():
    compiled = _compiler().compile(ModeNew(prompt="A bakery landing page"))

    assert INTERACTIVITY_REQUIREMENTS in compiled.system_instruction
    assert "onclick" in compiled.system_instruction
    assert CURRENT_CODE_HEADING not in compiled.system_instruction
    assert compiled.user_turns == ["User's description: A bakery landing page"]


def test_new_mode_asks_for_image_placeholders_when_enabled():
    compiled = _compiler(max_image_prompts=3).compile(ModeNew(prompt="A bakery"))

    assert 'data-ai-image="0"' in compiled.system_instruction
    assert "imagePrompts" in compiled.system_instruction
    assert "between 1 and 3" in compiled.system_instruction


def test_new_mode_without_inline_images_only_requests_three_fields():
    compiled = _compiler(inline_images=False).compile(ModeNew(prompt="A bakery"))

    assert "imagePrompts" not in compiled.system_instruction
    assert "data-ai-image" not in compiled.system_instruction
    assert '"html", "css" and "js"' in compiled.system_instruction


def test_revise_mode_embeds_current_code_verbatim():
    existing = CodeBundle(
        html='<nav class="top">{{ menu }}</nav>',
        css="nav { display: flex; }",
        js="document.querySelector('nav').addEventListener('click', () => {});",
    )
    compiled = _compiler().compile(ModeRevise(prompt="Make the nav sticky", existing_code=existing))

    assert CURRENT_CODE_HEADING in compiled.system_instruction
    assert existing.html in compiled.system_instruction
    assert existing.css in compiled.system_instruction
    assert existing.js in compiled.system_instruction
    assert "not a diff" in compiled.system_instruction
    assert "imagePrompts" not in compiled.system_instruction
    assert compiled.user_turns == ["User's modification request: Make the nav sticky"]


def test_hero_image_is_referenced_in_user_turn():
    hero = GeneratedImage(prompt_text="hero", url="https://img.test/hero.png", alt_text="Sunny bakery counter")
    compiled = _compiler().compile(ModeNew(prompt="A bakery"), hero_image=hero)

    turn = compiled.user_turns[0]
    assert "https://img.test/hero.png" in turn
    assert '"Sunny bakery counter"' in turn


def test_reference_image_makes_multipart_user_turn():
    image = "data:image/png;base64,iVBORw0KGgo="
    compiled = _compiler().compile(ModeNew(prompt="A bakery", reference_image=image))

    parts = compiled.user_turns[0]
    assert parts[0]["type"] == "text"
    assert "inspiration" in parts[0]["text"]
    assert parts[1] == {"type": "image_url", "image_url": {"url": image}}


def test_reference_image_in_revise_mode_keeps_existing_code():
    existing = CodeBundle(html="<main></main>", css="", js="")
    mode = ModeRevise(prompt="Match this style", existing_code=existing, reference_image="https://img.test/ref.png")
    parts = _compiler().compile(mode).user_turns[0]

    assert "never discard" in parts[0]["text"]
    assert parts[1]["image_url"]["url"] == "https://img.test/ref.png"


def test_to_messages_puts_system_first():
    compiled = _compiler().compile(ModeNew(prompt="A bakery"))
    messages = compiled.to_messages()

    assert messages[0] == {"role": "system", "content": compiled.system_instruction}
    assert messages[1] == {"role": "user", "content": "User's description: A bakery"}


def test_resolve_mode_uses_existing_code_presence():
    new_request = GenerationRequest(prompt="A bakery")
    revise_request = GenerationRequest.model_validate(
        {"prompt": "Darker", "existingCode": {"html": "<p>x</p>", "css": "", "js": ""}}
    )

    assert isinstance(resolve_mode(new_request), ModeNew)
    mode = resolve_mode(revise_request)
    assert isinstance(mode, ModeRevise)
    assert mode.existing_code.html == "<p>x</p>"
