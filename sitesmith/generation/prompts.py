"""
Generation Prompts

Instruction text sent to the gateway for new sites, revisions and images.
"""

# ============ Shared Output Format ============

JSON_OUTPUT_FORMAT = """## Output Format

Return a single JSON object with exactly three string fields: "html", "css" and "js".
- "html": the page markup that goes inside <body> (no <style> or <script> tags)
- "css": the complete stylesheet
- "js": the complete script, run after the markup is loaded
Do not wrap the JSON in markdown and do not add explanations."""

JSON_OUTPUT_FORMAT_WITH_IMAGES = """## Output Format

Return a single JSON object with exactly four fields: "html", "css", "js" and "imagePrompts".
- "html": the page markup that goes inside <body> (no <style> or <script> tags)
- "css": the complete stylesheet
- "js": the complete script, run after the markup is loaded
- "imagePrompts": an array of strings, one image description per placeholder index
Do not wrap the JSON in markdown and do not add explanations."""

# ============ New Site Prompt ============

INTERACTIVITY_REQUIREMENTS = """CRITICAL REQUIREMENTS:
- ALL buttons must have working onclick handlers
- ALL forms must have working submit handlers and validation
- ALL navigation links must work properly
- ALL interactive elements must be fully functional
- Include proper event listeners in the JavaScript
- No placeholder or dummy buttons; every interactive element must DO something
- Make it responsive and modern
- Use clean, valid, semantic HTML"""

NEW_SITE_INTRO = (
    "You are a web development expert. Generate a complete, fully functional website "
    "based on the user's description."
)

IMAGE_PLACEHOLDER_RULES = """## Images
- In the HTML, use placeholder image tags like <img data-ai-image="0" alt="description"/> where generated images should be inserted
- Number placeholders from 0; the same number may be reused to show the same image twice
- "imagePrompts" must contain between 1 and {max_images} detailed prompts; prompt N describes the image for data-ai-image="N"
- Use images for hero sections, product displays, backgrounds and feature illustrations
- Each image prompt should be detailed and name a style (e.g. "modern product photo", "abstract background", "professional illustration")"""

# ============ Revise Prompt ============

REVISE_INTRO = (
    "You are a web development expert. The user wants to modify their existing website. "
    "Apply the requested change and return the full updated code."
)

REVISE_RULES = """RULES:
- The output is a complete replacement of all three fields, not a diff or a fragment
- Keep every part of the current code the request does not mention
- Keep existing image URLs unless the request asks to change them
- Every interactive element must keep a working handler"""

CURRENT_CODE_HEADING = "## Current code"

CURRENT_CODE_TEMPLATE = """{heading}

HTML:
{html}

CSS:
{css}

JS:
{js}"""

# ============ User Turns ============

NEW_SITE_USER_TEMPLATE = "User's description: {prompt}"

REVISE_USER_TEMPLATE = "User's modification request: {prompt}"

HERO_IMAGE_INSTRUCTION = (
    "Use this exact image URL as the primary hero/banner image of the page: {url}\n"
    'Give that image the alt text "{alt}".'
)

REFERENCE_IMAGE_NEW_INSTRUCTION = (
    "The attached image is a design reference. Use it as inspiration for layout, colour palette "
    "and typography only; do not reproduce it literally or embed it as an asset."
)

REFERENCE_IMAGE_REVISE_INSTRUCTION = (
    "The attached image is a design reference for this change. Apply its style only where the "
    "modification request asks for it and keep the rest of the current code intact; never discard "
    "the existing site in favour of the reference. Do not embed the image itself as an asset."
)

# ============ Image Prompts ============

HERO_IMAGE_PROMPT = (
    "Wide hero banner image for a website about: {description}. "
    "Professional, high quality, landscape orientation, no text or lettering."
)


def get_output_format(with_images: bool) -> str:
    return JSON_OUTPUT_FORMAT_WITH_IMAGES if with_images else JSON_OUTPUT_FORMAT


def get_image_placeholder_rules(max_images: int) -> str:
    return IMAGE_PLACEHOLDER_RULES.format(max_images=max(1, int(max_images)))


__all__ = [
    "CURRENT_CODE_HEADING",
    "CURRENT_CODE_TEMPLATE",
    "HERO_IMAGE_INSTRUCTION",
    "HERO_IMAGE_PROMPT",
    "IMAGE_PLACEHOLDER_RULES",
    "INTERACTIVITY_REQUIREMENTS",
    "JSON_OUTPUT_FORMAT",
    "JSON_OUTPUT_FORMAT_WITH_IMAGES",
    "NEW_SITE_INTRO",
    "NEW_SITE_USER_TEMPLATE",
    "REFERENCE_IMAGE_NEW_INSTRUCTION",
    "REFERENCE_IMAGE_REVISE_INSTRUCTION",
    "REVISE_INTRO",
    "REVISE_RULES",
    "REVISE_USER_TEMPLATE",
    "get_image_placeholder_rules",
    "get_output_format",
]
