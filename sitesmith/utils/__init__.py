from .html import (
    build_img_tag,
    extract_body,
    find_placeholder_indices,
    replace_image_placeholder,
    replace_image_placeholders,
    wrap_document,
)

__all__ = [
    "build_img_tag",
    "extract_body",
    "find_placeholder_indices",
    "replace_image_placeholder",
    "replace_image_placeholders",
    "wrap_document",
]
