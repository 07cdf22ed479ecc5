from __future__ import annotations

from paperdraft.prompts.builders import (
    NO_CONTENT_AVAILABLE,
    PAPER_TITLE_PLACEHOLDER,
    build_abstract_prompt,
    build_caption_prompt,
    build_rewrite_prompt,
    build_section_prompt,
    build_title_prompt,
)
from paperdraft.prompts.system import (
    ABSTRACT_SYSTEM_PROMPT,
    CAPTION_SYSTEM_PROMPT,
    REWRITE_SYSTEM_PROMPT,
    SECTION_SYSTEM_PROMPT,
    TITLE_SYSTEM_PROMPT,
)

__all__ = [
    "ABSTRACT_SYSTEM_PROMPT",
    "CAPTION_SYSTEM_PROMPT",
    "NO_CONTENT_AVAILABLE",
    "PAPER_TITLE_PLACEHOLDER",
    "REWRITE_SYSTEM_PROMPT",
    "SECTION_SYSTEM_PROMPT",
    "TITLE_SYSTEM_PROMPT",
    "build_abstract_prompt",
    "build_caption_prompt",
    "build_rewrite_prompt",
    "build_section_prompt",
    "build_title_prompt",
]
