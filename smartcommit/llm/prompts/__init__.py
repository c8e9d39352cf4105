"""LLM prompt templates for commit message generation.

- system: The shared system prompt for all providers
- commit: The user prompt embedding the file list and truncated diff
"""

from smartcommit.llm.prompts.system import SYSTEM_PROMPT
from smartcommit.llm.prompts.commit import (
    MAX_DIFF_CHARS,
    TRUNCATION_MARKER,
    USER_PROMPT_TEMPLATE,
    build_user_prompt,
    truncate_diff,
)


__all__ = [
    "SYSTEM_PROMPT",
    "MAX_DIFF_CHARS",
    "TRUNCATION_MARKER",
    "USER_PROMPT_TEMPLATE",
    "build_user_prompt",
    "truncate_diff",
]
