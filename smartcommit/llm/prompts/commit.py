"""User prompt template for drafting a commit message from a diff."""

# Characters of diff sent to the model
MAX_DIFF_CHARS = 3000

TRUNCATION_MARKER = "\n... (truncated)"

USER_PROMPT_TEMPLATE = """Generate a commit message for these changes:

Files changed:
{files}

Diff:
{diff}

Provide only the commit message, no explanations."""


def truncate_diff(diff: str, max_chars: int = MAX_DIFF_CHARS) -> str:
    """Cut the diff to max_chars, appending a marker when anything was dropped."""
    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER


def build_user_prompt(diff: str, files: str) -> str:
    """Build the user prompt from the diff and the changed-file listing.

    Args:
        diff: Raw diff text. Truncated to MAX_DIFF_CHARS.
        files: Raw listing of changed files.

    Returns:
        The formatted user prompt.
    """
    return USER_PROMPT_TEMPLATE.format(files=files, diff=truncate_diff(diff))
