"""JSDoc comments derived from Directus notes."""

import re
from typing import Optional

from ...core.schema import FieldDescriptor

_LINE_BREAK = re.compile(r"\s*[\r\n\u2028\u2029]+\s*")


def format_jsdoc(text: Optional[str]) -> str:
    """
    Render text as a single-line JSDoc comment.

    Line breaks collapse to single spaces and ``*/`` is escaped so the
    text cannot terminate the comment early.

    Args:
        text: Free-form note, possibly None or blank

    Returns:
        ``/** text */``, or an empty string when there is nothing to say
    """
    if not text or not text.strip():
        return ""
    single_line = _LINE_BREAK.sub(" ", text.strip())
    escaped = single_line.replace("*/", "*\\/")
    return f"/** {escaped} */"


def generate_jsdoc_comment(field: FieldDescriptor) -> str:
    """JSDoc line for a field's note, or an empty string."""
    if field.meta is None:
        return ""
    return format_jsdoc(field.meta.note)
