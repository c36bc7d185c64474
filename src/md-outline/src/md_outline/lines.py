"""Line classification vocabulary shared by both conversion directions.

Markdown lines are classified after their outliner bullet marker has been
removed. Outline lines are measured by their leading tabs, which are the
only indentation unit in outline form.
"""

import re
from enum import Enum
from typing import Optional

OUTLINE_MARKER = "- "
CODE_FENCE = "```"
TABLE_DELIMITER = "|"
HORIZONTAL_RULE = "---"
INDENT = "\t"

# Pseudo-headings end with a full-width colon, e.g. "**用法**：" or "`a`/`b`："
BOLD_TITLE_PATTERN = re.compile(r"^\*\*[^*]+\*\*：")
CODE_TITLE_PATTERN = re.compile(r"^`[^`]+`(?:/`[^`]+`)*：")

_OUTLINE_PREFIX_PATTERN = re.compile(r"^\t*- ")


class LineKind(str, Enum):
    """Classification of a single marker-stripped Markdown line."""

    BLANK = "blank"
    CODE_FENCE = "code_fence"
    TABLE_ROW = "table_row"
    REAL_HEADING = "real_heading"
    PSEUDO_HEADING = "pseudo_heading"
    PLAIN_TEXT = "plain_text"


class PseudoKind(str, Enum):
    """Styling of a pseudo-heading. Bold outranks code."""

    BOLD = "bold"
    CODE = "code"


def strip_marker(line: str) -> str:
    """Strip surrounding whitespace and a leading outliner bullet.

    Args:
        line: Raw input line

    Returns:
        Line text without indentation or "- " marker

    Examples:
        >>> strip_marker("  - ## Title ")
        '## Title'
    """
    stripped = line.strip()
    if stripped.startswith(OUTLINE_MARKER):
        stripped = stripped[len(OUTLINE_MARKER):].strip()
    return stripped


def is_code_fence(text: str) -> bool:
    return text.startswith(CODE_FENCE)


def is_table_row(text: str) -> bool:
    return bool(text.strip()) and TABLE_DELIMITER in text


def heading_level(text: str) -> int:
    """Count the leading '#' characters of a line.

    Whitespace between hashes is skipped, so "# # Title" counts as level 2.
    Any leading '#' counts, including a bare "#tag".

    Args:
        text: Marker-stripped line

    Returns:
        Heading level, 0 when the line is not a heading
    """
    level = 0
    remainder = text
    while remainder.startswith("#"):
        level += 1
        remainder = remainder[1:].strip()
    return level


def pseudo_heading_kind(text: str) -> Optional[PseudoKind]:
    """Detect a bold or code-styled label line ending in a full-width colon.

    Args:
        text: Marker-stripped line with no '#' prefix

    Returns:
        PseudoKind.BOLD, PseudoKind.CODE, or None
    """
    if BOLD_TITLE_PATTERN.match(text):
        return PseudoKind.BOLD
    if CODE_TITLE_PATTERN.match(text):
        return PseudoKind.CODE
    return None


def classify(text: str) -> LineKind:
    """Classify a marker-stripped line, ignoring any surrounding block state."""
    if not text:
        return LineKind.BLANK
    if is_code_fence(text):
        return LineKind.CODE_FENCE
    if is_table_row(text):
        return LineKind.TABLE_ROW
    if heading_level(text) > 0:
        return LineKind.REAL_HEADING
    if pseudo_heading_kind(text) is not None:
        return LineKind.PSEUDO_HEADING
    return LineKind.PLAIN_TEXT


def outline_indent(line: str) -> int:
    """Number of leading tab characters of an outline line."""
    return len(line) - len(line.lstrip(INDENT))


def strip_outline_prefix(line: str) -> str:
    """Remove outline indentation and the bullet marker from a line.

    Lines without a marker (table continuation rows, closing fences) lose
    their indentation through the final strip.
    """
    return _OUTLINE_PREFIX_PATTERN.sub("", line, count=1).strip()
