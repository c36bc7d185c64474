"""Markdown to outline conversion.

A single left-to-right pass over the document classifies every line and
infers its nesting depth from real headings ("#" runs), pseudo-headings
(bold or code-styled labels ending in a full-width colon), fenced code
blocks and tables. The inferred hierarchy is serialized as tab indentation
with one "- " bullet per outline item.

The result is a plausible, locally consistent nesting. Nothing is
validated: unbalanced fences or odd heading levels degrade to best-effort
indentation and the conversion never raises.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from md_outline.lines import (
    INDENT,
    OUTLINE_MARKER,
    LineKind,
    PseudoKind,
    classify,
    heading_level,
    pseudo_heading_kind,
    strip_marker,
)

_CODE_LINE_MARKER = re.compile(r"^(\s*)- ")


@dataclass(frozen=True)
class OutlineLine:
    """One emitted outline row.

    Attributes:
        depth: Number of leading tabs
        marker: "- " for the first line of an outline item, "" otherwise
        text: Line text (verbatim for code block interiors)
    """

    depth: int
    marker: str
    text: str

    def render(self) -> str:
        return f"{INDENT * self.depth}{self.marker}{self.text}"


BLANK_LINE = OutlineLine(depth=0, marker="", text="")


@dataclass(frozen=True)
class PseudoHeaderState:
    """The most recently emitted pseudo-heading and its synthetic level."""

    kind: PseudoKind
    level: int


@dataclass
class ClassifierState:
    """Nesting state for one conversion; discarded when it returns.

    header_stack holds the level of every real heading that is still an
    open ancestor of the current line, most recent last.
    """

    header_stack: list[int] = field(default_factory=list)
    last_real_level: int = 0
    pseudo: Optional[PseudoHeaderState] = None
    in_code_block: bool = False
    code_indent: int = 0
    in_table: bool = False
    table_indent: int = 0

    @property
    def base_depth(self) -> int:
        return len(self.header_stack)

    def open_heading(self, level: int) -> int:
        """Record a real heading and return its outline depth."""
        if level == 1:
            self.header_stack = [1]
        else:
            while self.header_stack and level <= self.header_stack[-1]:
                self.header_stack.pop()
            self.header_stack.append(level)
        self.last_real_level = level
        self.pseudo = None
        return len(self.header_stack) - 1

    def pseudo_level(self, kind: PseudoKind) -> int:
        """Synthetic level of a pseudo-heading of the given kind.

        Bold labels always sit directly under the nearest real heading.
        Code labels stay level with a preceding code label and sit one level
        below a preceding bold label.
        """
        previous = self.pseudo
        if previous is None or kind is PseudoKind.BOLD:
            return self.last_real_level + 1
        if previous.kind is PseudoKind.CODE:
            return previous.level
        return previous.level + 1

    def open_pseudo_heading(self, kind: PseudoKind) -> int:
        """Record a pseudo-heading and return its outline depth."""
        level = self.pseudo_level(kind)
        self.pseudo = PseudoHeaderState(kind=kind, level=level)
        return self.base_depth + (level - self.last_real_level - 1)

    @property
    def text_depth(self) -> int:
        depth = self.base_depth
        if self.pseudo is not None:
            depth += self.pseudo.level - self.last_real_level
        return depth


def iter_outline_lines(markdown: str) -> Iterator[OutlineLine]:
    """Classify Markdown lines and yield the outline rows they become.

    Args:
        markdown: Markdown document (outliner bullets are tolerated)

    Yields:
        OutlineLine for every input line, in document order
    """
    if not markdown.strip():
        return

    state = ClassifierState()

    for line in markdown.strip().split("\n"):
        stripped = strip_marker(line)
        kind = classify(stripped)

        if kind is LineKind.CODE_FENCE:
            if not state.in_code_block:
                state.in_code_block = True
                state.code_indent = state.base_depth
                yield OutlineLine(state.code_indent, OUTLINE_MARKER, stripped)
            else:
                state.in_code_block = False
                yield OutlineLine(state.code_indent, "", stripped)
                state.code_indent = 0
            continue

        if state.in_code_block:
            # Code is reproduced verbatim, only an outliner bullet is dropped
            if line.strip().startswith(OUTLINE_MARKER):
                line = _CODE_LINE_MARKER.sub(r"\1", line, count=1)
            yield OutlineLine(0, "", line)
            continue

        if kind is LineKind.TABLE_ROW:
            if not state.in_table:
                state.in_table = True
                state.table_indent = state.base_depth
                yield OutlineLine(state.table_indent, OUTLINE_MARKER, stripped)
            else:
                yield OutlineLine(state.table_indent, "", stripped)
            continue
        if state.in_table:
            state.in_table = False
            state.table_indent = 0

        if kind is LineKind.BLANK:
            yield BLANK_LINE
            continue

        if kind is LineKind.REAL_HEADING:
            level = heading_level(stripped)
            depth = state.open_heading(level)
            if level == 1:
                yield OutlineLine(0, "", stripped)
            else:
                yield OutlineLine(depth, OUTLINE_MARKER, stripped)
            continue

        if kind is LineKind.PSEUDO_HEADING:
            depth = state.open_pseudo_heading(pseudo_heading_kind(stripped))
            yield OutlineLine(depth, OUTLINE_MARKER, stripped)
            continue

        yield OutlineLine(state.text_depth, OUTLINE_MARKER, stripped)


def convert_to_outline(markdown: str) -> str:
    """Convert a Markdown document to tab-indented outline form.

    Level-1 headings are kept verbatim at column zero. Every other non-blank
    line becomes an indented "- " bullet, except the interior rows of code
    blocks and tables, which follow their opening bullet without a marker.

    Args:
        markdown: Markdown document

    Returns:
        Outline text; "" for empty or whitespace-only input

    Examples:
        >>> convert_to_outline("# A\\n## B\\ntext")
        '# A\\n\\t- ## B\\n\\t\\t- text'
    """
    return "\n".join(line.render() for line in iter_outline_lines(markdown))
