"""Logseq page file parsing and rendering.

Logseq stores a page as an outline of "- " bullets indented with tabs (or
spaces). A block's extra lines follow its bullet, indented by the bullet's
indentation plus two spaces. Code fences are never split into blocks.
"""

import uuid
from dataclasses import dataclass, field

from md_outline.tree import ContentNode

CONTINUATION_INDENT = "  "


@dataclass
class PageFile:
    """Parsed Logseq page file.

    Attributes:
        blocks: Root blocks in document order
        frontmatter: Lines before the first bullet (page properties)
        indent_str: Indentation unit detected from the source
    """

    blocks: list[ContentNode]
    frontmatter: list[str] = field(default_factory=list)
    indent_str: str = "\t"


def _is_bullet_line(line: str) -> bool:
    stripped = line.lstrip()
    return stripped == "-" or stripped.startswith("- ")


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _toggles_fence(text: str) -> bool:
    """True for a line opening or closing a fence; inline ```code``` is balanced."""
    text = text.lstrip()
    return text.startswith("```") and text.count("```") % 2 == 1


def _block_id(content_lines: list[str]) -> str:
    """Use the id:: property as identity, or assign a fresh one."""
    for line in content_lines:
        key, sep, value = line.strip().partition("::")
        if sep and key.strip() == "id" and value.strip():
            return value.strip()
    return str(uuid.uuid4())


def detect_indentation(lines: list[str]) -> str:
    """Detect the indentation unit from the shortest indented bullet.

    Args:
        lines: Lines of the page file

    Returns:
        Indentation string, a tab when nothing is indented
    """
    indents = [
        _leading_whitespace(line)
        for line in lines
        if line.strip() and _is_bullet_line(line) and line != line.lstrip()
    ]
    if not indents:
        return "\t"
    return min(indents, key=len)


def parse_page(text: str) -> PageFile:
    """Parse a Logseq page file into a block forest.

    Args:
        text: Page file contents

    Returns:
        PageFile with root blocks, frontmatter and indentation unit
    """
    if not text.strip():
        return PageFile(blocks=[])

    lines = text.split("\n")
    indent_str = detect_indentation(lines)
    frontmatter: list[str] = []
    roots: list[ContentNode] = []
    stack: list[tuple[int, ContentNode]] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        if not _is_bullet_line(line):
            if not roots:
                frontmatter.append(line)
            i += 1
            continue

        leading = _leading_whitespace(line)
        level = leading.count(indent_str)
        stripped = line.lstrip()
        content_lines = ["" if stripped == "-" else stripped[2:]]
        continuation_base = leading + CONTINUATION_INDENT

        j = i + 1
        in_code_fence = _toggles_fence(content_lines[0])
        while j < len(lines):
            next_line = lines[j]
            if _toggles_fence(next_line):
                in_code_fence = not in_code_fence

            if not in_code_fence and _is_bullet_line(next_line):
                next_leading = _leading_whitespace(next_line)
                next_level = next_leading.count(indent_str)
                # Mixed indentation (tab plus spaces) is bullet-like content
                if next_level > level or next_leading == indent_str * next_level:
                    break

            if next_line.startswith(continuation_base):
                content_lines.append(next_line[len(continuation_base):])
            else:
                content_lines.append(next_line.lstrip())
            j += 1

        while len(content_lines) > 1 and not content_lines[-1].strip():
            content_lines.pop()

        block = ContentNode(content="\n".join(content_lines), uuid=_block_id(content_lines))

        while stack and stack[-1][0] >= level:
            stack.pop()
        if level > 0 and stack and stack[-1][0] == level - 1:
            stack[-1][1].children.append(block)
        else:
            # Root level, or malformed indentation
            roots.append(block)
            stack = []
        stack.append((level, block))

        i = j

    return PageFile(blocks=roots, frontmatter=frontmatter, indent_str=indent_str)


def render_page(page: PageFile) -> str:
    """Render a page back to Logseq file format.

    Args:
        page: Parsed (and possibly modified) page

    Returns:
        Page file contents ending with a newline
    """
    lines = list(page.frontmatter)

    def render_block(block: ContentNode, depth: int) -> None:
        indent = page.indent_str * depth
        first, *rest = block.content.split("\n")
        lines.append(f"{indent}- {first}" if first else f"{indent}-")
        for line in rest:
            lines.append(f"{indent}{CONTINUATION_INDENT}{line}" if line else "")
        for child in block.children:
            render_block(child, depth + 1)

    for block in page.blocks:
        render_block(block, 0)

    return "\n".join(lines) + "\n"
