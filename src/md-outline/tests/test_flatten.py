"""Tests for flattening content-node trees."""

from structlog.testing import capture_logs

from md_outline.flatten import extract_content, tree_to_markdown, walk_forest
from md_outline.tree import ContentNode


def chain(length: int) -> ContentNode:
    """Build a single branch of nested nodes named 0..length-1."""
    root = ContentNode("0")
    node = root
    for i in range(1, length):
        node = node.add_child(str(i))
    return root


class TestWalkForest:
    """Tests for the bounded pre-order walk."""

    def test_preorder_with_depths(self):
        a = ContentNode("A", children=[ContentNode("B", children=[ContentNode("C")])])
        d = ContentNode("D")

        walked = [(node.content, depth) for node, depth in walk_forest([a, d])]
        assert walked == [("A", 0), ("B", 1), ("C", 2), ("D", 0)]

    def test_max_depth_truncates_branch(self):
        with capture_logs() as logs:
            walked = [node.content for node, _ in walk_forest([chain(15)], max_depth=10)]

        assert walked == [str(i) for i in range(11)]
        assert [log["event"] for log in logs] == ["max_depth_exceeded"]
        assert logs[0]["log_level"] == "warning"

    def test_cycle_is_skipped(self):
        a = ContentNode("a", uuid="a")
        b = a.add_child("b")
        b.uuid = "b"
        b.children.append(a)

        with capture_logs() as logs:
            walked = [node.content for node, _ in walk_forest([a])]

        assert walked == ["a", "b"]
        assert logs[0]["event"] == "cycle_detected"
        assert logs[0]["node_id"] == "a"

    def test_self_reference_without_uuid(self):
        a = ContentNode("a")
        a.children.append(a)

        with capture_logs():
            assert [node.content for node, _ in walk_forest([a])] == ["a"]

    def test_repeated_sibling_is_not_a_cycle(self):
        shared = ContentNode("shared", uuid="s")
        parent = ContentNode("p", uuid="p", children=[shared, shared])

        assert [node.content for node, _ in walk_forest([parent])] == ["p", "shared", "shared"]

    def test_prune_skips_subtree(self):
        skipped = ContentNode("skip", children=[ContentNode("hidden")])
        walked = walk_forest([skipped, ContentNode("kept")], prune=lambda n: n.content == "skip")

        assert [node.content for node, _ in walked] == ["kept"]


class TestTreeToMarkdown:
    """Tests for tree_to_markdown."""

    def test_flat_preorder_output(self):
        forest = [
            ContentNode("# Title", children=[
                ContentNode("## Section", children=[ContentNode("text")]),
            ]),
            ContentNode("tail"),
        ]
        assert tree_to_markdown(forest) == "# Title\n## Section\ntext\ntail\n"

    def test_empty_forest(self):
        assert tree_to_markdown([]) == ""

    def test_marker_stripped_and_trimmed(self):
        forest = [ContentNode("- item"), ContentNode("  -   spaced  ")]
        assert tree_to_markdown(forest) == "item\nspaced\n"

    def test_horizontal_rules_skipped_with_children(self):
        forest = [
            ContentNode("before"),
            ContentNode("---", children=[ContentNode("hidden")]),
            ContentNode("- ---"),
            ContentNode("after"),
        ]
        assert tree_to_markdown(forest) == "before\nafter\n"

    def test_empty_node_children_still_emitted(self):
        forest = [ContentNode("", children=[ContentNode("child")])]
        assert tree_to_markdown(forest) == "child\n"

    def test_code_indentation_kept_inside_fence(self):
        forest = [
            ContentNode("- ```python"),
            ContentNode("-     indented()"),
            ContentNode("```"),
            ContentNode("-     outside"),
        ]
        assert tree_to_markdown(forest) == "```python\n    indented()\n```\noutside\n"

    def test_whole_code_block_node_closes_fence(self):
        forest = [
            ContentNode("- ```sh\n  ls\n```"),
            ContentNode("-   after"),
        ]
        assert tree_to_markdown(forest) == "```sh\n  ls\n```\nafter\n"

    def test_balanced_inline_fences_do_not_open_a_block(self):
        forest = [
            ContentNode("- use ```x``` here"),
            ContentNode("-   trimmed"),
        ]
        assert tree_to_markdown(forest) == "use ```x``` here\ntrimmed\n"

    def test_depth_limit_applies(self):
        with capture_logs():
            markdown = tree_to_markdown([chain(5)], max_depth=2)
        assert markdown == "0\n1\n2\n"


class TestExtractContent:
    """Tests for extract_content."""

    def test_keeps_content_untrimmed(self):
        forest = [
            ContentNode("- # Title", children=[ContentNode("-   indented"), ContentNode("---")]),
        ]
        assert extract_content(forest) == "# Title\n  indented\n---\n"

    def test_multiline_node_content(self):
        forest = [ContentNode("```js\nlet x\n```")]
        assert extract_content(forest) == "```js\nlet x\n```\n"

    def test_cycle_guard(self):
        a = ContentNode("a", uuid="a")
        a.children.append(a)
        with capture_logs():
            assert extract_content([a]) == "a\n"
