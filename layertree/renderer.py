import io
from typing import Any, Callable, Optional, Protocol

from layertree.models import HEAVY_GLYPHS, TreeGlyphs, TreeNode


class Sink(Protocol):
    def write(self, text: str) -> Any: ...


ValueFormatter = Callable[[Sink, Any], Any]


def write_str(sink: Sink, value: Any) -> None:
    sink.write(str(value))


def write_repr(sink: Sink, value: Any) -> None:
    sink.write(repr(value))


class TreeRenderer:
    """
    TreeRenderer draws a layered tree as a connector diagram:
      - render(): writes the diagram into any object with a ``write`` method
      - render_tree(): returns the diagram as a string

    The tree only needs ``root_count()`` and ``get(idx)``, so both a builder and
    a frozen view can be rendered.
    """
    def __init__(self, tree, glyphs: TreeGlyphs = HEAVY_GLYPHS):
        self.tree = tree
        self.glyphs = glyphs

    def render(self, sink: Sink, format_value: ValueFormatter) -> None:
        """
        Write the root marker line, then one line per node in depth-first order.

        Anything raised by ``sink.write`` or ``format_value`` aborts the walk and
        propagates to the caller.
        """
        glyphs = self.glyphs
        sink.write(f"{glyphs.root_marker}\n")

        root_count = self.tree.root_count()
        # entries are (idx, prefix, is_last); pushed in reverse so they pop in ascending order
        stack = [(idx, "", idx == root_count - 1) for idx in reversed(range(root_count))]
        while stack:
            idx, prefix, is_last = stack.pop()
            node: TreeNode = self.tree.get(idx)
            connector = glyphs.corner if is_last else glyphs.tee
            sink.write(f"{prefix}{connector}{glyphs.horizontal}")
            format_value(sink, node.value)
            sink.write("\n")

            if node.children_anchors is not None:
                start, end = node.children_anchors
                child_prefix = prefix + (glyphs.blank if is_last else glyphs.bar)
                for child in reversed(range(start, end)):
                    stack.append((child, child_prefix, child == end - 1))

    def render_tree(self, format_value: Optional[ValueFormatter] = None) -> str:
        """Return the diagram as a string, labelling nodes with ``str`` by default."""
        buffer = io.StringIO()
        self.render(buffer, format_value or write_str)
        return buffer.getvalue()
