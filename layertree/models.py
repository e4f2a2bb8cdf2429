"""
where we store the
pydantic Data Structure classes
for the layered tree

"""

from pydantic import BaseModel, ConfigDict
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class TreeNode(BaseModel, Generic[T]):
    """
    One entry of a layered tree's flat storage.

    Relationships are plain indices into the owning tree: ``parent`` points
    backward to a shallower node and ``children_anchors`` is the half-open
    ``[start, end)`` block holding the direct children.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T
    idx: int
    layer: int = 0
    parent: Optional[int] = None
    children_anchors: Optional[Tuple[int, int]] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return self.children_anchors is None

    def children_range(self) -> range:
        """Indices of the direct children, empty for a leaf."""
        if self.children_anchors is None:
            return range(0)
        start, end = self.children_anchors
        return range(start, end)


class TreeGlyphs(BaseModel):
    """Box-drawing pieces used to draw connectors and indentation."""
    model_config = ConfigDict(frozen=True)

    root_marker: str = "root"
    tee: str = "┣"
    corner: str = "┗"
    horizontal: str = "━"
    bar: str = "┃ "
    blank: str = "  "


HEAVY_GLYPHS = TreeGlyphs()

ASCII_GLYPHS = TreeGlyphs(
    root_marker=".",
    tee="├",
    corner="└",
    horizontal="── ",
    bar="│   ",
    blank="    ",
)
