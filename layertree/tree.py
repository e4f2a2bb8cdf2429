"""
Layered tree storage.

Nodes live in one flat list and refer to each other by index. A tree is
grown one layer at a time by a ``LayeredTreeBuilder`` and then handed out as
a read-only ``LayeredTree`` via ``freeze()``.
"""

import logging
from typing import Callable, Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from layertree.errors import TreeFrozenError
from layertree.models import TreeNode
from layertree.renderer import TreeRenderer, write_repr, write_str

logger = logging.getLogger(__name__)

T = TypeVar("T")

Expand = Callable[[T], Optional[Iterable[T]]]


class _NodeStore(Generic[T]):
    """Read operations shared by the builder and the frozen view."""

    def __init__(self, nodes: Sequence[TreeNode], root_count: int):
        self._nodes = nodes
        self._root_count = root_count

    def len(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def root_count(self) -> int:
        return self._root_count

    def is_empty(self) -> bool:
        return not self._nodes

    def get(self, idx: int) -> Optional[TreeNode]:
        """Return the node at ``idx`` or None when it is out of range."""
        if 0 <= idx < len(self._nodes):
            return self._nodes[idx]
        return None

    def iter(self) -> Iterator[TreeNode]:
        """Fresh iterator over all nodes in storage order."""
        return iter(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return self.iter()


class LayeredTree(_NodeStore[T]):
    """
    Read-only view of a finished tree.

    Produced by ``LayeredTreeBuilder.freeze()``; has no mutating operations and
    can be shared freely once built.
    """

    def __init__(self, nodes: Tuple[TreeNode, ...], root_count: int):
        super().__init__(tuple(nodes), root_count)

    def roots(self) -> List[TreeNode]:
        return list(self._nodes[:self._root_count])

    def children(self, idx: int) -> List[TreeNode]:
        """Direct children of the node at ``idx``; empty for leaves and unknown indices."""
        node = self.get(idx)
        if node is None or node.children_anchors is None:
            return []
        start, end = node.children_anchors
        return list(self._nodes[start:end])

    def layer_count(self) -> int:
        if not self._nodes:
            return 0
        return self._nodes[-1].layer + 1

    def __str__(self) -> str:
        return TreeRenderer(self).render_tree(write_str)

    def __repr__(self) -> str:
        return TreeRenderer(self).render_tree(write_repr)


class LayeredTreeBuilder(_NodeStore[T]):
    """
    Mutable tree under construction.

    Starts with one layer-0 node per root value. ``add_layer`` appends the
    children of the current deepest layer; nothing else is ever modified
    except the ``children_anchors`` of the expanded nodes.
    """

    def __init__(self, roots: Iterable[T] = ()):
        nodes = [TreeNode(value=value, idx=idx) for idx, value in enumerate(roots)]
        super().__init__(nodes, len(nodes))
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_open(self):
        if self._frozen:
            raise TreeFrozenError("tree has been frozen, it can no longer be modified")

    def iter_mut(self) -> Iterator[TreeNode]:
        """Storage-order iterator for use during the build phase."""
        self._ensure_open()
        return iter(self._nodes)

    def _frontier_start(self) -> int:
        # layers are contiguous, so the frontier is the trailing run of the last layer
        last_layer = self._nodes[-1].layer
        start = len(self._nodes)
        while start > 0 and self._nodes[start - 1].layer == last_layer:
            start -= 1
        return start

    def add_layer(self, expand: Expand) -> int:
        """
        Expand every node of the deepest layer once and append the results.

        ``expand`` is called with each frontier value in storage order and may
        return None or an empty iterable for a leaf. The new nodes are only
        committed once every call has returned, so an exception raised by
        ``expand`` leaves the tree untouched.

        Returns the number of nodes appended.
        """
        self._ensure_open()
        if not self._nodes:
            return 0

        frontier_start = self._frontier_start()
        frontier_end = len(self._nodes)
        new_layer = self._nodes[-1].layer + 1

        new_nodes: List[TreeNode] = []
        anchors = {}
        next_idx = frontier_end
        for pos in range(frontier_start, frontier_end):
            node = self._nodes[pos]
            produced = expand(node.value)
            if produced is None:
                continue
            start = next_idx
            for value in produced:
                new_nodes.append(TreeNode(value=value, idx=next_idx, layer=new_layer, parent=node.idx))
                next_idx += 1
            if next_idx != start:
                anchors[pos] = (start, next_idx)

        for pos, span in anchors.items():
            self._nodes[pos] = self._nodes[pos].model_copy(update={"children_anchors": span})
        self._nodes.extend(new_nodes)

        logger.debug(
            "layer %d: expanded %d frontier nodes, appended %d",
            new_layer, frontier_end - frontier_start, len(new_nodes),
        )
        return len(new_nodes)

    def add_layers_recursively(self, expand: Expand) -> int:
        """
        Call ``add_layer`` until a pass appends nothing.

        Only terminates if ``expand`` eventually returns nothing along every
        path. Returns the total number of nodes appended.
        """
        self._ensure_open()
        total = 0
        while True:
            added = self.add_layer(expand)
            if not added:
                break
            total += added
        logger.debug("fixpoint reached with %d nodes (%d appended)", len(self._nodes), total)
        return total

    def freeze(self) -> LayeredTree[T]:
        """Finish the build phase and return a read-only view."""
        self._frozen = True
        return LayeredTree(tuple(self._nodes), self._root_count)
