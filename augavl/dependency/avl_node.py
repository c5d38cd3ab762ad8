"""Defines the node of the augmented AVL tree and the shared absent node used in place of missing children."""
from __future__ import annotations

import logging
from typing import Any, Optional

from augavl.dependency.types import ABSENT_KEY, KVPair, TreeStructureError

logger = logging.getLogger(__name__)


class AVLNode:
    __slots__ = ("key", "value", "left", "right", "parent", "height", "subtree_size", "subtree_sum")

    def __init__(self, kv_pair: KVPair, parent: Optional[AVLNode] = None):
        """
        Given a key-value pair, create a new leaf node.

        Besides the usual links, each node caches three aggregates of the subtree rooted at it:
            - height, which is 0 for a leaf.
            - subtree_size, the number of real nodes in the subtree.
            - subtree_sum, the sum of all real keys in the subtree.
        Missing children point to the shared ABSENT node, so the aggregates of a child can always be read.
        :param kv_pair: A KVPair containing key and value.
        :param parent: The node this leaf is attached under, None for a root.
        """
        self.key: int = kv_pair.key
        self.value: Any = kv_pair.value
        self.left: AVLNode = ABSENT
        self.right: AVLNode = ABSENT
        self.parent: Optional[AVLNode] = parent
        self.height: int = 0
        self.subtree_size: int = 1
        self.subtree_sum: int = kv_pair.key

    def __repr__(self) -> str:
        return f"AVLNode(key={self.key!r}, height={self.height}, size={self.subtree_size}, sum={self.subtree_sum})"

    def is_real(self) -> bool:
        """Whether this node holds a key, i.e. it is not the absent node."""
        return True

    def to_kv_pair(self) -> KVPair:
        """Pack the key and value of this node into a KVPair."""
        return KVPair(key=self.key, value=self.value)

    def refresh(self) -> bool:
        """
        Recompute the cached aggregates from the two children.

        :return: True if the height of the node changed, False otherwise.
        """
        self.subtree_size = 1 + self.left.subtree_size + self.right.subtree_size
        self.subtree_sum = self.key + self.left.subtree_sum + self.right.subtree_sum

        height = 1 + max(self.left.height, self.right.height)
        if height == self.height:
            return False

        self.height = height
        return True


class _AbsentNode(AVLNode):
    """The placeholder for a missing child; there is exactly one instance and it never changes."""
    __slots__ = ()

    def __init__(self):
        # Attributes are written through object.__setattr__ since regular assignment is blocked below.
        for name, value in (
                ("key", ABSENT_KEY),
                ("value", None),
                ("left", self),
                ("right", self),
                ("parent", None),
                ("height", -1),
                ("subtree_size", 0),
                ("subtree_sum", 0),
        ):
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        logger.error("Attempted to set %s on the absent node.", name)
        raise TreeStructureError(f"The absent node is immutable, cannot set {name}.")

    def __repr__(self) -> str:
        return "ABSENT"

    def is_real(self) -> bool:
        return False

    def refresh(self) -> bool:
        return False


ABSENT: AVLNode = _AbsentNode()
