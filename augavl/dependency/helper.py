"""Binary search tree primitives shared by the AVL tree operations."""
import logging
from typing import Iterator, Optional, Tuple

from augavl.dependency.avl_node import AVLNode
from augavl.dependency.types import TreeStructureError

logger = logging.getLogger(__name__)


class Helper:
    """A wrapper for the helper functions. They are wrapped in a class for neater importing statements."""

    @staticmethod
    def positional_search(root: AVLNode, key: int) -> Optional[AVLNode]:
        """
        Walk down from the root towards the key.

        :param root: The root node of the (sub)tree to search in.
        :param key: The key to search for.
        :return: The node holding the key if it exists, otherwise the last real node on the path, which is where the
            key would be attached. None when the root is absent.
        """
        last = None

        # Stop when stepping onto an absent child.
        while root.is_real():
            last = root
            if key == root.key:
                return root
            elif key < root.key:
                root = root.left
            else:
                root = root.right

        return last

    @staticmethod
    def subtree_min(node: AVLNode) -> AVLNode:
        """Get the node with the smallest key in the subtree rooted at node."""
        while node.left.is_real():
            node = node.left
        return node

    @staticmethod
    def subtree_max(node: AVLNode) -> AVLNode:
        """Get the node with the largest key in the subtree rooted at node."""
        while node.right.is_real():
            node = node.right
        return node

    @staticmethod
    def successor(node: AVLNode) -> Optional[AVLNode]:
        """
        Find the in-order successor of a node.

        :param node: A real node in the tree.
        :return: The node holding the next larger key, None if node holds the largest key.
        """
        # The successor is the smallest key of the right subtree when there is one.
        if node.right.is_real():
            return Helper.subtree_min(node.right)

        # Otherwise climb until we come up from a left child.
        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = node.parent

        return parent

    @staticmethod
    def predecessor(node: AVLNode) -> Optional[AVLNode]:
        """
        Find the in-order predecessor of a node.

        :param node: A real node in the tree.
        :return: The node holding the next smaller key, None if node holds the smallest key.
        """
        if node.left.is_real():
            return Helper.subtree_max(node.left)

        parent = node.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = node.parent

        return parent

    @staticmethod
    def balance_factor(node: AVLNode) -> int:
        """Height of the left subtree minus height of the right subtree."""
        return node.left.height - node.right.height

    @staticmethod
    def is_leaf(node: AVLNode) -> bool:
        return not node.left.is_real() and not node.right.is_real()

    @staticmethod
    def has_one_child(node: AVLNode) -> bool:
        return node.left.is_real() != node.right.is_real()

    @staticmethod
    def in_order(root: AVLNode) -> Iterator[AVLNode]:
        """
        Lazily yield the real nodes of the subtree in ascending key order.

        :param root: The root node of the subtree to walk.
        :return: A generator over the nodes; call again to restart the walk.
        """
        stack = []
        node = root

        while stack or node.is_real():
            # Go as far left as possible, remembering the path.
            while node.is_real():
                stack.append(node)
                node = node.left

            # The top of the stack is the next smallest node.
            node = stack.pop()
            yield node
            node = node.right

    @staticmethod
    def verify(root: AVLNode) -> None:
        """
        Recompute every aggregate from scratch and compare with the cached values.

        :param root: The root node of the tree to check.
        :raises TreeStructureError: When ordering, balance, cached aggregates or parent links are wrong.
        """
        if root.is_real() and root.parent is not None:
            Helper.__fail(f"The root {root.key} has parent {root.parent.key}.")

        Helper.__verify_node(node=root, low=None, high=None)

    @staticmethod
    def __verify_node(node: AVLNode, low: Optional[int], high: Optional[int]) -> Tuple[int, int, int]:
        """Check the subtree at node with keys in the open range (low, high); return its height, size and sum."""
        if not node.is_real():
            return -1, 0, 0

        if (low is not None and node.key <= low) or (high is not None and node.key >= high):
            Helper.__fail(f"Key {node.key} is out of order, expected within ({low}, {high}).")

        # Each real child must point back to this node.
        for child in (node.left, node.right):
            if child.is_real() and child.parent is not node:
                Helper.__fail(f"Node {child.key} does not point back to its parent {node.key}.")

        l_height, l_size, l_sum = Helper.__verify_node(node=node.left, low=low, high=node.key)
        r_height, r_size, r_sum = Helper.__verify_node(node=node.right, low=node.key, high=high)

        height = 1 + max(l_height, r_height)
        size = 1 + l_size + r_size
        key_sum = node.key + l_sum + r_sum

        if abs(l_height - r_height) > 1:
            Helper.__fail(f"Node {node.key} is unbalanced with heights {l_height} and {r_height}.")
        if (node.height, node.subtree_size, node.subtree_sum) != (height, size, key_sum):
            Helper.__fail(
                f"Node {node.key} caches (height, size, sum) = "
                f"{(node.height, node.subtree_size, node.subtree_sum)}, expected {(height, size, key_sum)}."
            )

        return height, size, key_sum

    @staticmethod
    def __fail(message: str) -> None:
        logger.error(message)
        raise TreeStructureError(message)
