"""Defines the AVL tree over distinct positive integer keys, augmented with subtree sizes and subtree key sums."""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Iterator, List, Optional

from scipy.constants import golden

from augavl.dependency.avl_node import ABSENT, AVLNode
from augavl.dependency.helper import Helper
from augavl.dependency.types import MIN_KEY, NOT_FOUND, KVPair, TreeStructureError

logger = logging.getLogger(__name__)


class AVLTree:
    """
    Defines the augmented AVL tree.

    Besides search, insert and delete, the tree answers the following in logarithmic time or better:
        - min and max, from the cached minimum and maximum nodes.
        - select, the value of the i-th smallest key.
        - count_at_most, the sum of all keys less than or equal to some threshold.
    The tree is not thread safe; callers must serialize access.
    """

    def __init__(self):
        """An empty tree has the absent node as its root and no min or max node."""
        self.__root: AVLNode = ABSENT
        self.__min_node: Optional[AVLNode] = None
        self.__max_node: Optional[AVLNode] = None
        self.__rotation_count: int = 0

    @classmethod
    def from_kv_pairs(cls, kv_pairs: Iterable[KVPair]) -> AVLTree:
        """
        Build a tree by inserting the key-value pairs in the given order.

        :param kv_pairs: An iterable of KVPairs; pairs with a repeated or non-positive key are skipped.
        :return: The new AVL tree.
        """
        tree = cls()
        for kv_pair in kv_pairs:
            tree.insert(key=kv_pair.key, value=kv_pair.value)
        return tree

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: int) -> bool:
        if self.is_empty():
            return False
        return Helper.positional_search(self.__root, key).key == key

    def __iter__(self) -> Iterator[int]:
        return (node.key for node in Helper.in_order(self.__root))

    @property
    def rotation_count(self) -> int:
        """Total number of rotations performed since the tree was created."""
        return self.__rotation_count

    def is_empty(self) -> bool:
        """Whether the tree holds no real node."""
        return not self.__root.is_real()

    def size(self) -> int:
        """The number of keys in the tree, which is cached at the root."""
        return self.__root.subtree_size

    def root_handle(self) -> Optional[AVLNode]:
        """Get the root node for inspection, None if the tree is empty."""
        return self.__root if self.__root.is_real() else None

    def verify(self) -> None:
        """
        Check every invariant of the tree.

        :raises TreeStructureError: When the tree structure or the cached min and max nodes are inconsistent.
        """
        Helper.verify(self.__root)

        if self.is_empty():
            if self.__min_node is not None or self.__max_node is not None:
                self.__fail("The tree is empty but caches a min or max node.")
            return

        if self.__min_node is not Helper.subtree_min(self.__root):
            self.__fail(f"The cached min node {self.__min_node!r} does not hold the smallest key.")
        if self.__max_node is not Helper.subtree_max(self.__root):
            self.__fail(f"The cached max node {self.__max_node!r} does not hold the largest key.")

    @staticmethod
    def __fail(message: str) -> None:
        logger.error(message)
        raise TreeStructureError(message)

    def __replace_child(self, parent: Optional[AVLNode], old: AVLNode, new: AVLNode) -> None:
        """
        Make new take the place of old under parent.

        :param parent: The parent of old; None means old is the root.
        :param old: The node currently linked under parent.
        :param new: The node (possibly absent) to link in its place.
        """
        if parent is None:
            self.__root = new
        elif parent.left is old:
            parent.left = new
        elif parent.right is old:
            parent.right = new
        else:
            self.__fail(f"Node {old.key} is not a child of its parent {parent.key}.")

        # The absent node does not track a parent.
        if new.is_real():
            new.parent = parent

    def __rotate_left(self, node: AVLNode) -> AVLNode:
        """
        Perform a left rotation at the provided node.

        :param node: Some AVLNode with a real right child.
        :return: The node that took the place of the input node.
        """
        p_node = node.right
        if not p_node.is_real():
            self.__fail(f"Cannot rotate left at {node.key} without a right child.")

        # The left subtree of the new top moves under the input node.
        tmp_node = p_node.left

        self.__replace_child(parent=node.parent, old=node, new=p_node)
        p_node.left = node
        node.parent = p_node
        node.right = tmp_node
        if tmp_node.is_real():
            tmp_node.parent = node

        # Only these two nodes changed subtree composition; the input node is now below.
        node.refresh()
        p_node.refresh()

        logger.debug("Rotated left at %d, new subtree root %d.", node.key, p_node.key)
        self.__rotation_count += 1
        return p_node

    def __rotate_right(self, node: AVLNode) -> AVLNode:
        """
        Perform a right rotation at the provided node.

        :param node: Some AVLNode with a real left child.
        :return: The node that took the place of the input node.
        """
        p_node = node.left
        if not p_node.is_real():
            self.__fail(f"Cannot rotate right at {node.key} without a left child.")

        tmp_node = p_node.right

        self.__replace_child(parent=node.parent, old=node, new=p_node)
        p_node.right = node
        node.parent = p_node
        node.left = tmp_node
        if tmp_node.is_real():
            tmp_node.parent = node

        node.refresh()
        p_node.refresh()

        logger.debug("Rotated right at %d, new subtree root %d.", node.key, p_node.key)
        self.__rotation_count += 1
        return p_node

    def __rebalance(self, node: AVLNode, balance: int) -> int:
        """
        Fix a node whose balance factor is 2 or -2.

        A heavy child with balance 0 only happens after a deletion and is handled with a single rotation.
        :param node: The unbalanced node.
        :param balance: The balance factor of the node.
        :return: The number of rotations performed.
        """
        # Left heavy subtree rotation.
        if balance == 2:
            # The left-right case.
            if Helper.balance_factor(node.left) < 0:
                self.__rotate_left(node.left)
                self.__rotate_right(node)
                return 2
            # The left-left case.
            self.__rotate_right(node)
            return 1

        # Right heavy subtree rotation.
        if balance == -2:
            # The right-left case.
            if Helper.balance_factor(node.right) > 0:
                self.__rotate_right(node.right)
                self.__rotate_left(node)
                return 2
            # The right-right case.
            self.__rotate_left(node)
            return 1

        self.__fail(f"Node {node.key} has balance factor {balance}, which cannot be fixed by rotations.")

    @staticmethod
    def __refresh_path(node: Optional[AVLNode]) -> None:
        """Refresh the aggregates of node and all of its ancestors, without rebalancing."""
        while node is not None:
            node.refresh()
            node = node.parent

    def insert(self, key: int, value: Any) -> int:
        """
        Inserts a new key-value pair into the tree.

        :param key: A positive integer; smaller keys are ignored.
        :param value: The payload stored with the key.
        :return: The number of rotations performed (0, 1 or 2), or NOT_FOUND if the key already exists.
        """
        if key < MIN_KEY:
            return 0

        # If the tree is empty, the new node becomes the root.
        if self.is_empty():
            self.__root = AVLNode(KVPair(key=key, value=value))
            self.__min_node = self.__root
            self.__max_node = self.__root
            return 0

        # Find the node to attach the new leaf under.
        parent = Helper.positional_search(self.__root, key)
        if parent.key == key:
            return NOT_FOUND

        node = AVLNode(KVPair(key=key, value=value), parent=parent)
        if key < parent.key:
            parent.left = node
        else:
            parent.right = node

        # Check whether the new key is a new extreme.
        if key > self.__max_node.key:
            self.__max_node = node
        elif key < self.__min_node.key:
            self.__min_node = node

        # Climb up until the height stops growing or one rebalancing event fixes the tree.
        rotations = 0
        node = parent
        while node is not None:
            height_changed = node.refresh()
            balance = Helper.balance_factor(node)

            if abs(balance) < 2:
                node = node.parent
                if not height_changed:
                    break
                continue

            rotations = self.__rebalance(node=node, balance=balance)
            # The rotated node now sits below the new subtree root, which is already up to date.
            node = node.parent.parent
            break

        # The rest of the path still counts the new key.
        self.__refresh_path(node)

        return rotations

    def __bst_delete(self, node: AVLNode) -> Optional[AVLNode]:
        """
        Remove a node as in a plain binary search tree.

        :param node: The node to remove; the tree must hold at least one other node.
        :return: The deepest node whose subtree changed, which is where rebalancing starts.
        """
        if Helper.is_leaf(node):
            self.__replace_child(parent=node.parent, old=node, new=ABSENT)
            return node.parent

        if Helper.has_one_child(node):
            child = node.left if node.left.is_real() else node.right
            self.__replace_child(parent=node.parent, old=node, new=child)
            return node.parent

        # With two children, the successor has no left child and takes the place of the node.
        successor = Helper.subtree_min(node.right)
        start = successor if successor is node.right else successor.parent

        # Unlink the successor from where it was, keeping its right subtree.
        self.__replace_child(parent=successor.parent, old=successor, new=successor.right)

        # Move the successor into the position of the deleted node; it starts from the height that position had, so
        # the climb can tell whether the position got shorter.
        self.__replace_child(parent=node.parent, old=node, new=successor)
        successor.height = node.height
        successor.left = node.left
        successor.right = node.right
        if successor.left.is_real():
            successor.left.parent = successor
        if successor.right.is_real():
            successor.right.parent = successor

        return start

    def delete(self, key: int) -> int:
        """
        Deletes the key from the tree, if it is there.

        :param key: The key to delete.
        :return: The number of rotations performed, or NOT_FOUND if the key is not in the tree.
        """
        if key < MIN_KEY or self.is_empty():
            return NOT_FOUND

        # Deleting the only node leaves an empty tree.
        if Helper.is_leaf(self.__root) and self.__root.key == key:
            self.__root = ABSENT
            self.__min_node = None
            self.__max_node = None
            return 0

        node = Helper.positional_search(self.__root, key)
        if node.key != key:
            return NOT_FOUND

        # Move the cached extremes before the node leaves the tree.
        if node is self.__max_node:
            self.__max_node = Helper.predecessor(node)
        elif node is self.__min_node:
            self.__min_node = Helper.successor(node)

        # Climb up from the removal point; unlike insert, every level may need a rebalancing event.
        rotations = 0
        node = self.__bst_delete(node)
        while node is not None:
            height_changed = node.refresh()
            balance = Helper.balance_factor(node)

            if abs(balance) < 2:
                node = node.parent
                if not height_changed:
                    break
                continue

            rotations += self.__rebalance(node=node, balance=balance)
            node = node.parent.parent

        self.__refresh_path(node)

        return rotations

    def search(self, key: int) -> Any:
        """
        Performs a search on the provided key.

        :param key: The key to search for.
        :return: The value corresponding to the provided key, None if the key is not in the tree.
        """
        if self.is_empty():
            return None

        node = Helper.positional_search(self.__root, key)
        return node.value if node.key == key else None

    def min(self) -> Any:
        """The value of the smallest key, None if the tree is empty."""
        return self.__min_node.value if self.__min_node is not None else None

    def max(self) -> Any:
        """The value of the largest key, None if the tree is empty."""
        return self.__max_node.value if self.__max_node is not None else None

    def keys_in_order(self) -> List[int]:
        return [node.key for node in Helper.in_order(self.__root)]

    def values_in_order(self) -> List[Any]:
        return [node.value for node in Helper.in_order(self.__root)]

    def items_in_order(self) -> List[KVPair]:
        return [node.to_kv_pair() for node in Helper.in_order(self.__root)]

    def select(self, index: int) -> Any:
        """
        Find the value of the index-th smallest key, counting from 1.

        An AVL subtree of height h holds at least about golden ** h nodes, so climbing ceil(log_golden(index)) steps
        from the minimum reaches a node whose subtree contains the target; from there we descend by subtree sizes.
        :param index: The rank of the key, between 1 and size().
        :return: The value stored with that key, None if the index is out of range.
        """
        if index < 1 or index > self.size():
            return None
        if index == 1:
            return self.min()
        if index == self.size():
            return self.max()

        # Climb from the minimum, but never above the root.
        node = self.__min_node
        for _ in range(math.ceil(math.log(index) / math.log(golden))):
            if node.parent is None:
                break
            node = node.parent

        # The ancestor must cover ranks 1 through index.
        while node.subtree_size < index:
            node = node.parent

        # Descend using the left subtree size as the rank of the current node.
        while True:
            rank = node.left.subtree_size + 1
            if index == rank:
                return node.value
            elif index < rank:
                node = node.left
            else:
                index -= rank
                node = node.right

    def count_at_most(self, threshold: int) -> int:
        """
        Sum all keys less than or equal to the threshold.

        :param threshold: Any integer; it does not need to be a key in the tree.
        :return: The sum of the qualifying keys, 0 if there are none.
        """
        if self.is_empty() or threshold < self.__min_node.key:
            return 0
        if threshold == self.__min_node.key:
            return self.__min_node.key
        if threshold >= self.__max_node.key:
            return self.__root.subtree_sum

        key_sum = 0
        node = self.__root

        # Whenever the key qualifies, so does its whole left subtree.
        while node.is_real():
            if node.key > threshold:
                node = node.left
            else:
                key_sum += node.left.subtree_sum + node.key
                node = node.right

        return key_sum
