import pytest

from augavl.dependency import ABSENT, Helper, TreeStructureError


class TestHelper:
    def test_positional_search(self, seven_tree):
        root = seven_tree.root_handle()

        # Existing keys return their own node.
        assert Helper.positional_search(root, 5).key == 5
        assert Helper.positional_search(root, 4) is root

        # Missing keys return the node they would be attached under.
        assert Helper.positional_search(root, 8).key == 7
        assert Helper.positional_search(root, 0).key == 1

        # Nothing to search in an empty tree.
        assert Helper.positional_search(ABSENT, 3) is None

    def test_subtree_min_max(self, seven_tree):
        root = seven_tree.root_handle()
        assert Helper.subtree_min(root).key == 1
        assert Helper.subtree_max(root).key == 7
        assert Helper.subtree_min(root.right).key == 5
        assert Helper.subtree_max(root.left).key == 3

    def test_successor(self, seven_tree):
        root = seven_tree.root_handle()

        # From the right subtree.
        assert Helper.successor(root).key == 5
        # By climbing up from a right child.
        assert Helper.successor(Helper.positional_search(root, 3)).key == 4
        # The largest key has none.
        assert Helper.successor(Helper.positional_search(root, 7)) is None

    def test_predecessor(self, seven_tree):
        root = seven_tree.root_handle()
        assert Helper.predecessor(root).key == 3
        assert Helper.predecessor(Helper.positional_search(root, 5)).key == 4
        assert Helper.predecessor(Helper.positional_search(root, 1)) is None

    def test_node_shape(self, seven_tree):
        root = seven_tree.root_handle()
        assert Helper.balance_factor(root) == 0
        assert Helper.is_leaf(Helper.positional_search(root, 1))
        assert not Helper.is_leaf(root)
        assert not Helper.has_one_child(root)

        # Removing 7 leaves 6 with only its left child.
        seven_tree.delete(7)
        six = Helper.positional_search(seven_tree.root_handle(), 6)
        assert Helper.has_one_child(six)
        assert Helper.balance_factor(six) == 1

    def test_in_order(self, seven_tree):
        root = seven_tree.root_handle()
        assert [node.key for node in Helper.in_order(root)] == list(range(1, 8))

        # The walk is lazy and starts over on every call.
        walk = Helper.in_order(root)
        assert next(walk).key == 1
        assert next(walk).key == 2
        assert next(Helper.in_order(root)).key == 1

        assert list(Helper.in_order(ABSENT)) == []

    def test_verify(self, seven_tree):
        Helper.verify(seven_tree.root_handle())
        Helper.verify(ABSENT)

    def test_verify_bad_size(self, seven_tree):
        seven_tree.root_handle().subtree_size = 100
        with pytest.raises(TreeStructureError):
            Helper.verify(seven_tree.root_handle())

    def test_verify_bad_order(self, seven_tree):
        seven_tree.root_handle().key = 100
        with pytest.raises(TreeStructureError):
            Helper.verify(seven_tree.root_handle())

    def test_verify_bad_parent(self, seven_tree):
        seven_tree.root_handle().left.parent = None
        with pytest.raises(TreeStructureError):
            Helper.verify(seven_tree.root_handle())
