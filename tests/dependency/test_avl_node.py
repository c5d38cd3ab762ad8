import pytest

from augavl.dependency import ABSENT, ABSENT_KEY, AVLNode, KVPair, TreeStructureError


class TestAVLNode:
    def test_new_leaf(self):
        node = AVLNode(KVPair(key=5, value="five"))

        # A new node is a leaf whose aggregates only count itself.
        assert node.is_real()
        assert node.key == 5
        assert node.value == "five"
        assert node.height == 0
        assert node.subtree_size == 1
        assert node.subtree_sum == 5
        assert node.left is ABSENT
        assert node.right is ABSENT
        assert node.parent is None

    def test_refresh(self):
        parent = AVLNode(KVPair(key=5, value="five"))
        child = AVLNode(KVPair(key=3, value="three"), parent=parent)
        parent.left = child

        # The first refresh picks up the child and grows the height.
        assert parent.refresh() is True
        assert parent.height == 1
        assert parent.subtree_size == 2
        assert parent.subtree_sum == 8

        # Nothing changed since, so the height stays.
        assert parent.refresh() is False
        assert parent.height == 1

    def test_to_kv_pair(self):
        node = AVLNode(KVPair(key=7, value=[1, 2]))
        assert node.to_kv_pair() == KVPair(key=7, value=[1, 2])
        assert node.to_kv_pair().to_tuple() == (7, [1, 2])


class TestAbsentNode:
    def test_neutral_values(self):
        assert not ABSENT.is_real()
        assert ABSENT.key == ABSENT_KEY
        assert ABSENT.value is None
        assert ABSENT.height == -1
        assert ABSENT.subtree_size == 0
        assert ABSENT.subtree_sum == 0
        assert ABSENT.parent is None

    def test_children_are_itself(self):
        assert ABSENT.left is ABSENT
        assert ABSENT.right is ABSENT
        assert ABSENT.left.left.height == -1

    def test_immutable(self):
        with pytest.raises(TreeStructureError):
            ABSENT.height = 3
        with pytest.raises(TreeStructureError):
            ABSENT.parent = AVLNode(KVPair(key=1, value=None))

        # The failed writes left the node untouched.
        assert ABSENT.height == -1
        assert ABSENT.parent is None

    def test_refresh_is_noop(self):
        assert ABSENT.refresh() is False
        assert ABSENT.subtree_size == 0
