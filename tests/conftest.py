import pytest

from augavl.dependency import AVLTree


@pytest.fixture
def seven_tree():
    """A perfect tree holding keys 1 through 7, each mapped to the value "v<key>"."""
    tree = AVLTree()
    for key in range(1, 8):
        tree.insert(key=key, value=f"v{key}")
    return tree


@pytest.fixture
def fib_tree():
    """
    A 12-node tree where every inner node is left heavy, built without rotations:

                 8
            5         11
          3   7     10  12
         2 4 6     9
        1
    """
    tree = AVLTree()
    for key in [8, 5, 11, 3, 7, 10, 12, 2, 4, 6, 9, 1]:
        assert tree.insert(key=key, value=f"v{key}") == 0
    return tree
