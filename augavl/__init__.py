"""An AVL tree over positive integer keys with order statistics and prefix sums."""
from augavl.dependency import AVLTree, KVPair, NOT_FOUND, TreeStructureError

__version__ = "0.1.0"
