from augavl.dependency.types import ABSENT_KEY, MIN_KEY, NOT_FOUND, KVPair, TreeStructureError
from augavl.dependency.avl_node import ABSENT, AVLNode
from augavl.dependency.helper import Helper
from augavl.dependency.avl_tree import AVLTree
