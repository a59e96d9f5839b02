from .bstree import BinarySearchTree, Direction, Node
from .errors import EmptyTreeError, OutOfRangeError, TreeError

__all__ = [
    "BinarySearchTree",
    "Direction",
    "EmptyTreeError",
    "Node",
    "OutOfRangeError",
    "TreeError",
]
