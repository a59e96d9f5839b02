class TreeError(Exception):
    """Base class for errors raised by the tree"""


class EmptyTreeError(TreeError, LookupError):
    """The operation needs at least one key but the tree is empty"""


class OutOfRangeError(TreeError, IndexError):
    """A position outside [0, size) was requested"""
