import copy
import enum
import logging
from collections import deque
from typing import Callable, Iterator, Optional, Tuple

from .errors import EmptyTreeError, OutOfRangeError

logger = logging.getLogger(__name__)


class Direction(enum.IntEnum):
    ROOT = -1
    LEFT = 0
    RIGHT = 1


class Node:

    def __init__(self, key):
        self.right: Optional[Node] = None
        self.left: Optional[Node] = None
        # number of nodes in the subtree rooted here, this one included
        self.size = 1
        self.key = key

    def get_child(self, direction: Direction):
        if direction == Direction.LEFT:
            return self.left
        return self.right

    def set_child(self, direction: Direction, node: Optional["Node"]):
        if direction == Direction.LEFT:
            self.left = node
        else:
            self.right = node

    def detach(self):
        self.left = None
        self.right = None

    def __repr__(self):
        return f"Node({self.key!r}, size={self.size})"


def _size(node: Optional[Node]) -> int:
    return 0 if node is None else node.size


class BinarySearchTree:
    """Binary search tree where every node knows the size of its subtree.

    Keys only need a total order through ``<`` and ``>``. Two keys are the
    same key when neither is smaller than the other, so duplicates are
    rejected on insert. The tree is never rebalanced implicitly; call
    ``balance()`` to rebuild it with logarithmic height.
    """

    def __init__(self):
        self.root: Optional[Node] = None

    def is_empty(self):
        return self.root is None

    def size(self) -> int:
        return _size(self.root)

    def __len__(self):
        return self.size()

    def __contains__(self, key):
        return self.contains(key)

    def __iter__(self):
        return (node.key for node in self._inorder())

    def _set_link(self, parent: Optional[Node], direction: Direction,
                  node: Optional[Node]):
        if parent is None:
            self.root = node
        else:
            parent.set_child(direction, node)

    def contains(self, key) -> bool:
        node = self.root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return True
        return False

    def insert(self, key) -> bool:
        """Adds key to the tree, returns False if it was already present"""
        # sizes are bumped on the way down, so the key must be known to be
        # absent before we start descending
        if self.contains(key):
            logger.debug("rejected duplicate key %r", key)
            return False

        parent = None
        direction = Direction.ROOT
        node = self.root
        while node is not None:
            node.size += 1
            parent = node
            direction = Direction(int(key > node.key))
            node = node.get_child(direction)

        self._set_link(parent, direction, Node(key))
        return True

    def min(self):
        if self.root is None:
            raise EmptyTreeError("min() called on an empty tree")
        return self.smallest().key

    def smallest(self, node: Node = None) -> Optional[Node]:
        """Returns the leftmost node of the subtree (the whole tree by default)

        Returns None if the subtree is empty.
        """
        node = node or self.root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _detach_min(top: Node) -> Tuple[Node, Optional[Node]]:
        """Unlinks the leftmost node of a subtree.

        Every node on the path to the minimum loses one member, so its size
        is decremented. The minimum's right child takes its place.

        Returns:
            tuple: the removed node and the new root of the subtree
        """
        parent = None
        node = top
        while node.left is not None:
            node.size -= 1
            parent = node
            node = node.left

        if parent is None:
            return node, node.right
        parent.left = node.right
        return node, top

    def delete_min(self):
        if self.root is None:
            raise EmptyTreeError("delete_min() called on an empty tree")
        removed, self.root = self._detach_min(self.root)
        removed.detach()

    def delete_element(self, key) -> bool:
        """Removes key from the tree, returns False if it was not present"""
        if not self.contains(key):
            return False

        parent = None
        direction = Direction.ROOT
        node = self.root
        while True:
            if key < node.key:
                child_direction = Direction.LEFT
            elif key > node.key:
                child_direction = Direction.RIGHT
            else:
                break
            # the key is somewhere below, so this subtree loses one member
            node.size -= 1
            parent = node
            direction = child_direction
            node = node.get_child(direction)

        self._set_link(parent, direction, self._unlink(node))
        node.detach()
        return True

    def _unlink(self, node: Node) -> Optional[Node]:
        """Returns the subtree that replaces node once it is removed"""
        if node.right is None:
            return node.left
        if node.left is None:
            return node.right

        # node has 2 children: promote its in-order successor, the leftmost
        # node of its right subtree (Hibbard deletion)
        successor, right = self._detach_min(node.right)
        successor.left = node.left
        successor.right = right
        successor.size = node.size - 1
        return successor

    def rank(self, key) -> Optional[int]:
        """Returns how many keys are smaller than key, None if key is absent"""
        smaller = 0
        node = self.root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                smaller += _size(node.left) + 1
                node = node.right
            else:
                return smaller + _size(node.left)
        return None

    def nth_element(self, n: int):
        """Returns the key at position n in ascending order"""
        if not 0 <= n < self.size():
            raise OutOfRangeError(
                f"position {n} out of range for a tree of {self.size()} keys")

        node = self.root
        while True:
            left_size = _size(node.left)
            if n == left_size:
                return node.key
            if n < left_size:
                node = node.left
            else:
                n -= left_size + 1
                node = node.right

    @staticmethod
    def _linearize(root: Optional[Node]) -> Tuple[Optional[Node], int]:
        """Flattens a subtree into an ascending list linked through `right`.

        Left children are rotated up one at a time until the node under
        consideration has none, at which point it joins the list. No extra
        storage is needed. The count is tallied node by node rather than read
        from the size fields.

        Returns:
            tuple: head of the list and the number of nodes in it
        """
        head = None
        tail = None
        count = 0
        node = root
        while node is not None:
            if node.left is not None:
                # right rotation: the left child moves up into node's place
                pivot = node.left
                node.left = pivot.right
                pivot.right = node
                node = pivot
                if tail is not None:
                    tail.right = node
            else:
                if tail is None:
                    head = node
                tail = node
                count += 1
                node = node.right
        return head, count

    @classmethod
    def _arborize(cls, head: Optional[Node],
                  count: int) -> Tuple[Optional[Node], Optional[Node]]:
        """Builds a balanced subtree out of the first count nodes of a list.

        Returns:
            tuple: root of the new subtree and the rest of the list
        """
        if count == 0:
            return None, head

        left_count = (count - 1) // 2
        left, root = cls._arborize(head, left_count)
        right, rest = cls._arborize(root.right, count - left_count - 1)

        root.left = left
        root.right = right
        root.size = count
        return root, rest

    def linearize(self):
        """Turns the tree into a chain of right children in ascending order"""
        head, count = self._linearize(self.root)
        # the chain is a valid tree; each node holds everything to its right
        remaining = count
        node = head
        while node is not None:
            node.size = remaining
            remaining -= 1
            node = node.right
        self.root = head
        logger.debug("linearized %d nodes", count)

    def balance(self):
        """Rebuilds the tree in place with minimal height"""
        head, count = self._linearize(self.root)
        # the whole list is consumed, so nothing is left over
        self.root, _ = self._arborize(head, count)
        logger.debug("balanced %d nodes", count)

    def _preorder(self) -> Iterator[Node]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            # push right first so the left subtree comes out first
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _inorder(self) -> Iterator[Node]:
        stack = []
        node = self.root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
            else:
                node = stack.pop()
                yield node
                node = node.right

    def _postorder(self) -> Iterator[Node]:
        stack = []
        last = None
        node = self.root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
                continue
            top = stack[-1]
            # descend right only if we did not just come back from there
            if top.right is not None and top.right is not last:
                node = top.right
            else:
                last = stack.pop()
                yield last

    def visit_pre(self, visitor: Callable):
        for node in self._preorder():
            visitor(node.key)

    def visit_sym(self, visitor: Callable):
        """Calls visitor on every key in ascending order"""
        for node in self._inorder():
            visitor(node.key)

    def visit_post(self, visitor: Callable):
        for node in self._postorder():
            visitor(node.key)

    def copy(self) -> "BinarySearchTree":
        """Returns a new tree with a duplicate of every node"""
        other = type(self)()
        self._copy_into(other, lambda key: key)
        return other

    def _copy_into(self, other: "BinarySearchTree", copy_key: Callable):
        if self.root is None:
            return

        other.root = self._copy_node(self.root, copy_key)
        stack = [(self.root, other.root)]
        while stack:
            source, target = stack.pop()
            for direction in (Direction.LEFT, Direction.RIGHT):
                child = source.get_child(direction)
                if child is not None:
                    duplicate = self._copy_node(child, copy_key)
                    target.set_child(direction, duplicate)
                    stack.append((child, duplicate))

    @staticmethod
    def _copy_node(node: Node, copy_key: Callable) -> Node:
        duplicate = Node(copy_key(node.key))
        duplicate.size = node.size
        return duplicate

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        other = type(self)()
        memo[id(self)] = other
        self._copy_into(other, lambda key: copy.deepcopy(key, memo))
        return other

    def swap(self, other: "BinarySearchTree"):
        self.root, other.root = other.root, self.root

    def move_from(self, other: "BinarySearchTree"):
        """Takes over the nodes of other, leaving it empty"""
        if other is self:
            return
        self.root, other.root = other.root, None

    def clear(self):
        self.root = None

    def height(self) -> int:
        """Returns the number of edges on the longest path from the root"""
        height = -1
        level = deque([self.root] if self.root is not None else [])
        while level:
            height += 1
            for _ in range(len(level)):
                node = level.popleft()
                if node.left is not None:
                    level.append(node.left)
                if node.right is not None:
                    level.append(node.right)
        return height

    def pprint(self) -> str:
        # same layout as a recursive drawing, built from an explicit stack
        lines = []
        stack = [(self.root, Direction.ROOT, 0)]
        while stack:
            node, direction, depth = stack.pop()
            if node is None:
                lines.append("\t" * depth + "|_ null")
                continue
            lines.append("\t" * depth
                         + f"|_ {direction.name} | {node.key}: {node.size}")
            stack.append((node.right, Direction.RIGHT, depth + 1))
            stack.append((node.left, Direction.LEFT, depth + 1))
        return "\n".join(lines) + "\n"
