# inspection helpers: export a tree to networkx and dump it level by level
from typing import List, Tuple

import networkx as nx

from .bstree import BinarySearchTree, Direction


def to_digraph(tree: BinarySearchTree) -> nx.DiGraph:
    """Builds a directed graph with an edge from every node to its children

    Graph nodes are the tree's `Node` objects, so keys need not be hashable.
    Each carries its `key` and subtree `size` as attributes; edges carry the
    `direction` of the child.

    Args:
        tree (BinarySearchTree): tree to export

    Returns:
        nx.DiGraph: the exported tree, empty if the tree is
    """
    G = nx.DiGraph()
    if tree.root is None:
        return G

    G.add_node(tree.root, key=tree.root.key, size=tree.root.size)
    stack = [tree.root]
    while stack:
        node = stack.pop()
        # left edges are added first so successors come out in key order
        for direction in (Direction.LEFT, Direction.RIGHT):
            child = node.get_child(direction)
            if child is None:
                continue
            G.add_node(child, key=child.key, size=child.size)
            G.add_edge(node, child, direction=direction)
            stack.append(child)
    return G


def levels(tree: BinarySearchTree) -> List[List[Tuple]]:
    """Returns the (key, size) pairs of the tree grouped by depth"""
    if tree.root is None:
        return []
    G = to_digraph(tree)
    return [[(G.nodes[n]["key"], G.nodes[n]["size"]) for n in layer]
            for layer in nx.bfs_layers(G, tree.root)]


def _rows(G: nx.DiGraph, root) -> List[list]:
    # every level lists each child slot of the previous one, None for a
    # missing child, ending with a level made only of missing children
    rows = []
    layer = [root]
    while True:
        rows.append(layer)
        if all(n is None for n in layer):
            return rows
        next_layer = []
        for n in layer:
            if n is None:
                continue
            children = {Direction.LEFT: None, Direction.RIGHT: None}
            for _, child, direction in G.out_edges(n, data="direction"):
                children[direction] = child
            next_layer += [children[Direction.LEFT], children[Direction.RIGHT]]
        layer = next_layer


def display(tree: BinarySearchTree) -> str:
    """Renders a two column table of keys and subtree sizes, one row per level"""
    G = to_digraph(tree)
    rows = _rows(G, tree.root)

    def render(row, attribute) -> str:
        return " ".join("-" if n is None else str(G.nodes[n][attribute])
                        for n in row)

    keys = [render(row, "key") for row in rows]
    sizes = [render(row, "size") for row in rows]

    width = max([11] + [len(line) for line in keys + sizes])
    rule = "+-" + "-" * width + "+-" + "-" * width + "+"
    lines = [rule, f"| {'key':<{width}}| {'size':<{width}}|", rule]
    lines += [f"| {k:<{width}}| {s:<{width}}|" for k, s in zip(keys, sizes)]
    lines.append(rule)
    return "\n".join(lines)
