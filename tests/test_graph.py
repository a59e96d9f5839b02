import networkx as nx

from osbst import BinarySearchTree, Direction
from osbst.graph import display, levels, to_digraph


def build(values) -> BinarySearchTree:
    t = BinarySearchTree()
    for val in values:
        t.insert(val)
    return t


def test_to_digraph():
    t = build([4, 2, 6, 1])
    four, two, six = t.root, t.root.left, t.root.right
    one = two.left

    G = to_digraph(t)

    assert set(G.nodes) == {four, two, six, one}
    assert sorted(key for _, key in G.nodes(data="key")) == [1, 2, 4, 6]
    assert G.nodes[four]["size"] == 4
    assert G.nodes[two]["size"] == 2
    assert G.edges[four, two]["direction"] == Direction.LEFT
    assert G.edges[four, six]["direction"] == Direction.RIGHT
    assert G.edges[two, one]["direction"] == Direction.LEFT
    assert nx.is_arborescence(G)


def test_to_digraph_empty():
    assert to_digraph(BinarySearchTree()).number_of_nodes() == 0


def test_levels():
    t = build([4, 2, 6, 1, 3, 7])

    assert levels(t) == [
        [(4, 6)],
        [(2, 3), (6, 2)],
        [(1, 1), (3, 1), (7, 1)],
    ]
    assert levels(BinarySearchTree()) == []


def test_display():
    t = build([2, 1, 3])

    assert display(t).splitlines() == [
        "+------------+------------+",
        "| key        | size       |",
        "+------------+------------+",
        "| 2          | 3          |",
        "| 1 3        | 1 1        |",
        "| - - - -    | - - - -    |",
        "+------------+------------+",
    ]


def test_display_empty():
    assert "| -          | -          |" in display(BinarySearchTree()).splitlines()


def test_unhashable_keys():
    # lists are ordered but cannot be used as dictionary keys
    t = build([[2], [1], [3]])

    assert levels(t) == [[([2], 3)], [([1], 1), ([3], 1)]]
    assert display(t).splitlines()[3:6] == [
        "| [2]        | 3          |",
        "| [1] [3]    | 1 1        |",
        "| - - - -    | - - - -    |",
    ]
