from pathlib import Path

import networkx as nx
import pytest

from osbst import BinarySearchTree
from osbst.graph import to_digraph


def pytest_addoption(parser):
    parser.addoption("--benchmark", action="store_true", default=False, help="run benchmark tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "benchmark: mark benchmark tests")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--benchmark"):
        return
    benchmark_skip_marker = pytest.mark.skip(reason="use --benchmark marker to run")
    for item in items:
        filename = Path(str(item.fspath)).name
        if "benchmark" in item.keywords or filename.startswith('test_benchmark'):
            item.add_marker(benchmark_skip_marker)


def _check_invariants(tree: BinarySearchTree):
    keys = list(tree)
    # strictly ascending in-order keys means ordered and duplicate free
    assert all(a < b for a, b in zip(keys, keys[1:]))
    assert tree.size() == len(keys)

    G = to_digraph(tree)
    if tree.is_empty():
        assert G.number_of_nodes() == 0
        return
    assert nx.is_arborescence(G)
    for node, size in G.nodes(data="size"):
        assert size == len(nx.descendants(G, node)) + 1


@pytest.fixture
def check_invariants():
    return _check_invariants


@pytest.fixture
def tree():
    yield BinarySearchTree()


@pytest.fixture
def example_tree():
    t = BinarySearchTree()
    for key in [10, 12, 16, 15, 7, 5, 11, 4, 2, 6, 13, 14]:
        t.insert(key)
    yield t
