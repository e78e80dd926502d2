"""Tests for graph preprocessing utilities."""

from sankey_layout import detect_cycle, topological_sort


class TestCycleDetection:
    """Tests for cycle detection functions."""

    def test_detect_cycle_in_cyclic_graph(self):
        """Should detect cycle in a graph with a cycle."""
        cycle = detect_cycle(3, [(0, 1), (1, 2), (2, 0)])
        assert cycle is not None
        assert cycle[0] == cycle[-1]
        assert len(cycle) == 4

    def test_detect_cycle_in_acyclic_graph(self):
        """Should return None for acyclic graph."""
        assert detect_cycle(3, [(0, 1), (1, 2), (0, 2)]) is None

    def test_self_loop(self):
        """A self-loop is a cycle."""
        assert detect_cycle(1, [(0, 0)]) == [0, 0]

    def test_two_node_cycle(self):
        """A back edge closes a cycle; a single edge does not."""
        assert detect_cycle(2, [(0, 1), (1, 0)]) == [0, 1, 0]
        assert detect_cycle(2, [(0, 1)]) is None

    def test_detect_cycle_empty_graph(self):
        """Empty graph should have no cycles."""
        assert detect_cycle(0, []) is None
        assert detect_cycle(5, []) is None

    def test_long_chain_does_not_recurse(self):
        """Deep chains are handled without recursion."""
        n = 5000
        links = [(i, i + 1) for i in range(n - 1)]
        assert detect_cycle(n, links) is None


class TestTopologicalSort:
    """Tests for topological sorting."""

    def test_chain(self):
        """A chain sorts in order."""
        assert topological_sort(3, [(0, 1), (1, 2)]) == [0, 1, 2]

    def test_respects_edges(self):
        """Every edge points forward in the ordering."""
        links = [(3, 1), (1, 0), (3, 2), (2, 0)]
        order = topological_sort(4, links)
        position = {node: i for i, node in enumerate(order)}
        for src, tgt in links:
            assert position[src] < position[tgt]

    def test_cycle_returns_none(self):
        """Cyclic graphs have no topological order."""
        assert topological_sort(2, [(0, 1), (1, 0)]) is None

    def test_isolated_nodes(self):
        """Nodes without edges keep index order."""
        assert topological_sort(3, []) == [0, 1, 2]
