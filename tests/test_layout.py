"""Tests for the full Sankey layout pipeline."""

import warnings

import pytest

from sankey_layout import (
    CycleDetectedError,
    DuplicateNodeIdError,
    GraphModel,
    GraphSpec,
    InsufficientHeightWarning,
    InvalidValueError,
    LinkSpec,
    NodeAlign,
    NodeSpec,
    SankeyConfig,
    SankeyLayout,
    compute_layout,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def create_diamond():
    """Scenario B graph."""
    return GraphModel(
        nodes=["A", "B", "C", "D"],
        links=[("A", "B", 3), ("A", "C", 4), ("B", "D", 3), ("C", "D", 4)],
    )


def create_energy_flow():
    """A larger DAG with merges, splits, a skip link and a lone source."""
    return GraphModel(
        links=[
            ("Coal", "Power", 25),
            ("Gas", "Power", 20),
            ("Gas", "Heat", 10),
            ("Solar", "Power", 8),
            ("Power", "Homes", 18),
            ("Power", "Industry", 22),
            ("Power", "Losses", 13),
            ("Heat", "Homes", 6),
            ("Heat", "Losses", 4),
            ("Gas", "Industry", 5),
            ("Biomass", "Industry", 3),
        ]
    )


def incoming(result, node_id):
    return [link for link in result.links if link.target_id == node_id]


def outgoing(result, node_id):
    return [link for link in result.links if link.source_id == node_id]


class TestScenarios:
    """End-to-end scenarios."""

    def test_two_nodes(self):
        """A -> B (5): two columns, band width 5 * ky."""
        result = compute_layout(GraphModel(nodes=["A", "B"], links=[("A", "B", 5)]))

        assert result.node("A").column == 0
        assert result.node("B").column == 1
        assert result.max_column == 1
        (link,) = result.links
        assert link.width == pytest.approx(5 * result.ky)
        assert result.ky == pytest.approx(580 / 5)

    def test_diamond(self):
        """Join node lands in column 2 and carries the full flow."""
        result = compute_layout(create_diamond())

        assert result.node("D").column == 2
        assert result.node("A").value == 7
        assert result.node("D").value == 7

    def test_cycle(self):
        """A cycle fails the whole request."""
        graph = GraphModel(links=[("A", "B", 1), ("B", "A", 1)])
        with pytest.raises(CycleDetectedError):
            compute_layout(graph)

    def test_isolated_node(self):
        """An isolated node gets value 0, column 0 and the minimum height."""
        config = SankeyConfig(min_node_height=3.0)
        result = compute_layout(GraphModel(nodes=["E"], links=[("A", "B", 2)]), config)

        e = result.node("E")
        assert e.value == 0
        assert e.column == 0
        assert e.height == pytest.approx(3.0)

    def test_isolated_node_stays_inside_margins(self):
        """A zero-flow node next to the densest column is not pushed off the canvas."""
        result = compute_layout(GraphModel(nodes=["E", "A"], links=[("A", "B", 2)]))

        for node in result.nodes:
            assert node.y0 >= 10 - 1e-9
            assert node.y1 <= 590 + 1e-9

    def test_only_isolated_node(self):
        """A graph without links still lays out."""
        result = compute_layout(GraphModel(nodes=["E"]), SankeyConfig(min_node_height=2.0))
        assert result.ky == 0.0
        assert result.node("E").height == pytest.approx(2.0)

    def test_empty_graph(self):
        """No nodes yields an empty result, not an error."""
        result = compute_layout(GraphModel())
        assert result.is_empty()
        assert result.links == ()

    def test_spec_input(self):
        """A GraphSpec is validated before layout."""
        spec = GraphSpec(nodes=(NodeSpec("A"), NodeSpec("A")))
        with pytest.raises(DuplicateNodeIdError):
            compute_layout(spec)

        spec = GraphSpec(links=(LinkSpec("A", "B", -1.0),))
        with pytest.raises(InvalidValueError):
            compute_layout(spec)


class TestProperties:
    """Invariants that hold for every layout."""

    @pytest.mark.parametrize("align", list(NodeAlign))
    def test_links_point_forward(self, align):
        """Sources are always left of targets."""
        result = compute_layout(create_energy_flow(), SankeyConfig(align=align))
        for link in result.links:
            assert result.node(link.source_id).column < result.node(link.target_id).column
            assert link.x0 < link.x1

    @pytest.mark.parametrize("align", list(NodeAlign))
    def test_flow_conserved_at_nodes(self, align):
        """Incoming and outgoing bands match each other and value * ky."""
        result = compute_layout(create_energy_flow(), SankeyConfig(align=align))
        for node in result.nodes:
            ins = sum(link.width for link in incoming(result, node.id))
            outs = sum(link.width for link in outgoing(result, node.id))
            expected = node.value * result.ky
            if ins and outs:
                assert ins == pytest.approx(outs)
            assert max(ins, outs) == pytest.approx(expected)
            assert max(ins, outs) <= node.height + 1e-9

    @pytest.mark.parametrize("align", list(NodeAlign))
    def test_columns_overlap_free(self, align):
        """Nodes in one column keep at least the padding between them."""
        config = SankeyConfig(align=align)
        result = compute_layout(create_energy_flow(), config)

        for column in range(result.max_column + 1):
            members = sorted(
                (n for n in result.nodes if n.column == column), key=lambda n: n.y0
            )
            for prev, node in zip(members, members[1:]):
                assert node.y0 >= prev.y1 + result.node_padding - 1e-9

    def test_nodes_inside_canvas(self):
        """Nodes stay inside the margins when everything fits."""
        config = SankeyConfig()
        result = compute_layout(create_energy_flow(), config)
        for node in result.nodes:
            assert node.y0 >= config.margin - 1e-9
            assert node.y1 <= config.height - config.margin + 1e-9
            assert node.x0 >= config.margin - 1e-9
            assert node.x1 <= config.width - config.margin + 1e-9

    def test_left_sources_in_first_column(self):
        """Left alignment puts every source in column 0."""
        result = compute_layout(create_energy_flow(), SankeyConfig(align="left"))
        for node in result.nodes:
            if not incoming(result, node.id):
                assert node.column == 0

    def test_right_sinks_in_last_column(self):
        """Right alignment puts every sink in the last column."""
        result = compute_layout(create_energy_flow(), SankeyConfig(align="right"))
        for node in result.nodes:
            if not outgoing(result, node.id):
                assert node.column == result.max_column

    def test_same_column_same_x(self):
        """Column members share horizontal extent."""
        result = compute_layout(create_energy_flow())
        extents = {}
        for node in result.nodes:
            extents.setdefault(node.column, set()).add((node.x0, node.x1))
        assert all(len(xs) == 1 for xs in extents.values())

    def test_deterministic(self):
        """Same input, same output."""
        config = SankeyConfig(align="justify", iterations=8)
        first = compute_layout(create_energy_flow(), config)
        second = compute_layout(create_energy_flow(), config)
        assert first == second

    def test_no_warning_when_fits(self):
        """Default canvas fits the energy example without relaxing padding."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", InsufficientHeightWarning)
            result = compute_layout(create_energy_flow())
        assert result.padding_relaxed is False

    def test_padding_relaxed(self):
        """Too many nodes for the padding: warn and drop padding."""
        graph = GraphModel(links=[("S", f"T{i}", 1) for i in range(10)])
        config = SankeyConfig(height=100, margin=10, node_padding=16)

        with pytest.warns(InsufficientHeightWarning):
            result = compute_layout(graph, config)

        assert result.padding_relaxed is True
        assert result.node_padding == 0.0
        members = sorted((n for n in result.nodes if n.column == 1), key=lambda n: n.y0)
        for prev, node in zip(members, members[1:]):
            assert node.y0 >= prev.y1 - 1e-9


class TestSankeyLayout:
    """Tests for the layout object."""

    def test_run_returns_self(self):
        """run() chains and exposes the result."""
        layout = SankeyLayout(nodes=["A", "B"], links=[("A", "B", 5)], size=(400, 200))
        assert layout.run() is layout
        assert layout.result.width == 400
        assert layout.result.height == 200

    def test_result_before_run(self):
        """Accessing the result early is an error."""
        layout = SankeyLayout(links=[("A", "B", 5)])
        with pytest.raises(RuntimeError):
            layout.result

    def test_options(self):
        """Config fields can be passed as keywords."""
        layout = SankeyLayout(links=[("A", "B", 5)], node_width=24, align="right")
        assert layout.node_width == 24
        assert layout.align is NodeAlign.RIGHT
        assert layout.config.node_width == 24

    def test_rerun_after_config_change(self):
        """Changing a setting and rerunning recomputes from scratch."""
        layout = SankeyLayout(links=[("A", "B", 5), ("C", "D", 5)], size=(900, 600))
        before = layout.run().result

        layout.node_width = 10
        after = layout.run().result

        assert before.node("A").width == pytest.approx(40.0)
        assert after.node("A").width == pytest.approx(10.0)

    def test_changing_links_rebuilds_graph(self):
        """New links are picked up on the next run."""
        layout = SankeyLayout(links=[("A", "B", 5)])
        layout.run()
        layout.links = [("A", "B", 5), ("B", "C", 5)]
        assert layout.run().result.max_column == 2

    def test_validate(self):
        """validate() fails fast on cycles."""
        layout = SankeyLayout(links=[("A", "B", 1), ("B", "A", 1)])
        with pytest.raises(CycleDetectedError):
            layout.validate()

    def test_failed_run_leaves_no_result(self):
        """A failing run does not expose a stale or partial result."""
        layout = SankeyLayout(links=[("A", "B", 1)])
        layout.run()
        layout.links = [("A", "B", 1), ("B", "A", 1)]
        with pytest.raises(CycleDetectedError):
            layout.run()
        with pytest.raises(RuntimeError):
            layout.result
