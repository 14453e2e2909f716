from itertools import product

import networkx as nx
import pytest

from topo_shapes.core.errors import (
    DescriptionError, DuplicateGroupError, InsufficientNodesError, UnknownGroupError,
    UnknownShapeError,
)
from topo_shapes.core.models import (
    CrossLinkRule, FullMeshRule, GroupSpec, LinksRule, ShapeRule, TopologyDescription,
)
from topo_shapes.core.types import Edge, NodeId
from topo_shapes.topology import (
    EXAMPLES, StrategyFactory, TopologyBuilder, build_topology, count_full_mesh_edges, get_example,
)
from topo_shapes.utils import build_graph, duplicates, unique


class TestTree:

    def test_edge_count(self, tree):
        assert tree.node_count == 10
        assert tree.edge_count == 1 * 2 + 2 * 3 + 3 * 4 == 20
        assert count_full_mesh_edges([1, 2, 3, 4]) == tree.edge_count

    def test_adjacent_layers_fully_connected(self, tree):
        edges = set(tree.edges)
        for upper, lower in [(0, 1), (1, 2), (2, 3)]:
            for a, b in product(tree.group_nodes(upper), tree.group_nodes(lower)):
                assert Edge(a, b) in edges

    def test_no_edges_inside_a_layer_or_across_two_layers(self, tree):
        for edge in tree.edges:
            assert abs(edge.a.group - edge.b.group) == 1

    def test_degrees(self, tree):
        degrees = tree.degrees()
        assert degrees[NodeId(0, 0)] == 2
        assert degrees[NodeId(1, 0)] == 1 + 3
        assert degrees[NodeId(2, 0)] == 2 + 4
        assert degrees[NodeId(3, 3)] == 3


class TestButterfly:

    @pytest.fixture
    def butterfly(self):
        return build_topology(get_example("butterfly"))

    def test_ten_nodes(self, butterfly):
        assert butterfly.node_count == 10
        assert butterfly.edge_count == 16 + 8 + 1

    def test_rows_form_complete_bipartite_cross(self, butterfly):
        top, middle = butterfly.group_nodes(0), butterfly.group_nodes(1)
        for node in top:
            assert butterfly.neighbors(node) == sorted(middle)

    def test_bottom_pair_linked_to_each_other_and_row_above(self, butterfly):
        bottom = butterfly.group_nodes(2)
        middle = butterfly.group_nodes(1)
        assert butterfly.neighbors(bottom[0]) == sorted(middle + [bottom[1]])
        assert butterfly.neighbors(bottom[1]) == sorted(middle + [bottom[0]])

    def test_provenance(self, butterfly):
        by_rule = butterfly.links_by_rule()
        assert len(by_rule["0:full_mesh"]) == 24
        assert by_rule["shape:2"] == [Edge(NodeId(2, 0), NodeId(2, 1))]


@pytest.mark.parametrize("name", list(EXAMPLES))
def test_examples_have_no_duplicates_or_self_loops(name):
    topology = build_topology(get_example(name))
    assert duplicates(link.edge for link in topology.links) == []
    assert not any(edge.is_self_loop for edge in topology.edges)


@pytest.mark.parametrize("name", ["subnet-stars", "subnet-triangles"])
def test_removing_boundary_node_keeps_subnets_traversable(name):
    topology = build_topology(get_example(name))
    description = topology.description
    boundary = unique(
        node
        for rule, edges in topology.links_by_rule().items()
        if rule.endswith("cross_link")
        for edge in edges
        for node in edge.endpoints
    )
    assert boundary

    original = topology.degrees()
    for removed in boundary:
        reduced = topology.without_node(removed)
        neighbours = set(topology.neighbors(removed))

        for spec in description.groups:
            members = reduced.group_nodes(spec.name)
            internal = [e.endpoints for e in reduced.edges if e.a.group == e.b.group == spec.name]
            assert nx.is_connected(build_graph(members, internal))

        for node, degree in reduced.degrees().items():
            expected = original[node] - (1 if node in neighbours else 0)
            assert degree == expected


def test_without_node_leaves_original_untouched(tree):
    reduced = tree.without_node(NodeId(0, 0))
    assert reduced.node_count == 9
    assert reduced.edge_count == 18
    assert tree.edge_count == 20
    with pytest.raises(ValueError):
        reduced.without_node(NodeId(0, 0))


class TestMalformedDescriptions:

    def _build(self, groups, rules=()):
        return TopologyBuilder(TopologyDescription(name="bad", groups=groups, rules=list(rules))).build()

    def test_unknown_shape(self):
        with pytest.raises(UnknownShapeError) as exc:
            self._build([GroupSpec(name="a", count=5, shape="hexagon")])
        assert exc.value.shape == "hexagon"

    def test_triangle_with_wrong_size(self):
        with pytest.raises(InsufficientNodesError):
            self._build([GroupSpec(name="a", count=4, shape="triangle")])

    def test_star_needs_two_nodes(self):
        with pytest.raises(InsufficientNodesError):
            self._build([GroupSpec(name="a", count=1, shape="star")])

    def test_nonexistent_group(self):
        with pytest.raises(UnknownGroupError) as exc:
            self._build(
                [GroupSpec(name="a", count=3)],
                [ShapeRule(group="ghost", shape="triangle")],
            )
        assert isinstance(exc.value, InsufficientNodesError)

    def test_cross_link_needs_enough_boundary_nodes(self):
        with pytest.raises(InsufficientNodesError):
            self._build(
                [GroupSpec(name="a", count=3, boundary=[0]), GroupSpec(name="b", count=3)],
                [CrossLinkRule(between=("a", "b"), count=2)],
            )

    def test_full_mesh_needs_two_layers(self):
        with pytest.raises(InsufficientNodesError):
            self._build([GroupSpec(name=0, count=3)], [FullMeshRule()])

    def test_explicit_link_outside_group(self):
        with pytest.raises(InsufficientNodesError):
            self._build(
                [GroupSpec(name="a", count=2)],
                [LinksRule(links=[(NodeId("a", 0), NodeId("a", 5))])],
            )

    def test_explicit_self_link(self):
        with pytest.raises(DescriptionError):
            self._build(
                [GroupSpec(name="a", count=2)],
                [LinksRule(links=[(NodeId("a", 1), NodeId("a", 1))])],
            )

    def test_duplicate_group(self):
        with pytest.raises(DuplicateGroupError):
            self._build([GroupSpec(name="a", count=2), GroupSpec(name="a", count=3)])


def test_every_rule_kind_has_a_strategy():
    assert StrategyFactory.registered() == ["cross_link", "full_mesh", "links", "shape"]
    with pytest.raises(ValueError, match="已注册"):
        StrategyFactory.create("spiral")
