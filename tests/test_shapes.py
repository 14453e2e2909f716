import pytest

from topo_shapes.core.errors import DescriptionError, InsufficientNodesError, UnknownShapeError
from topo_shapes.core.models import GroupSpec, ShapeRule, TopologyDescription
from topo_shapes.core.types import NodeId, ShapeType
from topo_shapes.topology import (
    build_topology, calculate_shape_edges, check_shape_size, get_example, list_shapes,
    resolve_shape, shape_pairs,
)


def _nodes(n, group="s"):
    return [NodeId(group, i) for i in range(n)]


def _subnet(shape, count, step=1):
    description = TopologyDescription(
        name="shape",
        groups=[GroupSpec(name="s", count=count)],
        rules=[ShapeRule(group="s", shape=shape, step=step)],
    )
    return build_topology(description)


def test_resolve_shape_is_case_insensitive():
    assert resolve_shape("Triangle") is ShapeType.TRIANGLE
    with pytest.raises(UnknownShapeError):
        resolve_shape("pentagon", "s")


def test_triangle_is_three_mutual_edges():
    topology = _subnet("triangle", 3)
    assert topology.edge_count == 3
    assert set(topology.degrees().values()) == {2}


def test_star_hub_is_position_zero():
    topology = _subnet("star", 6)
    degrees = topology.degrees()
    assert degrees[NodeId("s", 0)] == 5
    assert all(degrees[NodeId("s", i)] == 1 for i in range(1, 6))


def test_square_is_four_cycle():
    topology = _subnet("square", 4)
    assert topology.edge_count == 4
    assert topology.neighbors(NodeId("s", 0)) == [NodeId("s", 1), NodeId("s", 3)]


def test_square_needs_exactly_four_nodes():
    with pytest.raises(InsufficientNodesError) as exc:
        _subnet("square", 5)
    assert exc.value.required == 4
    assert exc.value.available == 5


def test_line_has_two_ends():
    topology = _subnet("line", 5)
    degrees = topology.degrees()
    assert topology.edge_count == 4
    assert [degrees[n] for n in _nodes(5)] == [1, 2, 2, 2, 1]


def test_ring_with_stride():
    pairs = shape_pairs(ShapeType.RING, _nodes(10), step=3)
    assert len(pairs) == 10
    assert (NodeId("s", 7), NodeId("s", 0)) in pairs


def test_star_decagram_example():
    topology = build_topology(get_example("star-decagram"))
    assert topology.edge_count == 10
    assert set(topology.degrees().values()) == {2}
    assert topology.neighbors(NodeId("ring", 0)) == [NodeId("ring", 3), NodeId("ring", 7)]


def test_ring_stride_too_large():
    with pytest.raises(InsufficientNodesError):
        check_shape_size(ShapeType.RING, "s", 6, step=3)


def test_step_only_for_rings():
    with pytest.raises(DescriptionError):
        _subnet("line", 5, step=2)


def test_complete_shape():
    topology = _subnet("complete", 5)
    assert topology.edge_count == 10


@pytest.mark.parametrize("shape, count, step, edges", [
    ("triangle", 3, 1, 3),
    ("star", 5, 1, 4),
    ("square", 4, 1, 4),
    ("line", 5, 1, 4),
    ("ring", 10, 3, 10),
    ("complete", 4, 1, 6),
])
def test_calculate_shape_edges_matches_builder(shape, count, step, edges):
    assert calculate_shape_edges(shape, count, step) == edges
    assert _subnet(shape, count, step).edge_count == edges


def test_list_shapes():
    assert set(list_shapes()) == {s.value for s in ShapeType}
