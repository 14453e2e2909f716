import pytest

from topo_shapes.core.errors import (
    DuplicateGroupError, InsufficientNodesError, UnknownGroupError,
)
from topo_shapes.core.types import NodeId
from topo_shapes.topology import NodeRegistry, get_example


def test_nodes_partitioned_in_input_order():
    registry = NodeRegistry([(0, 1), (1, 2), ("edge", 2)])
    assert registry.group_names == [0, 1, "edge"]
    assert registry.nodes(1) == (NodeId(1, 0), NodeId(1, 1))
    assert list(registry) == [
        NodeId(0, 0), NodeId(1, 0), NodeId(1, 1), NodeId("edge", 0), NodeId("edge", 1),
    ]
    assert len(registry) == 5


def test_node_ids_are_unique():
    registry = NodeRegistry.from_description(get_example("butterfly"))
    assert len(set(registry.all_nodes)) == len(registry) == 10


def test_duplicate_group_rejected():
    with pytest.raises(DuplicateGroupError) as exc:
        NodeRegistry([("north", 3), ("south", 3), ("north", 2)])
    assert exc.value.group == "north"


def test_layer_and_subnet_names_do_not_collide():
    registry = NodeRegistry([(1, 2), ("1", 2)])
    assert registry.nodes(1) != registry.nodes("1")


def test_unknown_group():
    registry = NodeRegistry([("north", 3)])
    with pytest.raises(UnknownGroupError):
        registry.nodes("south")
    assert not registry.has_group("south")


def test_position_out_of_range():
    registry = NodeRegistry([("north", 3)])
    assert registry.node("north", 2) == NodeId("north", 2)
    with pytest.raises(InsufficientNodesError):
        registry.node("north", 3)


def test_index_of_is_stable():
    registry = NodeRegistry([(0, 2), (1, 2)])
    assert [registry.index_of(n) for n in registry] == [0, 1, 2, 3]
    with pytest.raises(KeyError):
        registry.index_of(NodeId(5, 0))
    assert NodeId(1, 1) in registry
