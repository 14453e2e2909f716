import pytest

from topo_shapes.core.errors import ValidationFailure
from topo_shapes.core.models import GroupSpec, Link, LinksRule, Topology, TopologyDescription
from topo_shapes.core.types import Edge, NodeId
from topo_shapes.topology import (
    EXAMPLES, TopologyValidator, build_topology, get_example, validate_topology,
)


@pytest.mark.parametrize("name", list(EXAMPLES))
def test_examples_are_valid(name):
    report = validate_topology(build_topology(get_example(name)))
    assert report.valid, report.errors
    assert report.warnings == []


def test_expected_degrees_match_butterfly_rules():
    topology = build_topology(get_example("butterfly"))
    expected = TopologyValidator().expected_degrees(topology)
    assert expected[NodeId(0, 0)] == 4
    assert expected[NodeId(1, 0)] == 6
    assert expected[NodeId(2, 0)] == 5


def test_edge_produced_by_two_rules_is_a_duplicate():
    description = TopologyDescription(
        name="overlap",
        groups=[GroupSpec(name="a", count=3, shape="triangle")],
        rules=[LinksRule(links=[(NodeId("a", 0), NodeId("a", 1))])],
    )
    topology = build_topology(description)
    report = validate_topology(topology)
    assert not report.valid
    assert "duplicate_edge" in report.invariants()
    duplicate = next(v for v in report.violations if v.invariant == "duplicate_edge")
    assert set(duplicate.nodes) == {NodeId("a", 0), NodeId("a", 1)}
    assert "shape:a, 0:links" in duplicate.message


def test_pair_repeated_within_one_rule_names_the_rule_once():
    pair = (NodeId("a", 0), NodeId("a", 1))
    description = TopologyDescription(
        name="repeat",
        groups=[GroupSpec(name="a", count=2)],
        rules=[LinksRule(links=[pair, pair])],
    )
    report = validate_topology(build_topology(description))
    duplicate = next(v for v in report.violations if v.invariant == "duplicate_edge")
    assert duplicate.message.count("0:links") == 1
    assert "多条规则" not in duplicate.message


def test_self_loop_detected(tree):
    node = NodeId(0, 0)
    loop = Link(edge=Edge.model_construct(a=node, b=node), rule="manual")
    broken = Topology(description=tree.description, nodes=tree.nodes, links=tree.links + (loop,))
    report = validate_topology(broken)
    assert "self_loop" in report.invariants()


def test_unknown_node_detected(tree):
    stray = Link(edge=Edge(NodeId(0, 0), NodeId(9, 0)), rule="manual")
    broken = Topology(description=tree.description, nodes=tree.nodes, links=tree.links + (stray,))
    report = validate_topology(broken)
    assert "unknown_node" in report.invariants()


def test_missing_edge_is_a_degree_mismatch(tree):
    broken = Topology(description=tree.description, nodes=tree.nodes, links=tree.links[1:])
    report = validate_topology(broken)
    assert report.invariants() == {"degree_mismatch"}
    assert {n for v in report.violations for n in v.nodes} == set(tree.links[0].edge.endpoints)


def test_disconnected_topology_fails(split_description):
    report = validate_topology(build_topology(split_description))
    assert not report.valid
    assert report.invariants() == {"disconnected"}
    assert set(report.violations[0].nodes) == {NodeId("right", i) for i in range(3)}


def test_partition_allowed_becomes_warning(split_description):
    description = split_description.model_copy(update={"allow_partition": True})
    report = validate_topology(build_topology(description))
    assert report.valid
    assert report.warning_count == 1


def test_validate_or_raise(split_description):
    topology = build_topology(split_description)
    with pytest.raises(ValidationFailure) as exc:
        TopologyValidator().validate_or_raise(topology)
    assert exc.value.invariants == {"disconnected"}
    assert exc.value.report.violation_count == 1


def test_validation_does_not_mutate(tree):
    before = tree.model_dump()
    validate_topology(tree)
    assert tree.model_dump() == before
