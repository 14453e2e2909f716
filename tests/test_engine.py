import json

import pytest

from topo_shapes.config import AppSettings
from topo_shapes.core.models import GroupSpec, TopologyDescription
from topo_shapes.engine import TopologyEngine, generate_topology
from topo_shapes.topology import EXAMPLES, get_example


def _settings(tmp_path, **overrides):
    return AppSettings(output_dir=tmp_path, **overrides)


def test_build_returns_topology_and_report():
    topology, report = TopologyEngine().build(get_example("tree"))
    assert topology.edge_count == 20
    assert report.valid


@pytest.mark.anyio
async def test_run_writes_outputs(tmp_path):
    result = await TopologyEngine(_settings(tmp_path)).run(get_example("tree"))

    assert result.success
    assert result.output_dir == tmp_path
    assert result.stats["edges"] == 20
    for filename in ("tree.topology.yaml", "tree.adjacency.yaml", "tree.report.md"):
        assert (tmp_path / filename).exists()
    assert "L0.0" in (tmp_path / "tree.report.md").read_text()


@pytest.mark.anyio
async def test_run_json_without_optional_outputs(tmp_path):
    settings = _settings(tmp_path, output_format="json", write_report=False, write_adjacency=False)
    result = await TopologyEngine(settings).run(get_example("subnet-stars"))

    assert result.success
    assert sorted(p.name for p in tmp_path.iterdir()) == ["subnet-stars.topology.json"]
    data = json.loads((tmp_path / "subnet-stars.topology.json").read_text())
    assert data["stats"]["edges"] == 12


@pytest.mark.anyio
async def test_dry_run_writes_nothing(tmp_path):
    result = await TopologyEngine(_settings(tmp_path, dry_run=True)).run(get_example("butterfly"))
    assert result.success
    assert result.output_dir is None
    assert list(tmp_path.iterdir()) == []


@pytest.mark.anyio
async def test_description_error_becomes_failed_result(tmp_path):
    description = TopologyDescription(
        name="bad-triangle",
        groups=[GroupSpec(name="a", count=4, shape="triangle")],
    )
    result = await generate_topology(description, _settings(tmp_path))
    assert not result.success
    assert result.error_details.startswith("InsufficientNodesError")
    assert list(tmp_path.iterdir()) == []


@pytest.mark.anyio
async def test_validation_failure_reported(tmp_path, split_description):
    result = await TopologyEngine(_settings(tmp_path)).run(split_description)
    assert not result.success
    assert result.stats["violations"] == 1
    assert result.errors and "disconnected" in result.errors[0]
    assert "disconnected" in (tmp_path / "split.report.md").read_text()


@pytest.mark.anyio
async def test_run_many_keeps_input_order(tmp_path):
    descriptions = [get_example(name) for name in reversed(list(EXAMPLES))]
    results = await TopologyEngine(_settings(tmp_path, max_workers=2)).run_many(descriptions)

    assert [r.name for r in results] == [d.name for d in descriptions]
    assert all(r.success for r in results)
    assert len(list(tmp_path.glob("*.topology.yaml"))) == len(EXAMPLES)
