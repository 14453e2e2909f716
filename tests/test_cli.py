import textwrap

import yaml
from typer.testing import CliRunner

from topo_shapes import __version__
from topo_shapes.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_examples_lists_catalog():
    result = runner.invoke(app, ["examples"])
    assert result.exit_code == 0
    assert "tree" in result.output
    assert "butterfly" in result.output


def test_build_example(tmp_path):
    result = runner.invoke(app, ["--output-dir", str(tmp_path), "build", "--example", "tree", "--yes"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "tree.topology.yaml").exists()
    assert (tmp_path / "tree.report.md").exists()


def test_build_dry_run_skips_confirmation(tmp_path):
    result = runner.invoke(app, ["--dry-run", "--output-dir", str(tmp_path), "build", "-e", "butterfly"])
    assert result.exit_code == 0, result.output
    assert list(tmp_path.iterdir()) == []


def test_build_cancelled(tmp_path):
    result = runner.invoke(app, ["--output-dir", str(tmp_path), "build", "-e", "tree"], input="n\n")
    assert result.exit_code == 0
    assert list(tmp_path.iterdir()) == []


def test_build_needs_a_source():
    result = runner.invoke(app, ["build", "--yes"])
    assert result.exit_code == 1


def test_build_from_file_json_format(tmp_path):
    path = tmp_path / "ring.yaml"
    path.write_text(textwrap.dedent("""
        name: ring10
        groups:
          - {name: ring, count: 10}
        rules:
          - {kind: shape, group: ring, shape: ring, step: 3}
    """))
    out = tmp_path / "out"
    result = runner.invoke(app, ["-o", str(out), "build", "-f", str(path), "--format", "json", "-y"])
    assert result.exit_code == 0, result.output
    assert (out / "ring10.topology.json").exists()
    assert (out / "ring10.adjacency.json").exists()


def test_validate_valid_example():
    result = runner.invoke(app, ["validate", "--example", "subnet-triangles"])
    assert result.exit_code == 0, result.output


def test_validate_disconnected_file(tmp_path):
    path = tmp_path / "split.yaml"
    path.write_text(yaml.safe_dump({
        "name": "split",
        "groups": [
            {"name": "left", "count": 3, "shape": "triangle"},
            {"name": "right", "count": 3, "shape": "triangle"},
        ],
    }))
    result = runner.invoke(app, ["validate", "--file", str(path)])
    assert result.exit_code == 1


def test_validate_unknown_shape(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"name": "bad", "groups": [{"name": "a", "count": 3, "shape": "blob"}]}))
    result = runner.invoke(app, ["validate", "-f", str(path)])
    assert result.exit_code == 1


def test_from_config(tmp_path):
    config = tmp_path / "settings.yaml"
    out = tmp_path / "out"
    config.write_text(yaml.safe_dump({
        "example": "subnet-stars",
        "output_dir": str(out),
        "output_format": "json",
        "write_report": False,
    }))
    result = runner.invoke(app, ["--config-file", str(config), "from-config", "--yes"])
    assert result.exit_code == 0, result.output
    assert (out / "subnet-stars.topology.json").exists()
    assert not (out / "subnet-stars.report.md").exists()


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["--config-file", str(tmp_path / "nope.yaml"), "examples"])
    assert result.exit_code == 1
