import pytest

from topo_shapes.core.models import GroupSpec, TopologyDescription
from topo_shapes.topology import build_topology, get_example


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def tree():
    return build_topology(get_example("tree"))


@pytest.fixture
def split_description():
    """两个互不相连的三角形子网"""
    return TopologyDescription(
        name="split",
        groups=[
            GroupSpec(name="left", count=3, shape="triangle"),
            GroupSpec(name="right", count=3, shape="triangle"),
        ],
    )
