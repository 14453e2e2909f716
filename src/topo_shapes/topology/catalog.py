"""
示例拓扑目录
tree / butterfly / subnet-stars / subnet-triangles / double-chain / star-decagram
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List

from ..core.errors import DescriptionError
from ..core.models import CrossLinkRule, FullMeshRule, GroupSpec, ShapeRule, TopologyDescription
from ..core.types import CrossLinkPattern, GroupKind, ShapeType


class ExampleName(str, Enum):
    """内置示例名称"""
    TREE = "tree"
    BUTTERFLY = "butterfly"
    SUBNET_STARS = "subnet-stars"
    SUBNET_TRIANGLES = "subnet-triangles"
    DOUBLE_CHAIN = "double-chain"
    STAR_DECAGRAM = "star-decagram"


def create_tree_sample() -> TopologyDescription:
    """分层树：1-2-3-4 个节点，相邻层全互联，共 20 条边"""
    return TopologyDescription.layered(
        ExampleName.TREE.value,
        [1, 2, 3, 4],
        summary="四层树，相邻层全互联",
    )


def create_butterfly_sample() -> TopologyDescription:
    """蝶形：两排 4 节点交叉全连，底部 2 个节点互联并连接上一排所有节点"""
    return TopologyDescription(
        name=ExampleName.BUTTERFLY.value,
        summary="4-4-2 蝶形，底部两个节点互联",
        groups=[
            GroupSpec(name=0, count=4, kind=GroupKind.LAYER),
            GroupSpec(name=1, count=4, kind=GroupKind.LAYER),
            GroupSpec(name=2, count=2, kind=GroupKind.LAYER, shape=ShapeType.COMPLETE.value),
        ],
        rules=[FullMeshRule()],
    )


def create_subnet_stars_sample() -> TopologyDescription:
    """两个 5 节点星形子网，各以两个辐条作为边界节点互联"""
    return TopologyDescription(
        name=ExampleName.SUBNET_STARS.value,
        summary="两个星形子网，2x2 边界节点全互联",
        groups=[
            GroupSpec(name="north", count=5, shape=ShapeType.STAR.value, boundary=[3, 4]),
            GroupSpec(name="south", count=5, shape=ShapeType.STAR.value, boundary=[3, 4]),
        ],
        rules=[
            CrossLinkRule(between=("north", "south"), count=2, pattern=CrossLinkPattern.COMPLETE),
        ],
    )


def create_subnet_triangles_sample() -> TopologyDescription:
    """三个三角形子网串联，边界节点一对一连接"""
    return TopologyDescription(
        name=ExampleName.SUBNET_TRIANGLES.value,
        summary="三个三角形子网，边界节点逐对串联",
        groups=[
            GroupSpec(name=name, count=3, shape=ShapeType.TRIANGLE.value, boundary=[1, 2])
            for name in ("a", "b", "c")
        ],
        rules=[
            CrossLinkRule(between=("a", "b"), count=2, pattern=CrossLinkPattern.PAIRWISE),
            CrossLinkRule(between=("b", "c"), count=2, pattern=CrossLinkPattern.PAIRWISE),
        ],
    )


def create_double_chain_sample() -> TopologyDescription:
    """两条 5 节点链，对应位置逐一相连（梯形）"""
    return TopologyDescription(
        name=ExampleName.DOUBLE_CHAIN.value,
        summary="双链梯形",
        groups=[
            GroupSpec(name=name, count=5, shape=ShapeType.LINE.value, boundary=list(range(5)))
            for name in ("left", "right")
        ],
        rules=[
            CrossLinkRule(between=("left", "right"), count=5, pattern=CrossLinkPattern.PAIRWISE),
        ],
    )


def create_star_decagram_sample() -> TopologyDescription:
    """十角星 {10/3}：10 个节点的环，步长 3"""
    return TopologyDescription(
        name=ExampleName.STAR_DECAGRAM.value,
        summary="十角星，10 节点步长 3 的环",
        groups=[GroupSpec(name="ring", count=10)],
        rules=[ShapeRule(group="ring", shape=ShapeType.RING.value, step=3)],
    )


EXAMPLES: Dict[str, Callable[[], TopologyDescription]] = {
    ExampleName.TREE.value: create_tree_sample,
    ExampleName.BUTTERFLY.value: create_butterfly_sample,
    ExampleName.SUBNET_STARS.value: create_subnet_stars_sample,
    ExampleName.SUBNET_TRIANGLES.value: create_subnet_triangles_sample,
    ExampleName.DOUBLE_CHAIN.value: create_double_chain_sample,
    ExampleName.STAR_DECAGRAM.value: create_star_decagram_sample,
}


def list_examples() -> List[str]:
    return list(EXAMPLES)


def get_example(name: str) -> TopologyDescription:
    """按名称获取示例描述"""
    key = name.value if isinstance(name, ExampleName) else str(name).strip().lower()
    try:
        factory = EXAMPLES[key]
    except KeyError:
        raise DescriptionError(
            f"未知的示例拓扑: {name!r}，可选: {', '.join(EXAMPLES)}"
        ) from None
    return factory()
