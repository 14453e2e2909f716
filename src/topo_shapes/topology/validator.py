"""
拓扑验证器
检查重复边、自环、未知节点、度数与连通性
"""

from __future__ import annotations

from collections import Counter
from typing import List

from ..core.errors import ValidationFailure
from ..core.models import Topology
from ..core.types import InvariantKind, ValidationReport, Violation
from ..utils.functional import duplicates, unique
from ..utils.graph import build_graph, ordered_components
from ..utils.logging import get_logger
from .registry import NodeRegistry
from .strategies import RuleStrategies

logger = get_logger(__name__)


class TopologyValidator:
    """拓扑验证器（只读，不修改拓扑）"""

    def validate(self, topology: Topology) -> ValidationReport:
        violations: List[Violation] = []
        warnings: List[str] = []

        violations.extend(self._check_self_loops(topology))
        violations.extend(self._check_unknown_nodes(topology))
        violations.extend(self._check_duplicates(topology))
        violations.extend(self._check_degrees(topology))

        partitions = self._check_connectivity(topology)
        if partitions:
            if topology.description.allow_partition:
                warnings.extend(v.message for v in partitions)
            else:
                violations.extend(partitions)

        if violations:
            logger.warning(
                "validation_failed",
                topology=topology.name,
                violations=len(violations),
                invariants=sorted({str(v.invariant) for v in violations}),
            )
            return ValidationReport.create_invalid(violations, warnings)

        logger.debug("validation_passed", topology=topology.name, warnings=len(warnings))
        return ValidationReport.create_valid(warnings)

    def validate_or_raise(self, topology: Topology) -> ValidationReport:
        """验证失败时抛出 ValidationFailure"""
        report = self.validate(topology)
        if not report.valid:
            raise ValidationFailure(report)
        return report

    def expected_degrees(self, topology: Topology) -> Counter:
        """按规则语义计算每个节点的期望度数"""
        description = topology.description
        registry = NodeRegistry.from_description(description)
        expected: Counter = Counter()
        for _, rule in description.labelled_rules():
            expected.update(RuleStrategies.expected_degrees(rule, registry, description))
        return expected

    def _check_self_loops(self, topology: Topology) -> List[Violation]:
        return [
            Violation(
                invariant=InvariantKind.SELF_LOOP,
                message=f"节点 {link.edge.a} 存在自环 (规则 {link.rule})",
                nodes=(link.edge.a,),
            )
            for link in topology.links
            if link.edge.is_self_loop
        ]

    def _check_unknown_nodes(self, topology: Topology) -> List[Violation]:
        known = set(topology.nodes)
        violations = []
        for link in topology.links:
            missing = tuple(n for n in link.edge.endpoints if n not in known)
            if missing:
                violations.append(Violation(
                    invariant=InvariantKind.UNKNOWN_NODE,
                    message=f"边 {link.edge} 引用了未注册的节点: {', '.join(map(str, missing))}",
                    nodes=missing,
                ))
        return violations

    def _check_duplicates(self, topology: Topology) -> List[Violation]:
        violations = []
        for edge in duplicates(link.edge for link in topology.links):
            rules = unique(topology.rules_for(edge))
            if len(rules) == 1:
                message = f"边 {edge} 在规则 {rules[0]} 中重复出现"
            else:
                message = f"边 {edge} 被多条规则重复生成: {', '.join(rules)}"
            violations.append(Violation(
                invariant=InvariantKind.DUPLICATE_EDGE,
                message=message,
                nodes=edge.endpoints,
            ))
        return violations

    def _check_degrees(self, topology: Topology) -> List[Violation]:
        expected = self.expected_degrees(topology)
        actual = topology.degrees()
        violations = []
        for node in topology.nodes:
            want, got = expected.get(node, 0), actual.get(node, 0)
            if want != got:
                violations.append(Violation(
                    invariant=InvariantKind.DEGREE_MISMATCH,
                    message=f"节点 {node} 的度数为 {got}，规则要求 {want}",
                    nodes=(node,),
                ))
        return violations

    def _check_connectivity(self, topology: Topology) -> List[Violation]:
        graph = build_graph(topology.nodes, (e.endpoints for e in topology.edges))
        components = ordered_components(graph, topology.nodes)
        if len(components) <= 1:
            return []
        return [
            Violation(
                invariant=InvariantKind.DISCONNECTED,
                message=(
                    f"拓扑不连通: 共 {len(components)} 个连通分量，"
                    f"分量 {i} 含 {len(component)} 个节点 ({', '.join(n.label for n in component[:5])}"
                    f"{', ...' if len(component) > 5 else ''})"
                ),
                nodes=tuple(component),
            )
            for i, component in enumerate(components[1:], start=1)
        ]


def validate_topology(topology: Topology) -> ValidationReport:
    return TopologyValidator().validate(topology)
