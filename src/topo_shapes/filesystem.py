"""
文件系统操作模块
读取拓扑描述（YAML/JSON/TOML、邻接表网络配置），使用 anyio 异步写出结果文件
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import yaml
from anyio import Path as AsyncPath
from pydantic import ValidationError

from .core.errors import DescriptionError
from .core.models import GroupSpec, LinksRule, Topology, TopologyDescription
from .core.types import Failure, GroupKind, NodeId, OutputFormat, Result, Success
from .utils.graph import enum_value

# 邻接表网络配置中的分组段，以及各段存放邻居的字段
NETWORK_SECTIONS: Dict[str, Tuple[str, ...]] = {
    "node": ("connected_node_ids",),
    "drone": ("connected_node_ids",),
    "client": ("connected_drone_ids",),
    "server": ("connected_drone_ids",),
}

DESCRIPTION_SUFFIXES = (".yaml", ".yml", ".json", ".toml")


def read_document(path: Path) -> Dict[str, Any]:
    """按扩展名解析 YAML / JSON / TOML 文档"""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in DESCRIPTION_SUFFIXES:
        raise DescriptionError(f"不支持的描述文件格式: {path.name} (支持 {', '.join(DESCRIPTION_SUFFIXES)})")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptionError(f"无法读取描述文件 {path}: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise DescriptionError(f"描述文件解析失败 {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise DescriptionError(f"描述文件顶层必须是映射: {path.name}")
    return data


def is_network_config(data: Mapping[str, Any]) -> bool:
    return "groups" not in data and any(section in data for section in NETWORK_SECTIONS)


def parse_description(data: Mapping[str, Any], default_name: str = "topology") -> TopologyDescription:
    """把已解析的文档转换为 TopologyDescription"""
    if is_network_config(data):
        return network_config_to_description(data, default_name)
    payload = dict(data)
    payload.setdefault("name", default_name)
    try:
        return TopologyDescription.model_validate(payload)
    except ValidationError as e:
        raise DescriptionError(f"拓扑描述无效: {e}") from e


def load_description(path: Path) -> TopologyDescription:
    """从文件加载拓扑描述"""
    path = Path(path)
    data = read_document(path)
    return parse_description(data, default_name=_name_from_path(path))


def _name_from_path(path: Path) -> str:
    stem = path.name.split(".")[0] or "topology"
    return "".join(c if c.isalnum() or c in "_-" else "-" for c in stem)


def _section_entries(data: Mapping[str, Any], section: str) -> List[Mapping[str, Any]]:
    entries = data.get(section) or []
    if isinstance(entries, Mapping):
        entries = [entries]
    if not isinstance(entries, list) or not all(isinstance(e, Mapping) for e in entries):
        raise DescriptionError(f"网络配置段 [{section}] 必须是表数组")
    return entries


def _node_key(value: Any, where: str) -> Any:
    """网络配置中的节点 id 只能是整数或字符串"""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise DescriptionError(f"{where} 的 id 必须是整数或字符串: {value!r}")
    return value


def _peer_keys(entry: Mapping[str, Any], fields: Tuple[str, ...], where: str) -> List[Any]:
    peers: List[Any] = []
    for field in fields:
        value = entry.get(field)
        if value is None:
            continue
        if not isinstance(value, list):
            raise DescriptionError(f"{where} 的 {field} 必须是 id 列表: {value!r}")
        peers.extend(_node_key(peer, f"{where} 的 {field}") for peer in value)
    return peers


def network_config_to_description(data: Mapping[str, Any], name: str) -> TopologyDescription:
    """邻接表网络配置 -> 拓扑描述

    每个段成为一个子网分组，节点按出现顺序编号；邻接关系必须对称
    """
    ids: Dict[int, NodeId] = {}
    neighbours: Dict[int, List[int]] = {}
    groups: List[GroupSpec] = []

    for section, fields in NETWORK_SECTIONS.items():
        entries = _section_entries(data, section)
        if not entries:
            continue
        for position, entry in enumerate(entries):
            where = f"网络配置段 [{section}] 的第 {position} 项"
            if "id" not in entry:
                raise DescriptionError(f"{where}缺少 id")
            node_id = _node_key(entry["id"], where)
            if node_id in ids:
                raise DescriptionError(f"重复的节点 id: {node_id}")
            ids[node_id] = NodeId(group=section, position=position)
            neighbours[node_id] = _peer_keys(entry, fields, where)
        groups.append(GroupSpec(name=section, count=len(entries), kind=GroupKind.SUBNET))

    if not groups:
        raise DescriptionError("网络配置中没有任何节点")

    pairs: List[Tuple[NodeId, NodeId]] = []
    seen = set()
    for node_id, peers in neighbours.items():
        for peer in peers:
            if peer not in ids:
                raise DescriptionError(f"节点 {node_id} 连接了未知的 id: {peer}")
            if peer == node_id:
                raise DescriptionError(f"节点 {node_id} 连接了自身")
            if node_id not in neighbours[peer]:
                raise DescriptionError(f"邻接关系不对称: {node_id} -> {peer} 缺少反向连接")
            key = frozenset((node_id, peer))
            if key not in seen:
                seen.add(key)
                pairs.append((ids[node_id], ids[peer]))

    rules = [LinksRule(links=pairs)] if pairs else []
    try:
        return TopologyDescription(
            name=name,
            summary="从邻接表网络配置导入",
            groups=groups,
            rules=rules,
        )
    except ValidationError as e:
        raise DescriptionError(f"网络配置无效: {e}") from e


def topology_to_adjacency(topology: Topology) -> Dict[str, Any]:
    """拓扑 -> 邻接表网络配置（整数 id 按节点注册顺序）"""
    index = {node: i for i, node in enumerate(topology.nodes)}
    adjacency = topology.adjacency()
    return {
        "node": [
            {
                "id": index[node],
                "label": node.label,
                "connected_node_ids": [index[peer] for peer in adjacency.get(node, []) if peer in index],
            }
            for node in topology.nodes
        ]
    }


def dump_document(data: Any, output_format: OutputFormat | str = OutputFormat.YAML) -> str:
    if enum_value(output_format) == OutputFormat.JSON.value:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def output_filename(name: str, kind: str, output_format: OutputFormat | str) -> str:
    return f"{name}.{kind}{OutputFormat(enum_value(output_format)).suffix}"


class FileSystemManager:
    """文件系统管理器"""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    async def create_directory(self) -> Result:
        try:
            await AsyncPath(self.base_dir).mkdir(parents=True, exist_ok=True)
            return Success(self.base_dir, f"输出目录就绪: {self.base_dir}")
        except OSError as e:
            return Failure(f"目录创建失败: {e}")

    async def write_text(self, filename: str, content: str) -> Result:
        """写入单个文件"""
        try:
            file_path = AsyncPath(self.base_dir) / filename
            async with await file_path.open("w", encoding="utf-8") as f:
                await f.write(content)
            return Success(self.base_dir / filename, f"成功写入 {filename}")
        except OSError as e:
            return Failure(f"文件写入失败 {filename}: {e}")

    async def write_topology(self, topology: Topology, output_format: OutputFormat | str) -> Result:
        """写入节点、边及其规则来源"""
        filename = output_filename(topology.name, "topology", output_format)
        return await self.write_text(filename, dump_document(topology.to_summary(), output_format))

    async def write_adjacency(self, topology: Topology, output_format: OutputFormat | str) -> Result:
        """写入邻接表网络配置"""
        filename = output_filename(topology.name, "adjacency", output_format)
        return await self.write_text(filename, dump_document(topology_to_adjacency(topology), output_format))

    async def write_report(self, name: str, content: str) -> Result:
        return await self.write_text(f"{name}.report.md", content)
