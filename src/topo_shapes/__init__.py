"""
Topology Shapes Package

Declarative layered / sub-netted topology descriptions, a rule-driven
builder and a structural validator.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .core.types import NodeId, Edge, ValidationReport
from .core.models import TopologyDescription, Topology
from .topology import TopologyBuilder, TopologyValidator, build_topology, validate_topology

__all__ = [
    "NodeId",
    "Edge",
    "ValidationReport",
    "TopologyDescription",
    "Topology",
    "TopologyBuilder",
    "TopologyValidator",
    "build_topology",
    "validate_topology",
]
