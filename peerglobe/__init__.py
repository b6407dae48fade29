"""
peerglobe: deterministic topology for the peering coverage globe.

Main interface: assemble_topology()
"""

__version__ = "0.1.0"

from peerglobe.config import TopologyConfig, load_config
from peerglobe.graph import TopologySnapshot
from peerglobe.pipeline import RecordValidationError
from peerglobe.topology import TopologyAssembler, assemble_topology

__all__ = [
    "TopologyConfig",
    "load_config",
    "TopologySnapshot",
    "RecordValidationError",
    "TopologyAssembler",
    "assemble_topology",
]
