from peerglobe.metrics.topology_metrics import backbone_graph, compute_topology_metrics

__all__ = [
    "backbone_graph",
    "compute_topology_metrics",
]
