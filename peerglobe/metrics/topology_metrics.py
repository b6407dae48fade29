from typing import Dict

import networkx as nx
import numpy as np

from peerglobe.graph.snapshot import TopologySnapshot


def backbone_graph(snapshot: TopologySnapshot) -> nx.Graph:
    """Undirected region graph: one node per resolved hub, one edge per backbone arc."""
    G = nx.Graph()
    for region, hub in snapshot.hub_assignments.items():
        if hub is not None:
            G.add_node(region.value, hub=hub.name)
    for edge in snapshot.backbone_edges:
        G.add_edge(
            edge.from_region.value, edge.to_region.value, distance_km=edge.distance_km
        )
    return G


def compute_topology_metrics(snapshot: TopologySnapshot) -> Dict[str, float]:
    n_pops = len(snapshot.pop_facilities)
    n_local = len(snapshot.local_arcs)

    if n_local:
        distances = np.array([a.distance_km for a in snapshot.local_arcs], dtype=float)
        mean_local = float(distances.mean())
        max_local = float(distances.max())
    else:
        mean_local = 0.0
        max_local = 0.0

    backbone = backbone_graph(snapshot)
    n_hubs = backbone.number_of_nodes()
    if n_hubs == 0:
        components = 0
        density = 0.0
    else:
        components = nx.number_connected_components(backbone)
        density = nx.density(backbone) if n_hubs > 1 else 0.0

    return {
        "reference_sites": len(snapshot.reference_facilities),
        "pops": n_pops,
        "partners": len(snapshot.positioned_partners),
        "local_arcs": n_local,
        "backbone_edges": len(snapshot.backbone_edges),
        "resolved_hubs": n_hubs,
        "avg_arcs_per_pop": n_local / n_pops if n_pops else 0.0,
        "mean_local_arc_km": mean_local,
        "max_local_arc_km": max_local,
        "backbone_components": components,
        "backbone_density": density,
    }
