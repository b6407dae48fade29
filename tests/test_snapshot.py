"""Tests for snapshot views: region filtering, flat render collections, exports."""

import json

import pytest

from peerglobe.geo import RegionTag
from peerglobe.graph import EdgeKind, NodeCategory
from peerglobe.metrics import compute_topology_metrics
from peerglobe.topology import assemble_topology


@pytest.fixture
def snapshot(reference_records, partnership_records):
    return assemble_topology(reference_records, partnership_records)


def test_filter_regions_returns_new_view(snapshot):
    apac = snapshot.filter_regions([RegionTag.APAC])

    assert [f.name for f in apac.facility_nodes] == ["Singapore"]
    assert {p.facility.name for p in apac.positioned_partners} == {"Singapore"}
    assert apac.backbone_edges == ()
    assert apac.hub_names() == {
        "APAC": "Singapore",
        "EMEA": None,
        "NA": None,
        "LATAM": None,
    }
    # original untouched
    assert len(snapshot.facility_nodes) == 5
    assert len(snapshot.backbone_edges) == 3


def test_filter_regions_keeps_edges_between_active_regions(snapshot):
    view = snapshot.filter_regions(["APAC", "EMEA"])
    assert [e.key() for e in view.backbone_edges] == ["APAC->EMEA"]
    assert {f.name for f in view.facility_nodes} == {"Dublin", "Singapore", "Frankfurt"}


def test_filter_is_idempotent(snapshot):
    once = snapshot.filter_regions([RegionTag.EMEA, RegionTag.NA])
    twice = once.filter_regions([RegionTag.EMEA, RegionTag.NA])
    assert once == twice


def test_nodes_are_tagged(snapshot):
    nodes = snapshot.nodes()
    categories = [n.category for n in nodes]

    assert categories[:2] == [NodeCategory.REFERENCE, NodeCategory.REFERENCE]
    assert categories[2:5] == [NodeCategory.POP] * 3
    assert categories[5:] == [NodeCategory.PARTNER] * 4

    hubs = {n.text for n in nodes if n.is_hub}
    assert hubs == {"Singapore", "Frankfurt", "Ashburn"}

    pop = nodes[2]
    assert pop.color == snapshot.render.pop_pin_color
    assert pop.radius == snapshot.render.pop_pin_radius


def test_labels_skip_pops(snapshot):
    labels = snapshot.labels()
    assert [lb.text for lb in labels[:2]] == ["Los Angeles", "Dublin"]
    assert all(lb.category is NodeCategory.PARTNER for lb in labels[2:])
    assert len(labels) == 2 + 4
    assert "Frankfurt" not in [lb.text for lb in labels]


def test_edges_local_then_backbone(snapshot):
    edges = snapshot.edges()
    kinds = [e.kind for e in edges]
    assert kinds == [EdgeKind.LOCAL] * 4 + [EdgeKind.BACKBONE] * 3

    backbone = edges[-1]
    assert backbone.altitude == snapshot.render.backbone_arc_altitude
    assert backbone.from_region == "APAC"
    assert backbone.to_region == "NA"


def test_to_dict_is_json_serializable(snapshot):
    payload = json.loads(json.dumps(snapshot.to_dict()))
    assert set(payload) == {"nodes", "labels", "edges", "hubs"}
    assert payload["edges"][0]["kind"] == "local"
    assert payload["nodes"][0]["category"] == "reference"
    assert payload["hubs"]["LATAM"] is None


def test_to_networkx(snapshot):
    G = snapshot.to_networkx()
    assert G.number_of_nodes() == 5 + 4
    assert G.number_of_edges() == 4 + 3
    kinds = [d["kind"] for _, _, d in G.edges(data=True)]
    assert kinds.count("backbone") == 3


def test_find_facility(snapshot):
    assert [f.name for f in snapshot.find_facility("FRANK")] == ["Frankfurt"]
    assert snapshot.find_facility("") == []
    assert snapshot.find_facility("atlantis") == []


def test_is_hub(snapshot):
    dublin = snapshot.find_facility("dublin")[0]
    frankfurt = snapshot.find_facility("frankfurt")[0]
    assert snapshot.is_hub(frankfurt)
    assert not snapshot.is_hub(dublin)


def test_metrics(snapshot):
    metrics = compute_topology_metrics(snapshot)
    assert metrics["reference_sites"] == 2
    assert metrics["pops"] == 3
    assert metrics["partners"] == 4
    assert metrics["local_arcs"] == 4
    assert metrics["backbone_edges"] == 3
    assert metrics["resolved_hubs"] == 3
    assert metrics["backbone_components"] == 1
    assert metrics["backbone_density"] == pytest.approx(1.0)
    assert metrics["avg_arcs_per_pop"] == pytest.approx(4 / 3)


def test_metrics_empty():
    metrics = compute_topology_metrics(assemble_topology([], []))
    assert metrics["resolved_hubs"] == 0
    assert metrics["backbone_components"] == 0
    assert metrics["mean_local_arc_km"] == 0.0


def test_facilities_by_region_only_groups_pops(snapshot):
    grouped = snapshot.facilities_by_region()
    assert [f.name for f in grouped[RegionTag.NA]] == ["Ashburn"]
    assert [f.name for f in grouped[RegionTag.EMEA]] == ["Frankfurt"]
    assert grouped[RegionTag.LATAM] == []


def test_to_networkx_keeps_identical_facilities_apart():
    tokyo = {"city": "Tokyo", "lat": 35.68, "lng": 139.65, "partners": ["NTT"]}
    snapshot = assemble_topology([], [tokyo, dict(tokyo)])
    assert len(snapshot.local_arcs) == 2

    G = snapshot.to_networkx()
    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 2
    assert set(G.edges()) == {("facility:0", "partner:0"), ("facility:1", "partner:1")}


def test_to_networkx_after_region_filter(snapshot):
    G = snapshot.filter_regions([RegionTag.EMEA]).to_networkx()
    assert G.number_of_nodes() == 2 + 2
    assert {G.nodes[p]["name"] for p in G.successors("facility:1")} == {"Colt", "DE-CIX"}
