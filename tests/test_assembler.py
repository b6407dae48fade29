"""End-to-end tests for topology assembly."""

import copy

import pytest

from peerglobe.config import TopologyConfig
from peerglobe.geo import GeoPoint, RegionTag
from peerglobe.graph import FacilityRole
from peerglobe.pipeline import RecordValidationError, validate_partnership_record
from peerglobe.topology import TopologyAssembler, assemble_topology, normalize_partners
from peerglobe.topology.assembler import partner_records, pop_facility


def test_single_pop_end_to_end():
    records = [
        {
            "city": "Singapore",
            "lat": 1.35,
            "lng": 103.82,
            "partners": [{"name": n} for n in ("Singtel", "StarHub", "M1", "MyRepublic")],
        }
    ]
    snapshot = assemble_topology([], records)

    assert len(snapshot.positioned_partners) == 4
    assert len(snapshot.local_arcs) == 4
    assert all(arc.distance_km >= 15.0 for arc in snapshot.local_arcs)

    (pop,) = snapshot.facility_nodes
    assert pop.role is FacilityRole.POP
    assert pop.region is RegionTag.APAC
    assert pop.partner_count == 4
    assert snapshot.hub_assignments[RegionTag.APAC] == pop
    assert snapshot.backbone_edges == ()


def test_partners_are_normalized_and_sorted(partnership_records):
    snapshot = assemble_topology([], partnership_records)
    singapore = snapshot.find_facility("singapore")[0]

    names = [p.name for p in snapshot.partners_of(singapore)]
    assert names == ["Singtel", "StarHub"]
    assert singapore.partner_count == 2


def test_declared_partner_coordinates_are_discarded(partnership_records):
    snapshot = assemble_topology([], partnership_records)
    singtel = next(p for p in snapshot.positioned_partners if p.name == "Singtel")
    assert (singtel.lat, singtel.lng) != (1.29, 103.85)


def test_ordering(reference_records, partnership_records):
    snapshot = assemble_topology(reference_records, partnership_records)

    assert [f.name for f in snapshot.facility_nodes] == [
        "Los Angeles",
        "Dublin",
        "Singapore",
        "Frankfurt",
        "Ashburn",
    ]
    assert [a.facility.name for a in snapshot.local_arcs] == [
        "Singapore",
        "Singapore",
        "Frankfurt",
        "Frankfurt",
    ]
    assert [a.partner.name for a in snapshot.local_arcs] == [
        "Singtel",
        "StarHub",
        "Colt",
        "DE-CIX",
    ]


def test_reference_sites_never_become_hubs(reference_records):
    pops = [{"city": "Tokyo", "lat": 35.6762, "lng": 139.6503, "partners": []}]
    references = reference_records + [
        {"city": "Singapore", "lat": 1.3521, "lng": 103.8198}
    ]
    snapshot = assemble_topology(references, pops)

    assert snapshot.hub_assignments[RegionTag.APAC].name == "Tokyo"
    assert snapshot.hub_assignments[RegionTag.NA] is None
    assert snapshot.hub_assignments[RegionTag.EMEA] is None
    assert snapshot.backbone_edges == ()


def test_hubs_and_backbone(partnership_records):
    snapshot = assemble_topology([], partnership_records)

    assert snapshot.hub_names() == {
        "APAC": "Singapore",
        "EMEA": "Frankfurt",
        "NA": "Ashburn",
        "LATAM": None,
    }
    assert [e.key() for e in snapshot.backbone_edges] == [
        "APAC->EMEA",
        "EMEA->NA",
        "APAC->NA",
    ]


def test_assembly_is_deterministic(reference_records, partnership_records):
    assembler = TopologyAssembler()
    first = assembler.assemble(reference_records, partnership_records)
    second = assembler.assemble(reference_records, partnership_records)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_input_records_are_not_mutated(reference_records, partnership_records):
    refs_before = copy.deepcopy(reference_records)
    pops_before = copy.deepcopy(partnership_records)
    assemble_topology(reference_records, partnership_records)
    assert reference_records == refs_before
    assert partnership_records == pops_before


def test_empty_input():
    snapshot = assemble_topology([], [])
    assert snapshot.facility_nodes == ()
    assert snapshot.local_arcs == ()
    assert snapshot.backbone_edges == ()
    assert all(h is None for h in snapshot.hub_assignments.values())


def test_min_arc_distance_drops_arcs_but_keeps_partners(partnership_records):
    config = TopologyConfig(min_arc_distance_km=5000.0)
    snapshot = assemble_topology([], partnership_records, config)
    assert len(snapshot.positioned_partners) == 4
    assert snapshot.local_arcs == ()


def test_custom_self_name(partnership_records):
    config = TopologyConfig(self_name="singtel")
    snapshot = assemble_topology([], partnership_records, config)
    names = {p.name for p in snapshot.positioned_partners}
    assert "Singtel" not in names
    assert "TENCENT" in names


def test_riot_field_aliases():
    records = [{"city": "Tokyo", "riotLat": 35.68, "riotLng": 139.65, "partners": []}]
    snapshot = assemble_topology([], records)
    assert snapshot.facility_nodes[0].lat == 35.68


@pytest.mark.parametrize(
    "record, field",
    [
        ({"city": "X", "lat": 91.0, "lng": 0.0}, "lat"),
        ({"city": "X", "lat": 0.0, "lng": -180.5}, "lng"),
        ({"city": "X", "lat": float("nan"), "lng": 0.0}, "lat"),
        ({"city": "X", "lat": 0.0, "lng": float("inf")}, "lng"),
        ({"city": "X", "lat": "north", "lng": 0.0}, "lat"),
        ({"city": "X", "lng": 0.0}, "lat"),
        ({"city": "  ", "lat": 0.0, "lng": 0.0}, "city"),
        ({"lat": 0.0, "lng": 0.0}, "city"),
    ],
)
def test_invalid_reference_records_fail_fast(record, field):
    good = {"city": "Dublin", "lat": 53.35, "lng": -6.26}
    with pytest.raises(RecordValidationError) as excinfo:
        assemble_topology([good, record], [])
    assert excinfo.value.record_index == 1
    assert excinfo.value.field == field
    assert excinfo.value.record_kind == "reference"


def test_invalid_partnership_records_fail_fast():
    with pytest.raises(RecordValidationError) as excinfo:
        assemble_topology(
            [], [{"city": "Tokyo", "lat": 35.0, "lng": 139.0, "partners": "NTT"}]
        )
    assert excinfo.value.field == "partners"

    with pytest.raises(RecordValidationError) as excinfo:
        assemble_topology(
            [],
            [{"city": "Tokyo", "lat": 35.0, "lng": 139.0, "partners": [{"lat": 1.0}]}],
        )
    assert excinfo.value.field == "partners[0].name"


@pytest.mark.parametrize("name", ["Sing\x00tel", "Star\x07Hub", "M1\x7f"])
def test_control_characters_in_partner_names_are_rejected(name):
    records = [{"city": "Singapore", "lat": 1.35, "lng": 103.82, "partners": [{"name": "Colt"}, {"name": name}]}]
    with pytest.raises(RecordValidationError) as excinfo:
        assemble_topology([], records)
    assert excinfo.value.field == "partners[1].name"

    plain = [{"city": "Singapore", "lat": 1.35, "lng": 103.82, "partners": [name]}]
    with pytest.raises(RecordValidationError) as excinfo:
        assemble_topology([], plain)
    assert excinfo.value.field == "partners[0]"


def test_surrounding_whitespace_is_not_a_control_character():
    records = [{"city": "Singapore", "lat": 1.35, "lng": 103.82, "partners": ["\tSingtel\n"]}]
    snapshot = assemble_topology([], records)
    assert [p.name for p in snapshot.positioned_partners] == ["Singtel"]


def test_partner_records_keep_first_declared_point():
    record = validate_partnership_record(
        {
            "city": "Singapore",
            "lat": 1.35,
            "lng": 103.82,
            "partners": [
                {"name": "Singtel "},
                {"name": "Singtel", "lat": 1.29, "lng": 103.85},
                {"name": "Singtel", "lat": 1.30, "lng": 103.86},
                {"name": "StarHub"},
            ],
        },
        0,
    )
    names = normalize_partners([p.name for p in record.partners], "tencent")
    facility = pop_facility(record, names)
    records = partner_records(record, facility, names)

    assert [r.name for r in records] == ["Singtel", "StarHub"]
    assert records[0].declared_point == GeoPoint(1.29, 103.85)
    assert records[1].declared_point is None
    assert all(r.facility == facility for r in records)
