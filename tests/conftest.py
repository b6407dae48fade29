import pytest

from peerglobe.config import TopologyConfig
from peerglobe.geo import GeoPoint, RegionTag, classify
from peerglobe.graph import FacilityNode, FacilityRole


@pytest.fixture
def config():
    return TopologyConfig()


def make_pop(name, lat, lng, region=None, partner_count=0):
    return FacilityNode(
        name=name,
        point=GeoPoint(lat, lng),
        region=region or classify(lat, lng),
        role=FacilityRole.POP,
        partner_count=partner_count,
    )


@pytest.fixture
def pop_factory():
    return make_pop


@pytest.fixture
def reference_records():
    return [
        {"city": "Los Angeles", "lat": 34.0522, "lng": -118.2437, "region": "NA"},
        {"city": "Dublin", "lat": 53.3498, "lng": -6.2603, "region": "EMEA"},
    ]


@pytest.fixture
def partnership_records():
    return [
        {
            "city": "Singapore",
            "lat": 1.3521,
            "lng": 103.8198,
            "partners": [
                {"name": "Singtel", "lat": 1.29, "lng": 103.85},
                {"name": "StarHub"},
                {"name": "TENCENT"},
                {"name": "Singtel "},
            ],
        },
        {
            "city": "Frankfurt",
            "lat": 50.1109,
            "lng": 8.6821,
            "partners": [{"name": "DE-CIX"}, {"name": "Colt"}],
        },
        {
            "city": "Ashburn",
            "lat": 39.0438,
            "lng": -77.4874,
            "partners": [],
        },
    ]


@pytest.fixture
def all_regions():
    return [RegionTag.APAC, RegionTag.EMEA, RegionTag.NA, RegionTag.LATAM]
