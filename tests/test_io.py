import json

import pytest

from peerglobe.pipeline import (
    PartnershipRecord,
    RecordValidationError,
    ReferenceRecord,
    load_partnership_records,
    load_reference_records,
    save_snapshot,
)


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_reference_json(tmp_path):
    filename = write_json(
        tmp_path / "locations.json",
        {"locations": [{"city": "Dublin", "lat": 53.35, "lng": -6.26, "region": "EMEA"}]},
    )
    assert load_reference_records(filename) == [
        ReferenceRecord("Dublin", 53.35, -6.26, "EMEA")
    ]


def test_reference_json_bare_list(tmp_path):
    filename = write_json(tmp_path / "locations.json", [{"city": "Seoul", "lat": 37.57, "lng": 126.98}])
    (record,) = load_reference_records(filename)
    assert record.region is None


def test_reference_csv(tmp_path):
    path = tmp_path / "locations.csv"
    path.write_text("city,lat,lng,region\nDublin,53.35,-6.26,EMEA\nSeoul,37.57,126.98,\n")
    records = load_reference_records(str(path))
    assert [r.city for r in records] == ["Dublin", "Seoul"]
    assert records[1].region is None


def test_partnership_json_with_riot_fields(tmp_path):
    filename = write_json(
        tmp_path / "peering.json",
        {
            "partners": [
                {
                    "city": "Tokyo",
                    "riotLat": 35.68,
                    "riotLng": 139.65,
                    "partners": ["NTT", {"name": "KDDI", "lat": 35.6, "lng": 139.7}],
                }
            ]
        },
    )
    (record,) = load_partnership_records(filename)
    assert isinstance(record, PartnershipRecord)
    assert (record.lat, record.lng) == (35.68, 139.65)
    assert [p.name for p in record.partners] == ["NTT", "KDDI"]
    assert record.partners[0].lat is None
    assert record.partners[1].lat == 35.6


def test_partnership_csv_is_grouped_per_pop(tmp_path):
    path = tmp_path / "peering.csv"
    path.write_text(
        "city,lat,lng,partner_name\n"
        "Frankfurt,50.11,8.68,DE-CIX\n"
        "Singapore,1.35,103.82,Singtel\n"
        "Frankfurt,50.11,8.68,Colt\n"
        "Ashburn,39.04,-77.49,\n"
    )
    records = load_partnership_records(str(path))
    assert [r.city for r in records] == ["Frankfurt", "Singapore", "Ashburn"]
    assert [p.name for p in records[0].partners] == ["DE-CIX", "Colt"]
    assert records[2].partners == ()


def test_bad_json_shape(tmp_path):
    with pytest.raises(ValueError):
        load_reference_records(write_json(tmp_path / "a.json", {"sites": []}))
    with pytest.raises(ValueError):
        load_partnership_records(write_json(tmp_path / "b.json", {"partners": {}}))


def test_invalid_record_in_file(tmp_path):
    filename = write_json(tmp_path / "locations.json", {"locations": [{"city": "X", "lat": 120, "lng": 0}]})
    with pytest.raises(RecordValidationError):
        load_reference_records(filename)


def test_save_snapshot(tmp_path):
    target = tmp_path / "out.json"
    save_snapshot(str(target), {"hubs": {"APAC": None}})
    assert json.loads(target.read_text()) == {"hubs": {"APAC": None}}
    assert not (tmp_path / "out.json.tmp").exists()


def test_sample_data_loads():
    from pathlib import Path

    data = Path(__file__).resolve().parent.parent / "data"
    assert load_reference_records(str(data / "riot-locations.json"))
    assert load_partnership_records(str(data / "peering.json"))
