import os
import json
import logging
from typing import Any, Dict, List

import pandas as pd

from peerglobe.pipeline.validation import (
    PartnershipRecord,
    ReferenceRecord,
    validate_partnership_records,
    validate_reference_records,
)

# Columns of the flat partnership CSV: one row per (POP, partner).
PARTNER_NAME_COL = "partner_name"
PARTNER_LAT_COL = "partner_lat"
PARTNER_LNG_COL = "partner_lng"


def _read_json(filename: str) -> Any:
    with open(filename, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_csv(filename: str) -> pd.DataFrame:
    try:
        return pd.read_csv(filename, encoding="utf-8")
    except UnicodeDecodeError:
        return pd.read_csv(filename, encoding="cp1252")


def _unwrap(payload: Any, key: str, filename: str) -> List[Any]:
    if isinstance(payload, dict):
        if key not in payload:
            raise ValueError(f"{filename}: expected a top-level '{key}' list")
        payload = payload[key]
    if not isinstance(payload, list):
        raise ValueError(f"{filename}: '{key}' must be a list")
    return payload


def _frame_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # NaN stays NaN here; validation treats it as missing.
    return df.to_dict(orient="records")


def load_reference_records(filename: str) -> List[ReferenceRecord]:
    """Reference sites from JSON (``{"locations": [...]}`` or a list) or CSV."""
    short_filename = os.path.basename(filename)
    if filename.lower().endswith(".csv"):
        raw = _frame_records(_read_csv(filename))
    else:
        raw = _unwrap(_read_json(filename), "locations", short_filename)

    records = validate_reference_records(raw)
    logging.info("Loaded %d reference sites from %s", len(records), short_filename)
    return records


def _partnerships_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    group_cols = ["city", "lat", "lng"]
    missing = set(group_cols) - set(df.columns)
    if missing:
        raise ValueError(f"Partnership CSV missing columns: {sorted(missing)}")

    records = []
    # sort=False keeps POPs in first-appearance order
    for keys, g in df.groupby(group_cols, sort=False, dropna=False):
        ctx = dict(zip(group_cols, keys))
        partners = []
        if PARTNER_NAME_COL in g.columns:
            for _, row in g.iterrows():
                name = row[PARTNER_NAME_COL]
                if pd.isna(name):
                    continue
                partners.append(
                    {
                        "name": str(name),
                        "lat": row.get(PARTNER_LAT_COL),
                        "lng": row.get(PARTNER_LNG_COL),
                    }
                )
        ctx["partners"] = partners
        records.append(ctx)
    return records


def load_partnership_records(filename: str) -> List[PartnershipRecord]:
    """
    POPs with their partners.

    JSON: ``{"partners": [{city, lat|riotLat, lng|riotLng, partners: [...]}]}``
    or a bare list. CSV: one row per partner with columns ``city, lat, lng,
    partner_name[, partner_lat, partner_lng]``; rows are grouped per POP.
    """
    short_filename = os.path.basename(filename)
    if filename.lower().endswith(".csv"):
        raw = _partnerships_from_frame(_read_csv(filename))
    else:
        raw = _unwrap(_read_json(filename), "partners", short_filename)

    records = validate_partnership_records(raw)
    logging.info(
        "Loaded %d POPs (%d raw partner entries) from %s",
        len(records),
        sum(len(r.partners) for r in records),
        short_filename,
    )
    return records


def save_snapshot(filename: str, payload: Dict[str, Any]) -> None:
    tmp_path = filename + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    os.replace(tmp_path, filename)
