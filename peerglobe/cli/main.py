import sys
import logging
import argparse
from typing import List, Optional

from peerglobe.config import ConfigError, load_config, setup_logging
from peerglobe.geo.regions import BACKBONE_REGIONS, RegionTag
from peerglobe.metrics import compute_topology_metrics
from peerglobe.pipeline import (
    RecordValidationError,
    load_partnership_records,
    load_reference_records,
    save_snapshot,
)
from peerglobe.topology import TopologyAssembler


# ==========================================
# CLI ARGUMENTS
# ==========================================


def parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description=(
            "Build the peering globe topology (regions, hubs, backbone, "
            "partner rings and arcs) from facility and partnership records."
        )
    )

    p.add_argument(
        "--references",
        default=None,
        help="Reference sites file (JSON with a 'locations' list, or CSV).",
    )

    p.add_argument(
        "--partnerships",
        required=True,
        help="POP/partner file (JSON with a 'partners' list, or CSV).",
    )

    p.add_argument(
        "--config",
        default=None,
        help="Optional YAML file with configuration overrides.",
    )

    p.add_argument(
        "--output",
        default=None,
        help="Write the snapshot JSON here.",
    )

    p.add_argument(
        "--regions",
        default=None,
        help=(
            "Comma-separated regions to keep in the output "
            f"(any of {','.join(r.value for r in BACKBONE_REGIONS)})."
        ),
    )

    p.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging.",
    )

    return p.parse_args(argv)


def parse_regions(value: Optional[str]) -> Optional[List[RegionTag]]:
    if value is None:
        return None
    regions = []
    for part in value.split(","):
        part = part.strip().upper()
        if not part:
            continue
        try:
            regions.append(RegionTag(part))
        except ValueError:
            raise SystemExit(f"Unknown region: {part}") from None
    return regions


# ==========================================
# MAIN
# ==========================================


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.debug)
    regions = parse_regions(args.regions)

    try:
        config = load_config(args.config)
        references = (
            load_reference_records(args.references) if args.references else []
        )
        partnerships = load_partnership_records(args.partnerships)
    except (ConfigError, RecordValidationError, ValueError, OSError) as e:
        logging.error("Input rejected: %s", e)
        raise SystemExit(1)

    snapshot = TopologyAssembler(config).assemble(references, partnerships)
    if regions is not None:
        snapshot = snapshot.filter_regions(regions)
        print(f"Active regions: {', '.join(r.value for r in regions)}")

    metrics = compute_topology_metrics(snapshot)
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"{key:>22}: {value:.2f}")
        else:
            print(f"{key:>22}: {value}")

    for region, name in snapshot.hub_names().items():
        print(f"{'hub ' + region:>22}: {name or 'none'}")

    if args.output:
        save_snapshot(args.output, snapshot.to_dict())
        print(f"Snapshot written to {args.output}")


if __name__ == "__main__":
    main(sys.argv[1:])
