"""
Explicit, injectable configuration for topology assembly.

Every component receives the relevant piece of a ``TopologyConfig`` instead of
reading module constants directly, so two assemblies with different settings
can run side by side. Defaults come from ``peerglobe.config.constants``.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from peerglobe.config import constants as C
from peerglobe.geo.regions import BACKBONE_REGIONS, RegionTag


RADIUS_POLICIES = ("tiered", "fixed")


class ConfigError(ValueError):
    """Raised when a configuration value is structurally invalid."""


@dataclass(frozen=True)
class RingTier:
    min_count: int
    max_count: Optional[int]
    min_radius: float
    max_radius: float

    def contains(self, count: int) -> bool:
        if count < self.min_count:
            return False
        return self.max_count is None or count <= self.max_count


@dataclass(frozen=True)
class RingLayoutConfig:
    radius_policy: str = C.RING_RADIUS_POLICY
    tiers: Tuple[RingTier, ...] = tuple(RingTier(*t) for t in C.RING_RADIUS_TIERS)
    fixed_radius: float = C.FIXED_RING_RADIUS
    large_tier_saturation: int = C.LARGE_TIER_SATURATION
    max_latitude_offset: float = C.MAX_LATITUDE_OFFSET
    lng_correction_cap: float = C.LNG_CORRECTION_CAP
    lng_correction_min_cos: float = C.LNG_CORRECTION_MIN_COS
    lng_correction_near_pole: float = C.LNG_CORRECTION_NEAR_POLE

    def __post_init__(self):
        if self.radius_policy not in RADIUS_POLICIES:
            raise ConfigError(
                f"ring.radius_policy must be one of {RADIUS_POLICIES}, "
                f"got {self.radius_policy!r}"
            )
        if not self.tiers:
            raise ConfigError("ring.tiers must contain at least one tier")
        for i, tier in enumerate(self.tiers):
            if tier.min_count < 0:
                raise ConfigError(f"ring.tiers[{i}]: min_count must be >= 0")
            if tier.max_count is not None and tier.max_count < tier.min_count:
                raise ConfigError(
                    f"ring.tiers[{i}]: max_count {tier.max_count} "
                    f"is below min_count {tier.min_count}"
                )
            if tier.min_radius < 0 or tier.max_radius < 0:
                raise ConfigError(f"ring.tiers[{i}]: radii must be non-negative")
        if self.fixed_radius < 0:
            raise ConfigError("ring.fixed_radius must be non-negative")
        if self.large_tier_saturation < 1:
            raise ConfigError("ring.large_tier_saturation must be at least 1")
        if not 0 < self.max_latitude_offset <= 90:
            raise ConfigError("ring.max_latitude_offset must be in (0, 90]")
        if self.lng_correction_cap <= 0:
            raise ConfigError("ring.lng_correction_cap must be positive")


@dataclass(frozen=True)
class ArcWeightConfig:
    min_distance_km: float = C.ARC_MIN_DISTANCE_KM
    max_distance_km: float = C.ARC_MAX_DISTANCE_KM
    short_altitude: float = C.SHORT_ARC_ALTITUDE
    long_altitude: float = C.LONG_ARC_ALTITUDE
    short_stroke: float = C.SHORT_ARC_STROKE
    long_stroke: float = C.LONG_ARC_STROKE

    def __post_init__(self):
        if not self.max_distance_km > self.min_distance_km:
            raise ConfigError(
                "arcs.max_distance_km must be greater than arcs.min_distance_km"
            )


@dataclass(frozen=True)
class HubCity:
    name: str
    lat: float
    lng: float


@dataclass(frozen=True)
class RenderPresets:
    reference_pin_color: str = C.REFERENCE_PIN_COLOR
    reference_pin_altitude: float = C.REFERENCE_PIN_ALTITUDE
    reference_pin_radius: float = C.REFERENCE_PIN_RADIUS
    reference_label_color: str = C.REFERENCE_LABEL_COLOR
    reference_label_size: float = C.REFERENCE_LABEL_SIZE
    reference_label_altitude: float = C.REFERENCE_LABEL_ALTITUDE
    pop_pin_color: str = C.POP_PIN_COLOR
    pop_pin_altitude: float = C.POP_PIN_ALTITUDE
    pop_pin_radius: float = C.POP_PIN_RADIUS
    partner_label_color: str = C.PARTNER_LABEL_COLOR
    partner_label_size: float = C.PARTNER_LABEL_SIZE
    partner_label_altitude: float = C.PARTNER_LABEL_ALTITUDE
    local_arc_colors: Tuple[str, ...] = C.LOCAL_ARC_COLORS
    local_arc_dash_length: float = C.LOCAL_ARC_DASH_LENGTH
    local_arc_dash_gap: float = C.LOCAL_ARC_DASH_GAP
    local_arc_dash_animate_ms: int = C.LOCAL_ARC_DASH_ANIMATE_MS
    backbone_arc_colors: Tuple[str, ...] = C.BACKBONE_ARC_COLORS
    backbone_arc_altitude: float = C.BACKBONE_ARC_ALTITUDE
    backbone_arc_stroke: float = C.BACKBONE_ARC_STROKE
    backbone_arc_dash_length: float = C.BACKBONE_ARC_DASH_LENGTH
    backbone_arc_dash_gap: float = C.BACKBONE_ARC_DASH_GAP
    backbone_arc_dash_animate_ms: int = C.BACKBONE_ARC_DASH_ANIMATE_MS


def _default_hub_cities() -> Mapping[RegionTag, HubCity]:
    return _hub_table(C.HUB_CITIES)


def _hub_table(raw: Mapping[str, Mapping[str, Any]]) -> Mapping[RegionTag, HubCity]:
    table: Dict[RegionTag, HubCity] = {}
    for key, value in raw.items():
        try:
            region = RegionTag(str(key).upper())
        except ValueError:
            raise ConfigError(f"hub_cities: unknown region {key!r}") from None
        if region not in BACKBONE_REGIONS:
            raise ConfigError(f"hub_cities: {region.value} cannot hold a hub")
        try:
            city = HubCity(
                name=str(value["name"]),
                lat=float(value["lat"]),
                lng=float(value["lng"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"hub_cities.{key}: {e}") from None
        if not (math.isfinite(city.lat) and math.isfinite(city.lng)):
            raise ConfigError(f"hub_cities.{key}: coordinates must be finite")
        table[region] = city
    return MappingProxyType(table)


@dataclass(frozen=True)
class TopologyConfig:
    self_name: str = C.SELF_PARTNER_NAME
    min_arc_distance_km: float = C.MIN_ARC_DISTANCE_KM
    ring: RingLayoutConfig = field(default_factory=RingLayoutConfig)
    arcs: ArcWeightConfig = field(default_factory=ArcWeightConfig)
    hub_cities: Mapping[RegionTag, HubCity] = field(
        default_factory=_default_hub_cities
    )
    render: RenderPresets = field(default_factory=RenderPresets)

    def hub_city(self, region: RegionTag) -> Optional[HubCity]:
        return self.hub_cities.get(region)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TopologyConfig":
        """Build a config from a (possibly partial) mapping of overrides."""
        data = dict(_section(data, "config"))
        base = cls()
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs: Dict[str, Any] = {}
        if "self_name" in data:
            kwargs["self_name"] = _coerce(data["self_name"], str, "self_name")
        if "min_arc_distance_km" in data:
            kwargs["min_arc_distance_km"] = _coerce(
                data["min_arc_distance_km"], float, "min_arc_distance_km"
            )
        if "ring" in data:
            ring = dict(_section(data["ring"], "ring"))
            if "tiers" in ring:
                ring["tiers"] = _parse_tiers(ring["tiers"])
            kwargs["ring"] = _override(base.ring, ring, "ring")
        if "arcs" in data:
            kwargs["arcs"] = _override(base.arcs, _section(data["arcs"], "arcs"), "arcs")
        if "hub_cities" in data:
            kwargs["hub_cities"] = _hub_table(_section(data["hub_cities"], "hub_cities"))
        if "render" in data:
            kwargs["render"] = _override(
                base.render, _section(data["render"], "render"), "render"
            )
        return replace(base, **kwargs)


def _section(raw: Any, name: str) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"'{name}' must be a mapping, got {type(raw).__name__}")
    return raw


def _coerce(value: Any, kind: type, key: str) -> Any:
    if value is None:
        raise ConfigError(f"{key}: missing value")
    if kind is tuple:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise ConfigError(f"{key}: expected a list, got {value!r}")
        return tuple(str(v) for v in value)
    if kind in (int, float) and isinstance(value, bool):
        raise ConfigError(f"{key}: expected a number, got {value!r}")
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ConfigError(f"{key}: expected an integer, got {value!r}")
    try:
        result = kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: expected {kind.__name__}, got {value!r}") from None
    if kind is float and not math.isfinite(result):
        raise ConfigError(f"{key}: must be finite, got {value!r}")
    return result


def _parse_tier(raw: Any, key: str) -> RingTier:
    try:
        if isinstance(raw, Mapping):
            lo = raw["min_count"]
            hi = raw.get("max_count")
            r_lo = raw["min_radius"]
            r_hi = raw["max_radius"]
        else:
            lo, hi, r_lo, r_hi = raw
    except KeyError as e:
        raise ConfigError(f"{key}: missing {e.args[0]!r}") from None
    except (TypeError, ValueError):
        raise ConfigError(
            f"{key}: expected a mapping or [min_count, max_count, min_radius, max_radius]"
        ) from None
    return RingTier(
        min_count=_coerce(lo, int, f"{key}.min_count"),
        max_count=None if hi is None else _coerce(hi, int, f"{key}.max_count"),
        min_radius=_coerce(r_lo, float, f"{key}.min_radius"),
        max_radius=_coerce(r_hi, float, f"{key}.max_radius"),
    )


def _parse_tiers(raw: Any) -> Tuple[RingTier, ...]:
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, (list, tuple)):
        raise ConfigError("ring.tiers must be a list")
    return tuple(_parse_tier(t, f"ring.tiers[{i}]") for i, t in enumerate(raw))


def _override(base, overrides: Mapping[str, Any], section: str):
    known = {f.name: f for f in fields(base)}
    unknown = set(overrides) - set(known)
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {sorted(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        current = getattr(base, key)
        if key == "tiers":
            values[key] = value
        elif isinstance(current, tuple):
            values[key] = _coerce(value, tuple, f"{section}.{key}")
        else:
            values[key] = _coerce(value, type(current), f"{section}.{key}")
    return replace(base, **values)


def load_config(path: Optional[str] = None) -> TopologyConfig:
    """Load YAML overrides on top of the defaults. ``None`` returns defaults."""
    if path is None:
        return TopologyConfig()
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file {path} is not valid YAML: {e}") from None
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logging.info("Loaded configuration overrides from %s", path)
    return TopologyConfig.from_dict(data)
