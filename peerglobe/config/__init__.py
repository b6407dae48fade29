from .constants import (
    SELF_PARTNER_NAME,
    MIN_ARC_DISTANCE_KM,
    EARTH_RADIUS_KM,
    HUB_CITIES,
)

from .settings import (
    ConfigError,
    RingTier,
    RingLayoutConfig,
    ArcWeightConfig,
    HubCity,
    RenderPresets,
    TopologyConfig,
    load_config,
)

from .logging import setup_logging

__all__ = [
    # Defaults
    "SELF_PARTNER_NAME",
    "MIN_ARC_DISTANCE_KM",
    "EARTH_RADIUS_KM",
    "HUB_CITIES",
    # Injectable configuration
    "ConfigError",
    "RingTier",
    "RingLayoutConfig",
    "ArcWeightConfig",
    "HubCity",
    "RenderPresets",
    "TopologyConfig",
    "load_config",
    # Logging
    "setup_logging",
]
