"""Configuration structs and the YAML loader"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import yaml

from core.errors import ConfigError
from core.gamepad import NUM_AXES, NUM_BUTTONS

LOG = logging.getLogger("padnav.config")


@dataclass
class MonitorConfig:
    delay_between_combinations_ms: float = 200
    axis_activation_threshold: float = 0.4


@dataclass
class NavigationConfig:
    marker_name: str = "gamepad_nav_marker"
    ws_move_distance: float = 40
    ws_scroll_distance: float = 10
    default_ws_coordinate: Tuple[float, float] = (100, 100)


@dataclass
class DeviceConfig:
    """How a physical pad's raw buttons/axes land in the universal slots.

    ``button_map[i]`` is the device button read into universal slot ``i``;
    ``None`` leaves the slot released. ``hat_as_dpad`` fills the D-pad slots
    from hat 0 for pads that report the D-pad as a hat.
    """
    hz: int = 60
    button_map: List[Optional[int]] = field(default_factory=lambda: list(range(NUM_BUTTONS)))
    axis_map: List[Optional[int]] = field(default_factory=lambda: list(range(NUM_AXES)))
    hat_as_dpad: bool = True


@dataclass
class PadnavConfig:
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)
    controls: Optional[Dict[str, object]] = None


def _section(raw: dict, name: str, cls):
    values = raw.get(name) or {}
    if not isinstance(values, dict):
        raise ConfigError(f"{name}: expected a mapping, got {type(values).__name__}")
    try:
        return cls(**values)
    except TypeError as e:
        raise ConfigError(f"{name}: {e}") from e


def _check_number(section: str, key: str, value, minimum=0.0):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{section}.{key}: expected a number, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{section}.{key}: must be >= {minimum}, got {value!r}")


def _check_slots(key: str, slots, size: int):
    if not isinstance(slots, list) or len(slots) > size:
        raise ConfigError(f"device.{key}: expected a list of at most {size} entries")
    for slot in slots:
        if slot is not None and (isinstance(slot, bool) or not isinstance(slot, int) or slot < 0):
            raise ConfigError(f"device.{key}: bad device index {slot!r}")


def validate(cfg: PadnavConfig) -> PadnavConfig:
    _check_number("monitor", "delay_between_combinations_ms", cfg.monitor.delay_between_combinations_ms)
    _check_number("monitor", "axis_activation_threshold", cfg.monitor.axis_activation_threshold)
    if cfg.monitor.axis_activation_threshold >= 1:
        raise ConfigError("monitor.axis_activation_threshold: must be below 1")
    _check_number("navigation", "ws_move_distance", cfg.navigation.ws_move_distance)
    _check_number("navigation", "ws_scroll_distance", cfg.navigation.ws_scroll_distance)
    coord = cfg.navigation.default_ws_coordinate
    if not isinstance(coord, (list, tuple)) or len(coord) != 2:
        raise ConfigError("navigation.default_ws_coordinate: expected [x, y]")
    cfg.navigation.default_ws_coordinate = tuple(coord)
    _check_number("device", "hz", cfg.device.hz, minimum=1)
    _check_slots("button_map", cfg.device.button_map, NUM_BUTTONS)
    _check_slots("axis_map", cfg.device.axis_map, 8)
    if cfg.controls is not None and not isinstance(cfg.controls, dict):
        raise ConfigError("controls: expected a mapping of shortcut name to combination")
    return cfg


def config_from_dict(raw: Optional[dict]) -> PadnavConfig:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError("config root must be a mapping")
    unknown = set(raw) - {"monitor", "navigation", "device", "controls"}
    if unknown:
        raise ConfigError(f"unknown config sections: {', '.join(sorted(unknown))}")
    cfg = PadnavConfig(
        monitor=_section(raw, "monitor", MonitorConfig),
        navigation=_section(raw, "navigation", NavigationConfig),
        device=_section(raw, "device", DeviceConfig),
        controls=raw.get("controls"),
    )
    return validate(cfg)


def load_config(path: str) -> PadnavConfig:
    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: {e}") from e
    LOG.debug("loaded config from %s", path)
    return config_from_dict(raw)
