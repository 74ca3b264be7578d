"""Controls profiles: load YAML bindings and rebind the shortcut registry"""
import logging
from typing import Dict, Optional

import yaml

from core.constants import SHORTCUT_NAMES
from core.errors import ConfigError, ParseError
from core.gamepad import GamepadAxisType, GamepadButtonType, GamepadCombination

LOG = logging.getLogger("padnav.mapper")


def _r2_and(axis) -> GamepadCombination:
    return GamepadCombination().add_button(GamepadButtonType.R2).add_axis(axis)


# registration order matters: earlier names win on a shared combination
DEFAULT_CONTROLS: Dict[str, GamepadCombination] = {
    SHORTCUT_NAMES.PREVIOUS: GamepadCombination.LEFT_STICK_UP,
    SHORTCUT_NAMES.NEXT: GamepadCombination.LEFT_STICK_DOWN,
    SHORTCUT_NAMES.IN: GamepadCombination.LEFT_STICK_RIGHT,
    SHORTCUT_NAMES.OUT: GamepadCombination.LEFT_STICK_LEFT,
    SHORTCUT_NAMES.DISCONNECT: GamepadCombination.CIRCLE,
    SHORTCUT_NAMES.EXIT: GamepadCombination.CIRCLE,
    SHORTCUT_NAMES.INSERT: GamepadCombination.TRIANGLE,
    SHORTCUT_NAMES.MARK: GamepadCombination.CROSS,
    SHORTCUT_NAMES.TOOLBOX: GamepadCombination.SQUARE,
    SHORTCUT_NAMES.TOGGLE_GAMEPAD_NAV: GamepadCombination().add_button(GamepadButtonType.L1).add_button(GamepadButtonType.R1),
    SHORTCUT_NAMES.MOVE_WS_CURSOR_DOWN: GamepadCombination.RIGHT_STICK_DOWN,
    SHORTCUT_NAMES.MOVE_WS_CURSOR_LEFT: GamepadCombination.RIGHT_STICK_LEFT,
    SHORTCUT_NAMES.MOVE_WS_CURSOR_UP: GamepadCombination.RIGHT_STICK_UP,
    SHORTCUT_NAMES.MOVE_WS_CURSOR_RIGHT: GamepadCombination.RIGHT_STICK_RIGHT,
    SHORTCUT_NAMES.SCROLL_WS_UP: _r2_and(GamepadAxisType.RIGHT_VERTICAL_UP),
    SHORTCUT_NAMES.SCROLL_WS_DOWN: _r2_and(GamepadAxisType.RIGHT_VERTICAL_DOWN),
    SHORTCUT_NAMES.SCROLL_WS_LEFT: _r2_and(GamepadAxisType.RIGHT_HORIZONTAL_LEFT),
    SHORTCUT_NAMES.SCROLL_WS_RIGHT: _r2_and(GamepadAxisType.RIGHT_HORIZONTAL_RIGHT),
    SHORTCUT_NAMES.COPY: GamepadCombination.UP,
    SHORTCUT_NAMES.PASTE: GamepadCombination.DOWN,
    SHORTCUT_NAMES.CUT: GamepadCombination.RIGHT,
    SHORTCUT_NAMES.DELETE: GamepadCombination.LEFT,
    SHORTCUT_NAMES.OPEN_HELP: GamepadCombination.SELECT,
}


def _parse_binding(name: str, value) -> GamepadCombination:
    """A binding is either ``"r2+right_vertical_up"`` or a list of tokens."""
    try:
        if isinstance(value, str):
            combination = GamepadCombination.deserialize(value)
        elif isinstance(value, (list, tuple)):
            combination = GamepadCombination(value)
        else:
            raise ConfigError(f"controls.{name}: expected a string or list, got {value!r}")
    except ParseError as e:
        raise ConfigError(f"controls.{name}: {e}") from e
    if combination.is_empty():
        raise ConfigError(f"controls.{name}: empty combination")
    return combination


def controls_from_profile(profile: Optional[dict],
                          base: Optional[Dict[str, GamepadCombination]] = None) -> Dict[str, GamepadCombination]:
    """Overlay ``profile['controls']`` on ``base`` (the defaults)."""
    base = DEFAULT_CONTROLS if base is None else base
    controls = {name: combination.copy() for name, combination in base.items()}
    overrides = (profile or {}).get("controls") or {}
    if not isinstance(overrides, dict):
        raise ConfigError("controls: expected a mapping of shortcut name to combination")
    known = set(SHORTCUT_NAMES.all())
    for name, value in overrides.items():
        if name not in known:
            raise ConfigError(f"controls: unknown shortcut {name!r}")
        controls[name] = _parse_binding(name, value)
        LOG.debug("bound %s -> %s", name, controls[name].serialize())
    return controls


def rebind(registry, controls: Dict[str, GamepadCombination]):
    """Replace every binding in ``registry`` with ``controls``.

    Names sharing a combination keep the order they were registered in.
    Registered shortcuts missing from ``controls`` end up unbound.
    """
    registered = registry.get_registry()
    for name in controls:
        if name not in registered:
            LOG.warning("Gamepad shortcut with name %s not found", name)
    mapping: Dict[str, list] = {}
    for name in registered:
        combination = controls.get(name)
        if combination is None:
            continue
        mapping.setdefault(combination.serialize(), []).append(name)
    registry.set_combination_map(mapping)


class Mapper:
    """A loaded controls profile."""

    def __init__(self, profile: dict):
        self.profile = profile or {}
        self.controls = controls_from_profile(self.profile)

    @classmethod
    def load_profile(cls, path: str):
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: {e}") from e
        return cls(data)

    def rebind(self, registry):
        rebind(registry, self.controls)

    def shared_combinations(self) -> Dict[str, list]:
        return shared_combinations(self.controls)


def group_by_combination(controls: Dict[str, GamepadCombination]) -> Dict[str, list]:
    """serialized combination -> shortcut names, in ``controls`` order"""
    by_combo: Dict[str, list] = {}
    for name, combination in controls.items():
        by_combo.setdefault(combination.serialize(), []).append(name)
    return by_combo


def shared_combinations(controls: Dict[str, GamepadCombination]) -> Dict[str, list]:
    """Combinations bound to more than one shortcut."""
    return {combo: names for combo, names in group_by_combination(controls).items() if len(names) > 1}
