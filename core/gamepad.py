"""Buttons, axes and combinations for a universal gamepad

A combination is an unordered set of button / axis-direction tokens. Its
serialization (tokens sorted, joined with ``+``) is the key used by the
shortcut registry, so two combinations holding the same tokens always
dispatch the same way.
"""
from enum import Enum
from typing import Dict, Iterable, Optional

from core.errors import ParseError
from core.state import ButtonState, GamepadState

SEPARATOR = "+"


class GamepadButtonType(str, Enum):
    CROSS = "cross"
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    L1 = "l1"
    R1 = "r1"
    L2 = "l2"
    R2 = "r2"
    SELECT = "select"
    START = "start"
    LEFT_STICK = "left_stick"
    RIGHT_STICK = "right_stick"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class GamepadAxisType(str, Enum):
    LEFT_HORIZONTAL_LEFT = "left_horizontal_left"
    LEFT_HORIZONTAL_RIGHT = "left_horizontal_right"
    LEFT_VERTICAL_UP = "left_vertical_up"
    LEFT_VERTICAL_DOWN = "left_vertical_down"
    RIGHT_HORIZONTAL_LEFT = "right_horizontal_left"
    RIGHT_HORIZONTAL_RIGHT = "right_horizontal_right"
    RIGHT_VERTICAL_UP = "right_vertical_up"
    RIGHT_VERTICAL_DOWN = "right_vertical_down"


ALL_BUTTONS = frozenset(b.value for b in GamepadButtonType)
ALL_AXES = frozenset(a.value for a in GamepadAxisType)

NUM_BUTTONS = 16
NUM_AXES = 4

# button token -> slot in the raw button array
GAMEPAD_BUTTON_TO_INDEX: Dict[GamepadButtonType, int] = {
    button: idx for idx, button in enumerate(GamepadButtonType)
}

# axis-direction token -> slot in the raw axis array
GAMEPAD_AXIS_TO_INDEX: Dict[GamepadAxisType, int] = {
    GamepadAxisType.LEFT_HORIZONTAL_LEFT: 0,
    GamepadAxisType.LEFT_HORIZONTAL_RIGHT: 0,
    GamepadAxisType.LEFT_VERTICAL_UP: 1,
    GamepadAxisType.LEFT_VERTICAL_DOWN: 1,
    GamepadAxisType.RIGHT_HORIZONTAL_LEFT: 2,
    GamepadAxisType.RIGHT_HORIZONTAL_RIGHT: 2,
    GamepadAxisType.RIGHT_VERTICAL_UP: 3,
    GamepadAxisType.RIGHT_VERTICAL_DOWN: 3,
}

# negative = up/left, positive = down/right
AXIS_DIRECTION_SIGN: Dict[GamepadAxisType, int] = {
    GamepadAxisType.LEFT_HORIZONTAL_LEFT: -1,
    GamepadAxisType.LEFT_HORIZONTAL_RIGHT: 1,
    GamepadAxisType.LEFT_VERTICAL_UP: -1,
    GamepadAxisType.LEFT_VERTICAL_DOWN: 1,
    GamepadAxisType.RIGHT_HORIZONTAL_LEFT: -1,
    GamepadAxisType.RIGHT_HORIZONTAL_RIGHT: 1,
    GamepadAxisType.RIGHT_VERTICAL_UP: -1,
    GamepadAxisType.RIGHT_VERTICAL_DOWN: 1,
}

_DISPLAY_NAMES = {
    GamepadButtonType.CROSS: "Cross",
    GamepadButtonType.CIRCLE: "Circle",
    GamepadButtonType.SQUARE: "Square",
    GamepadButtonType.TRIANGLE: "Triangle",
    GamepadButtonType.L1: "L1",
    GamepadButtonType.R1: "R1",
    GamepadButtonType.L2: "L2",
    GamepadButtonType.R2: "R2",
    GamepadButtonType.SELECT: "Select",
    GamepadButtonType.START: "Start",
    GamepadButtonType.LEFT_STICK: "Press left stick",
    GamepadButtonType.RIGHT_STICK: "Press right stick",
    GamepadButtonType.UP: "D-pad up",
    GamepadButtonType.DOWN: "D-pad down",
    GamepadButtonType.LEFT: "D-pad left",
    GamepadButtonType.RIGHT: "D-pad right",
    GamepadAxisType.LEFT_HORIZONTAL_LEFT: "Left stick left",
    GamepadAxisType.LEFT_HORIZONTAL_RIGHT: "Left stick right",
    GamepadAxisType.LEFT_VERTICAL_UP: "Left stick up",
    GamepadAxisType.LEFT_VERTICAL_DOWN: "Left stick down",
    GamepadAxisType.RIGHT_HORIZONTAL_LEFT: "Right stick left",
    GamepadAxisType.RIGHT_HORIZONTAL_RIGHT: "Right stick right",
    GamepadAxisType.RIGHT_VERTICAL_UP: "Right stick up",
    GamepadAxisType.RIGHT_VERTICAL_DOWN: "Right stick down",
}

# keyed by the plain token string
BUTTON_AND_AXIS_DISPLAY_NAMES: Dict[str, str] = {
    token.value: name for token, name in _DISPLAY_NAMES.items()
}


def _token(value, allowed, kind):
    """Normalize an enum member or raw string into a token string."""
    token = value.value if isinstance(value, Enum) else value
    if token not in allowed:
        raise ParseError(f"Not a valid {kind}: {value!r}")
    return token


class GamepadCombination:
    """A set of buttons and axis-directions used to trigger an action.

    The named class constants (`CROSS`, `LEFT_STICK_UP`, ...) are frozen:
    adding to one returns a new combination instead of changing it.
    """

    _frozen = False

    def __init__(self, tokens: Optional[Iterable] = None):
        self._tokens = set()
        for token in tokens or ():
            value = token.value if isinstance(token, Enum) else token
            if value in ALL_BUTTONS:
                self.add_button(value)
            else:
                self.add_axis(value)

    @classmethod
    def deserialize(cls, serialization: str) -> "GamepadCombination":
        """The inverse of `serialize`.

        Raises ParseError if any part is neither a button nor an axis.
        """
        if serialization == "":
            return cls()
        parts = serialization.split(SEPARATOR)
        for part in parts:
            if part not in ALL_BUTTONS and part not in ALL_AXES:
                raise ParseError(f"Neither a valid button nor an axis: {part!r}")
        return cls(parts)

    @classmethod
    def from_single_button(cls, button) -> "GamepadCombination":
        return cls().add_button(button)

    @classmethod
    def from_single_axis(cls, axis) -> "GamepadCombination":
        return cls().add_axis(axis)

    def _with(self, token: str) -> "GamepadCombination":
        target = self.copy() if self._frozen else self
        target._tokens.add(token)
        return target

    def add_button(self, button) -> "GamepadCombination":
        return self._with(_token(button, ALL_BUTTONS, "button"))

    def add_axis(self, axis) -> "GamepadCombination":
        return self._with(_token(axis, ALL_AXES, "axis"))

    def copy(self) -> "GamepadCombination":
        """A mutable copy, never frozen."""
        return GamepadCombination(self._tokens)

    def tokens(self):
        return sorted(self._tokens)

    def serialize(self) -> str:
        return SEPARATOR.join(sorted(self._tokens))

    def display_text(self) -> str:
        """Help text for this combination, e.g. 'R2 + Right stick left'."""
        return " + ".join(BUTTON_AND_AXIS_DISPLAY_NAMES[t] for t in self.tokens())

    def is_empty(self) -> bool:
        return not self._tokens

    def as_gamepad_state(self) -> GamepadState:
        """Translate this combination into raw controller state."""
        buttons = []
        for button, _idx in sorted(GAMEPAD_BUTTON_TO_INDEX.items(), key=lambda kv: kv[1]):
            if button.value in self._tokens:
                buttons.append(ButtonState(pressed=True, value=1.0))
            else:
                buttons.append(ButtonState(pressed=False, value=0.0))

        axes = [0.0] * NUM_AXES
        assigned = {}
        for axis, idx in GAMEPAD_AXIS_TO_INDEX.items():
            if axis.value not in self._tokens:
                continue
            if idx in assigned:
                raise ValueError(
                    f"{assigned[idx]} and {axis.value} are opposite directions of one axis")
            assigned[idx] = axis.value
            axes[idx] = float(AXIS_DIRECTION_SIGN[axis])
        return GamepadState(buttons=buttons, axes=axes)

    def __eq__(self, other):
        if not isinstance(other, GamepadCombination):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __hash__(self):
        return hash(self.serialize())

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return f"GamepadCombination({self.serialize()!r})"


GamepadCombination.LEFT_STICK_UP = GamepadCombination.from_single_axis(GamepadAxisType.LEFT_VERTICAL_UP)
GamepadCombination.LEFT_STICK_DOWN = GamepadCombination.from_single_axis(GamepadAxisType.LEFT_VERTICAL_DOWN)
GamepadCombination.LEFT_STICK_LEFT = GamepadCombination.from_single_axis(GamepadAxisType.LEFT_HORIZONTAL_LEFT)
GamepadCombination.LEFT_STICK_RIGHT = GamepadCombination.from_single_axis(GamepadAxisType.LEFT_HORIZONTAL_RIGHT)

GamepadCombination.RIGHT_STICK_UP = GamepadCombination.from_single_axis(GamepadAxisType.RIGHT_VERTICAL_UP)
GamepadCombination.RIGHT_STICK_DOWN = GamepadCombination.from_single_axis(GamepadAxisType.RIGHT_VERTICAL_DOWN)
GamepadCombination.RIGHT_STICK_LEFT = GamepadCombination.from_single_axis(GamepadAxisType.RIGHT_HORIZONTAL_LEFT)
GamepadCombination.RIGHT_STICK_RIGHT = GamepadCombination.from_single_axis(GamepadAxisType.RIGHT_HORIZONTAL_RIGHT)

GamepadCombination.CROSS = GamepadCombination.from_single_button(GamepadButtonType.CROSS)
GamepadCombination.CIRCLE = GamepadCombination.from_single_button(GamepadButtonType.CIRCLE)
GamepadCombination.SQUARE = GamepadCombination.from_single_button(GamepadButtonType.SQUARE)
GamepadCombination.TRIANGLE = GamepadCombination.from_single_button(GamepadButtonType.TRIANGLE)

GamepadCombination.UP = GamepadCombination.from_single_button(GamepadButtonType.UP)
GamepadCombination.DOWN = GamepadCombination.from_single_button(GamepadButtonType.DOWN)
GamepadCombination.LEFT = GamepadCombination.from_single_button(GamepadButtonType.LEFT)
GamepadCombination.RIGHT = GamepadCombination.from_single_button(GamepadButtonType.RIGHT)

GamepadCombination.SELECT = GamepadCombination.from_single_button(GamepadButtonType.SELECT)
GamepadCombination.L1 = GamepadCombination.from_single_button(GamepadButtonType.L1)
GamepadCombination.R1 = GamepadCombination.from_single_button(GamepadButtonType.R1)

for _constant in list(vars(GamepadCombination).values()):
    if isinstance(_constant, GamepadCombination):
        _constant._frozen = True
