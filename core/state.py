"""State models and lightweight DTOs"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


@dataclass
class ButtonState:
    pressed: bool = False
    value: float = 0.0


@dataclass
class GamepadState:
    """Raw per-frame state of one controller.

    Up to 16 buttons and up to 8 axes in -1..1. Slots that are missing read
    as released / centred.
    """
    buttons: List[ButtonState] = field(default_factory=list)
    axes: List[float] = field(default_factory=list)

    def is_pressed(self, index: int) -> bool:
        if index >= len(self.buttons):
            return False
        return bool(self.buttons[index].pressed)

    def axis(self, index: int) -> float:
        if index >= len(self.axes):
            return 0.0
        return float(self.axes[index])


class NavState(str, Enum):
    """The part of the editor that currently owns the cursor."""
    WORKSPACE = "workspace"
    FLYOUT = "flyout"
    TOOLBOX = "toolbox"
    HELP = "help"
    TEXT_INPUT = "text_input"


@dataclass(frozen=True)
class Shortcut:
    """A named, guarded action.

    ``callback(session, combination, shortcut)`` returns True when it fully
    handled the activation. ``delay`` is informational; the monitor only
    applies its single global debounce.
    """
    name: str
    callback: Optional[Callable[..., Any]] = None
    precondition: Optional[Callable[[Any], bool]] = None
    delay: Optional[float] = None
    metadata: Optional[dict] = None
