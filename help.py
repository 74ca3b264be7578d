"""Help screen listing every control"""
import logging
from typing import Dict, List, Optional, Tuple, Union

from core.constants import SHORTCUT_DISPLAY_NAMES, SHORTCUT_NAMES
from core.gamepad import GamepadCombination
from core.modal import ModalManager

LOG = logging.getLogger("padnav.help")

HELP_MODAL_ID = "help-popup"
Controls = Dict[str, Union[GamepadCombination, List[GamepadCombination]]]

HELP_SECTIONS: List[Tuple[str, List[str]]] = [
    ("Navigation", [
        SHORTCUT_NAMES.PREVIOUS,
        SHORTCUT_NAMES.NEXT,
        SHORTCUT_NAMES.IN,
        SHORTCUT_NAMES.OUT,
    ]),
    ("Block manipulation", [
        SHORTCUT_NAMES.DISCONNECT,
        SHORTCUT_NAMES.INSERT,
        SHORTCUT_NAMES.MARK,
        SHORTCUT_NAMES.COPY,
        SHORTCUT_NAMES.PASTE,
        SHORTCUT_NAMES.CUT,
        SHORTCUT_NAMES.DELETE,
    ]),
    ("Workspace movement", [
        SHORTCUT_NAMES.MOVE_WS_CURSOR_LEFT,
        SHORTCUT_NAMES.MOVE_WS_CURSOR_RIGHT,
        SHORTCUT_NAMES.MOVE_WS_CURSOR_UP,
        SHORTCUT_NAMES.MOVE_WS_CURSOR_DOWN,
        SHORTCUT_NAMES.SCROLL_WS_LEFT,
        SHORTCUT_NAMES.SCROLL_WS_RIGHT,
        SHORTCUT_NAMES.SCROLL_WS_UP,
        SHORTCUT_NAMES.SCROLL_WS_DOWN,
    ]),
    ("Other", [
        SHORTCUT_NAMES.TOOLBOX,
        SHORTCUT_NAMES.EXIT,
        SHORTCUT_NAMES.TOGGLE_GAMEPAD_NAV,
        SHORTCUT_NAMES.OPEN_HELP,
    ]),
]

# the virtual keyboard reads the sticks directly, so these are fixed
TEXT_INPUT_SECTION = ("Text Input", [
    "Move the left cursor: Left stick",
    "Move the right cursor: Right stick",
    "Select the currently highlighted key on the left keyboard: L1",
    "Select the currently highlighted key on the right keyboard: R1",
])


def help_text_for_shortcut(name: str, controls) -> str:
    """``controls`` maps a name to one combination or a list of them."""
    bound = controls.get(name)
    if isinstance(bound, GamepadCombination):
        bound = [bound]
    text = " or ".join(c.display_text() for c in bound) if bound else "Unbound"
    return f"{SHORTCUT_DISPLAY_NAMES[name]}: {text}"


def bound_controls(registry) -> Dict[str, List[GamepadCombination]]:
    """Every combination currently bound to each shortcut in ``registry``."""
    return {name: [GamepadCombination.deserialize(key) for key in registry.get_combinations_for(name)]
            for name in SHORTCUT_NAMES.all()}


def help_sections(controls: Controls) -> List[Tuple[str, List[str]]]:
    sections = []
    for title, names in HELP_SECTIONS:
        sections.append((title, [help_text_for_shortcut(n, controls) for n in names]))
        if title == "Workspace movement":
            sections.append((TEXT_INPUT_SECTION[0], list(TEXT_INPUT_SECTION[1])))
    return sections


def help_lines(controls: Controls) -> List[str]:
    """Every help entry in display order, without section titles."""
    return [line for _title, lines in help_sections(controls) for line in lines]


def render_help(controls: Controls) -> str:
    out = []
    for title, lines in help_sections(controls):
        out.append(title)
        out.extend(f"  {line}" for line in lines)
        out.append("")
    return "\n".join(out).rstrip() + "\n"


class HelpPopup:
    def __init__(self):
        self.modal_manager: Optional[ModalManager] = None
        self.registry = None
        self.is_visible = False

    def init(self, modal_manager: ModalManager, registry):
        self.modal_manager = modal_manager
        self.registry = registry
        modal_manager.add_modal(HELP_MODAL_ID, self.render)

    def render(self) -> str:
        """Rendered on every show so rebinding shows up immediately."""
        return render_help(bound_controls(self.registry) if self.registry is not None else {})

    def show(self):
        if self.is_visible:
            return
        if self.modal_manager is not None:
            self.modal_manager.show_modal(HELP_MODAL_ID)
        self.is_visible = True

    def hide(self):
        if not self.is_visible:
            return
        if self.modal_manager is not None:
            self.modal_manager.hide_modal(HELP_MODAL_ID)
        self.is_visible = False
