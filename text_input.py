"""Virtual keyboard hand-off for text fields

While a text field is being edited the session sits in TEXT_INPUT and every
navigation shortcut except exit is ignored. The keyboard itself is drawn and
driven by the host; it reports back through `complete` or `cancel`.
"""
import logging
from typing import Callable, Optional

from core.modal import ModalManager
from core.state import NavState

LOG = logging.getLogger("padnav.text_input")

KEYBOARD_MODAL_ID = "keyboard"

LEFT_LAYOUT = [
    ["q", "w", "e", "r", "t"],
    ["a", "s", "d", "f", "g"],
    ["z", "x", "c", "v"],
]

RIGHT_LAYOUT = [
    ["y", "u", "i", "o", "p"],
    ["h", "j", "k", "l"],
    ["b", "n", "m"],
]


class TextInputPopup:
    def __init__(self):
        self.modal_manager: Optional[ModalManager] = None
        self.value = ""
        self.is_visible = False
        self._on_complete: Optional[Callable[[str], None]] = None

    def init(self, modal_manager: ModalManager):
        self.modal_manager = modal_manager
        modal_manager.add_modal(KEYBOARD_MODAL_ID, self.render)

    def render(self) -> str:
        rows = [self.value]
        for left, right in zip(LEFT_LAYOUT, RIGHT_LAYOUT):
            rows.append(" ".join(left).ljust(12) + "  " + " ".join(right))
        return "\n".join(rows)

    def show(self, value: str, on_complete: Callable[[str], None]):
        if self.is_visible:
            return
        self.value = value or ""
        self._on_complete = on_complete
        if self.modal_manager is not None:
            self.modal_manager.show_modal(KEYBOARD_MODAL_ID)
        self.is_visible = True

    def type_text(self, text: str):
        self.value += text

    def backspace(self):
        self.value = self.value[:-1]

    def _close(self):
        if self.modal_manager is not None:
            self.modal_manager.hide_modal(KEYBOARD_MODAL_ID)
        self.is_visible = False
        self._on_complete = None

    def complete(self):
        """Close the keyboard and hand the typed value back."""
        if not self.is_visible:
            return
        callback = self._on_complete
        value = self.value
        self._close()
        if callback is not None:
            callback(value)

    def cancel(self):
        """Close the keyboard without touching the field."""
        if self.is_visible:
            self._close()


class TextInputController:
    """Puts a session into TEXT_INPUT for the duration of one edit."""

    def __init__(self, navigation, popup: Optional[TextInputPopup] = None):
        self.navigation = navigation
        self.popup = popup or TextInputPopup()
        self._editing = None  # (workspace, field)

    def edit(self, workspace, field):
        if self.popup.is_visible:
            LOG.warning("text input already open; ignoring edit of %r", field)
            return
        self._editing = (workspace, field)
        self.navigation.set_state(workspace, NavState.TEXT_INPUT)
        self.popup.show(field.get_value(), self._finish)

    def _finish(self, text: str):
        workspace, field = self._editing
        self._editing = None
        field.set_value(text)
        self.navigation.set_state(workspace, NavState.WORKSPACE)

    def cancel(self, workspace):
        self.popup.cancel()
        self._editing = None
        self.navigation.set_state(workspace, NavState.WORKSPACE)


def gamepad_text_field(base, text_input: TextInputController):
    """Subclass a host text field so its editor opens the virtual keyboard."""

    class GamepadTextField(base):
        def show_editor(self):
            text_input.edit(self.source_block.workspace, self)

    GamepadTextField.__name__ = f"Gamepad{base.__name__}"
    return GamepadTextField
