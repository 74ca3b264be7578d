from core.gamepad import GamepadCombination
from core.modal import ModalManager, ModalPresenter
from help import HELP_MODAL_ID, HelpPopup, help_lines, help_text_for_shortcut, render_help
from mapper import DEFAULT_CONTROLS, Mapper, controls_from_profile, group_by_combination
from registry import GamepadShortcutRegistry

EXPECTED_DEFAULT_LINES = [
    "Move to previous node: Left stick up",
    "Move to next node: Left stick down",
    "Move into block: Left stick right",
    "Move out of block: Left stick left",
    "Disconnect two nodes: Circle",
    "Insert a block: Triangle",
    "Mark a block: Cross",
    "Copy node: D-pad up",
    "Paste node: D-pad down",
    "Cut node: D-pad right",
    "Delete node: D-pad left",
    "Move workspace cursor left: Right stick left",
    "Move workspace cursor right: Right stick right",
    "Move workspace cursor up: Right stick up",
    "Move workspace cursor down: Right stick down",
    "Scroll workspace left: R2 + Right stick left",
    "Scroll workspace right: R2 + Right stick right",
    "Scroll workspace up: R2 + Right stick up",
    "Scroll workspace down: R2 + Right stick down",
    "Move the left cursor: Left stick",
    "Move the right cursor: Right stick",
    "Select the currently highlighted key on the left keyboard: L1",
    "Select the currently highlighted key on the right keyboard: R1",
    "Toggle toolbox: Square",
    "Exit: Circle",
    "Toggle gamepad navigation: L1 + R1",
    "Toggle the help screen: Select",
]


class RecordingPresenter(ModalPresenter):
    def __init__(self):
        self.calls = []

    def show(self, modal_id, content):
        self.calls.append(("show", modal_id, content))

    def hide(self, modal_id):
        self.calls.append(("hide", modal_id))


def test_default_help_lines_in_order():
    assert help_lines(DEFAULT_CONTROLS) == EXPECTED_DEFAULT_LINES


def test_help_follows_rebound_controls():
    controls = controls_from_profile({"controls": {"help": "start"}})
    assert help_text_for_shortcut("help", controls) == "Toggle the help screen: Start"


def test_unbound_shortcut():
    assert help_text_for_shortcut("help", {}) == "Toggle the help screen: Unbound"


def test_render_groups_sections():
    text = render_help(DEFAULT_CONTROLS)
    titles = [line for line in text.splitlines() if line and not line.startswith(" ")]
    assert titles == ["Navigation", "Block manipulation", "Workspace movement", "Text Input", "Other"]
    assert "  Exit: Circle" in text.splitlines()


def test_popup_shows_through_presenter():
    presenter = RecordingPresenter()
    manager = ModalManager(presenter)
    popup = HelpPopup()
    registry = GamepadShortcutRegistry()
    registry.set_combination_map(group_by_combination(DEFAULT_CONTROLS))
    popup.init(manager, registry)
    popup.show()
    popup.show()
    assert popup.is_visible
    assert len(presenter.calls) == 1
    kind, modal_id, content = presenter.calls[0]
    assert (kind, modal_id) == ("show", HELP_MODAL_ID)
    assert "Toggle the help screen: Select" in content
    popup.hide()
    assert presenter.calls[-1] == ("hide", HELP_MODAL_ID)
    assert manager.current is None


def test_showing_a_second_modal_hides_the_first():
    presenter = RecordingPresenter()
    manager = ModalManager(presenter)
    manager.add_modal("a", lambda: "A")
    manager.add_modal("b", lambda: "B")
    manager.show_modal("a")
    manager.show_modal("b")
    assert presenter.calls == [("show", "a", "A"), ("hide", "a"), ("show", "b", "B")]
    assert manager.current == "b"


def test_unknown_and_closed_modals_are_logged(caplog):
    manager = ModalManager()
    assert manager.show_modal("ghost") is False
    manager.add_modal("a", lambda: "A")
    assert manager.hide_modal("a") is False
    assert "not managed" in caplog.text
    assert "not currently open" in caplog.text


def test_every_bound_combination_is_listed():
    controls = {"help": [GamepadCombination.SELECT, GamepadCombination.deserialize("l2+r2")]}
    assert help_text_for_shortcut("help", controls) == "Toggle the help screen: Select or L2 + R2"


def test_popup_shows_bindings_after_rebind(controller):
    Mapper({"controls": {"help": "start"}}).rebind(controller.registry)
    lines = controller.help_popup.render().splitlines()
    assert "  Toggle the help screen: Start" in lines
    assert "  Toggle the help screen: Select" not in lines

    controller.registry.add_combination_mapping("l2", "help")
    assert "  Toggle the help screen: Start or L2" in controller.help_popup.render().splitlines()
