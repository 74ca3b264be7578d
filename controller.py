"""Navigation controller: defines every gamepad shortcut and wires them up

`NavigationController.init` registers the shortcuts, binds them to the
configured controls and starts the monitor. Hosts then call
`add_workspace` for each editor session they want driven by a gamepad.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from accessibility import AccessibilityStatus
from config import PadnavConfig
from core.constants import SHORTCUT_NAMES
from core.editor import NodeType
from core.gamepad import GamepadCombination
from core.modal import ModalManager
from core.state import NavState, Shortcut
from gestures import GestureHandler
from handlers import handle_shortcut
from help import HelpPopup
from mapper import controls_from_profile
from monitor import GamepadMonitor
from navigation import Navigation
from registry import GamepadShortcutRegistry
from text_input import TextInputController

LOG = logging.getLogger("padnav.controller")


@dataclass
class ControllerOverrides:
    """Collaborators a host may inject. Anything left as None is built
    from the config."""
    accessibility_status: Optional[AccessibilityStatus] = None
    navigation: Optional[Navigation] = None
    registry: Optional[GamepadShortcutRegistry] = None
    monitor: Optional[GamepadMonitor] = None
    controls: Optional[Dict[str, GamepadCombination]] = None
    modal_manager: Optional[ModalManager] = None
    help_popup: Optional[HelpPopup] = None
    text_input: Optional[TextInputController] = None
    source: object = None
    scheduler: object = None


class NavigationController:
    def __init__(self, config: Optional[PadnavConfig] = None,
                 overrides: Optional[ControllerOverrides] = None):
        config = config or PadnavConfig()
        o = overrides or ControllerOverrides()
        self.config = config
        self.accessibility_status = o.accessibility_status or AccessibilityStatus()
        self.navigation = o.navigation or Navigation(self.accessibility_status, config.navigation)
        self.registry = o.registry or GamepadShortcutRegistry()
        self.monitor = o.monitor
        if self.monitor is None:
            if o.source is None or o.scheduler is None:
                raise ValueError("a gamepad source and a frame scheduler are needed to build the monitor")
            self.monitor = GamepadMonitor(self.registry, o.source, o.scheduler, config.monitor)
        if o.controls is not None:
            self.controls = {name: c.copy() for name, c in o.controls.items()}
        else:
            self.controls = controls_from_profile({"controls": config.controls})
        self.modal_manager = o.modal_manager or ModalManager()
        self.help_popup = o.help_popup or HelpPopup()
        self.text_input = o.text_input or TextInputController(self.navigation)
        self.gestures = GestureHandler(self.accessibility_status)

    def init(self):
        self.register_defaults()
        self.help_popup.init(self.modal_manager, self.registry)
        self.text_input.popup.init(self.modal_manager)
        self.monitor.init()

    def dispose(self):
        for name in SHORTCUT_NAMES.all():
            if name in self.registry.get_registry():
                self.registry.unregister(name)
        self.navigation.dispose()
        self.monitor.dispose()
        self.help_popup.hide()
        self.text_input.popup.cancel()
        self.modal_manager.dispose()

    # -- sessions -----------------------------------------------------------

    def add_workspace(self, workspace):
        self.navigation.add_workspace(workspace)
        self.monitor.add_session(workspace)

    def remove_workspace(self, workspace):
        self.navigation.remove_workspace(workspace)
        self.monitor.remove_session(workspace)

    def enable(self, workspace):
        self.navigation.enable_gamepad_accessibility(workspace)

    def disable(self, workspace):
        """Switch navigation off, closing any popup the session has open."""
        state = self.navigation.get_state(workspace)
        if state == NavState.HELP:
            self.help_popup.hide()
            self.navigation.set_state(workspace, NavState.WORKSPACE)
        elif state == NavState.TEXT_INPUT:
            self.text_input.cancel(workspace)
        self.navigation.disable_gamepad_accessibility(workspace)

    # -- preconditions ------------------------------------------------------

    def _is_enabled(self, workspace) -> bool:
        """Accessibility on and no modal owning the controller."""
        return (self.accessibility_status.is_enabled(workspace) and
                self.navigation.get_state(workspace) not in (NavState.HELP, NavState.TEXT_INPUT))

    def _can_modify(self, workspace) -> bool:
        return self._is_enabled(workspace) and not workspace.read_only

    def _cursor_block(self, workspace):
        cur_node = workspace.get_cursor().get_cur_node()
        return cur_node.source_block() if cur_node is not None else None

    def _can_copy(self, workspace) -> bool:
        if not self._can_modify(workspace):
            return False
        block = self._cursor_block(workspace)
        return (block is not None and not workspace.gesture_in_progress() and
                block.is_deletable() and block.is_movable())

    def _can_cut(self, workspace) -> bool:
        return self._can_copy(workspace) and not self._cursor_block(workspace).is_in_flyout

    def _can_delete(self, workspace) -> bool:
        if not self._can_modify(workspace):
            return False
        block = self._cursor_block(workspace)
        return block is not None and block.is_deletable()

    def _field_shortcut_handler(self, workspace, shortcut) -> bool:
        cur_node = workspace.get_cursor().get_cur_node()
        if cur_node is None or cur_node.type != NodeType.FIELD:
            return False
        return handle_shortcut(cur_node.location, shortcut)

    # -- registration -------------------------------------------------------

    def _register(self, shortcut: Shortcut, allow_override=False, allow_collision=False):
        self.registry.register(shortcut, allow_override=allow_override)
        combination = self.controls.get(shortcut.name)
        if combination is None:
            LOG.info("shortcut %s has no control bound", shortcut.name)
            return
        self.registry.add_combination_mapping(combination, shortcut.name, allow_collision=allow_collision)

    def _cursor_move(self, name, move):
        """previous/next: field first, then the workspace or flyout cursor."""
        def callback(workspace, combination, shortcut):
            state = self.navigation.get_state(workspace)
            if state == NavState.WORKSPACE:
                if not self._field_shortcut_handler(workspace, shortcut):
                    move(workspace.get_cursor())
                return True
            if state == NavState.FLYOUT:
                cursor = self.navigation.get_flyout_cursor(workspace)
                if cursor is None:
                    return False
                move(cursor)
                return True
            if state == NavState.TOOLBOX:
                return handle_shortcut(workspace.get_toolbox(), shortcut)
            return False
        return Shortcut(name=name, callback=callback, precondition=self._is_enabled)

    def register_previous(self):
        self._register(self._cursor_move(SHORTCUT_NAMES.PREVIOUS, lambda c: c.move_prev()))

    def register_next(self):
        self._register(self._cursor_move(SHORTCUT_NAMES.NEXT, lambda c: c.move_next()))

    def register_in(self):
        def callback(workspace, combination, shortcut):
            state = self.navigation.get_state(workspace)
            if state == NavState.WORKSPACE:
                if not self._field_shortcut_handler(workspace, shortcut):
                    workspace.get_cursor().move_in()
                return True
            if state == NavState.TOOLBOX:
                if not handle_shortcut(workspace.get_toolbox(), shortcut):
                    self.navigation.focus_flyout(workspace)
                return True
            return False
        self._register(Shortcut(SHORTCUT_NAMES.IN, callback, self._is_enabled))

    def register_out(self):
        def callback(workspace, combination, shortcut):
            state = self.navigation.get_state(workspace)
            if state == NavState.WORKSPACE:
                if not self._field_shortcut_handler(workspace, shortcut):
                    workspace.get_cursor().move_out()
                return True
            if state == NavState.FLYOUT:
                self.navigation.focus_toolbox(workspace)
                return True
            if state == NavState.TOOLBOX:
                return handle_shortcut(workspace.get_toolbox(), shortcut)
            return False
        self._register(Shortcut(SHORTCUT_NAMES.OUT, callback, self._is_enabled))

    def register_disconnect(self):
        def precondition(workspace):
            return (self._can_modify(workspace) and
                    self.navigation.get_state(workspace) == NavState.WORKSPACE)

        def callback(workspace, combination, shortcut):
            self.navigation.disconnect_blocks(workspace)
            return True
        self._register(Shortcut(SHORTCUT_NAMES.DISCONNECT, callback, precondition))

    def register_exit(self):
        def callback(workspace, combination, shortcut):
            state = self.navigation.get_state(workspace)
            if state in (NavState.FLYOUT, NavState.TOOLBOX):
                self.navigation.focus_workspace(workspace)
                return True
            if state == NavState.HELP:
                self.help_popup.hide()
                self.navigation.focus_workspace(workspace)
                return True
            if state == NavState.TEXT_INPUT:
                self.text_input.cancel(workspace)
                self.navigation.focus_workspace(workspace)
                return True
            return False
        # exit shares its button with disconnect; disconnect only fires in WORKSPACE
        self._register(Shortcut(SHORTCUT_NAMES.EXIT, callback, self.accessibility_status.is_enabled),
                       allow_override=True, allow_collision=True)

    def register_insert(self):
        def callback(workspace, combination, shortcut):
            if self.navigation.get_state(workspace) == NavState.WORKSPACE:
                return self.navigation.connect_marker_and_cursor(workspace)
            return False
        self._register(Shortcut(SHORTCUT_NAMES.INSERT, callback, self._can_modify))

    def register_mark(self):
        def callback(workspace, combination, shortcut):
            state = self.navigation.get_state(workspace)
            if state == NavState.WORKSPACE:
                self.navigation.handle_enter_for_ws(workspace)
                return True
            if state == NavState.FLYOUT:
                self.navigation.insert_from_flyout(workspace)
                return True
            return False
        self._register(Shortcut(SHORTCUT_NAMES.MARK, callback, self._can_modify))

    def register_toolbox_focus(self):
        def callback(workspace, combination, shortcut):
            if self.navigation.get_state(workspace) != NavState.WORKSPACE:
                return False
            if workspace.get_toolbox() is None:
                self.navigation.focus_flyout(workspace)
            else:
                self.navigation.focus_toolbox(workspace)
            return True
        self._register(Shortcut(SHORTCUT_NAMES.TOOLBOX, callback, self._can_modify))

    def register_toggle_gamepad_nav(self):
        def callback(workspace, combination, shortcut):
            if self.accessibility_status.is_enabled(workspace):
                self.disable(workspace)
            else:
                self.enable(workspace)
            return True
        self._register(Shortcut(SHORTCUT_NAMES.TOGGLE_GAMEPAD_NAV, callback))

    def _ws_cursor_move(self, name, dx, dy):
        def callback(workspace, combination, shortcut):
            return self.navigation.move_ws_cursor(workspace, dx, dy)
        return Shortcut(name, callback, self._can_modify)

    def register_workspace_moves(self):
        self._register(self._ws_cursor_move(SHORTCUT_NAMES.MOVE_WS_CURSOR_DOWN, 0, 1))
        self._register(self._ws_cursor_move(SHORTCUT_NAMES.MOVE_WS_CURSOR_LEFT, -1, 0))
        self._register(self._ws_cursor_move(SHORTCUT_NAMES.MOVE_WS_CURSOR_UP, 0, -1))
        self._register(self._ws_cursor_move(SHORTCUT_NAMES.MOVE_WS_CURSOR_RIGHT, 1, 0))

    def _ws_scroll(self, name, dx, dy):
        def callback(workspace, combination, shortcut):
            return self.navigation.scroll_ws(workspace, dx, dy)
        return Shortcut(name, callback, self._is_enabled, delay=0)

    def register_workspace_scrolls(self):
        # the content moves opposite to the stick
        self._register(self._ws_scroll(SHORTCUT_NAMES.SCROLL_WS_DOWN, 0, -1))
        self._register(self._ws_scroll(SHORTCUT_NAMES.SCROLL_WS_UP, 0, 1))
        self._register(self._ws_scroll(SHORTCUT_NAMES.SCROLL_WS_LEFT, 1, 0))
        self._register(self._ws_scroll(SHORTCUT_NAMES.SCROLL_WS_RIGHT, -1, 0))

    def register_copy(self):
        def callback(workspace, combination, shortcut):
            return self.navigation.copy(workspace)
        self._register(Shortcut(SHORTCUT_NAMES.COPY, callback, self._can_copy))

    def register_paste(self):
        def precondition(workspace):
            return self._can_modify(workspace) and not workspace.gesture_in_progress()

        def callback(workspace, combination, shortcut):
            return self.navigation.paste(workspace)
        self._register(Shortcut(SHORTCUT_NAMES.PASTE, callback, precondition))

    def register_cut(self):
        def callback(workspace, combination, shortcut):
            return self.navigation.cut(workspace)
        self._register(Shortcut(SHORTCUT_NAMES.CUT, callback, self._can_cut))

    def register_delete(self):
        def callback(workspace, combination, shortcut):
            return self.navigation.delete(workspace)
        self._register(Shortcut(SHORTCUT_NAMES.DELETE, callback, self._can_delete))

    def register_open_help(self):
        def precondition(workspace):
            return (self.accessibility_status.is_enabled(workspace) and
                    self.navigation.get_state(workspace) in (NavState.WORKSPACE, NavState.HELP))

        def callback(workspace, combination, shortcut):
            if self.navigation.get_state(workspace) == NavState.HELP:
                self.help_popup.hide()
                self.navigation.focus_workspace(workspace)
                return True
            self.help_popup.show()
            self.navigation.set_state(workspace, NavState.HELP)
            return True
        self._register(Shortcut(SHORTCUT_NAMES.OPEN_HELP, callback, precondition))

    def register_defaults(self):
        self.register_previous()
        self.register_next()
        self.register_in()
        self.register_out()

        self.register_disconnect()
        self.register_exit()
        self.register_insert()
        self.register_mark()
        self.register_toolbox_focus()
        self.register_toggle_gamepad_nav()

        self.register_workspace_moves()
        self.register_workspace_scrolls()

        self.register_copy()
        self.register_paste()
        self.register_cut()
        self.register_delete()

        self.register_open_help()
