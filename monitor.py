"""Input monitor: turns controller frames into shortcut activations"""
import logging
from typing import List, Optional

from config import MonitorConfig
from core.gamepad import (
    AXIS_DIRECTION_SIGN,
    GAMEPAD_AXIS_TO_INDEX,
    GAMEPAD_BUTTON_TO_INDEX,
    GamepadCombination,
)
from core.reader import GamepadSource
from core.scheduler import FrameScheduler
from core.state import GamepadState

LOG = logging.getLogger("padnav.monitor")


class GamepadMonitor:
    """Polls every connected controller once per frame.

    At most one activation is handled per debounce interval, across all
    controllers and sessions. A frame that arrives within the interval of the
    last handled activation is dropped.
    """

    def __init__(self, registry, source: GamepadSource, scheduler: FrameScheduler,
                 config: Optional[MonitorConfig] = None):
        config = config or MonitorConfig()
        self.registry = registry
        self.source = source
        self.scheduler = scheduler
        self.delay_between_combinations = config.delay_between_combinations_ms
        self.axis_activation_threshold = config.axis_activation_threshold
        self._connected = {}  # index -> None, insertion ordered
        self._sessions: List = []
        self._last_handled = float("-inf")
        self._disposed = False
        self._subscribed = False

    def init(self):
        self._disposed = False
        self.source.subscribe(self._on_connected, self._on_disconnected)
        self._subscribed = True
        self.scheduler.request_frame(self.handle_frame)

    def dispose(self):
        if self._subscribed:
            self.source.unsubscribe()
            self._subscribed = False
        self._disposed = True

    @property
    def connected(self) -> List[int]:
        return list(self._connected)

    @property
    def sessions(self) -> List:
        return list(self._sessions)

    def add_session(self, session):
        if session not in self._sessions:
            self._sessions.append(session)

    def remove_session(self, session):
        if session in self._sessions:
            self._sessions.remove(session)

    def _on_connected(self, index: int):
        LOG.info("gamepad %s connected", index)
        self._connected[index] = None

    def _on_disconnected(self, index: int):
        LOG.info("gamepad %s disconnected", index)
        self._connected.pop(index, None)

    def current_combination(self, state: GamepadState) -> GamepadCombination:
        combination = GamepadCombination()
        for button, idx in GAMEPAD_BUTTON_TO_INDEX.items():
            if state.is_pressed(idx):
                combination.add_button(button)
        threshold = self.axis_activation_threshold
        for axis, idx in GAMEPAD_AXIS_TO_INDEX.items():
            value = state.axis(idx)
            if AXIS_DIRECTION_SIGN[axis] < 0 and value < -threshold:
                combination.add_axis(axis)
            elif AXIS_DIRECTION_SIGN[axis] > 0 and value > threshold:
                combination.add_axis(axis)
        return combination

    def handle_frame(self, timestamp: float):
        if self._disposed:
            return
        try:
            self._handle(timestamp)
        finally:
            if not self._disposed:
                self.scheduler.request_frame(self.handle_frame)

    def _handle(self, timestamp: float):
        if not self._connected:
            return
        if timestamp - self._last_handled <= self.delay_between_combinations:
            return

        try:
            gamepads = self.source.get_gamepads()
        except Exception:
            LOG.exception("failed to read gamepads")
            return

        handled = False
        for index in list(self._connected):
            state = gamepads.get(index)
            if state is None:
                continue
            try:
                combination = self.current_combination(state)
            except Exception:
                LOG.exception("bad state from gamepad %s", index)
                continue
            if combination.is_empty():
                continue
            for session in list(self._sessions):
                try:
                    if self.registry.on_activate(session, combination):
                        handled = True
                except Exception:
                    LOG.exception("shortcut for %s failed", combination.serialize())
        if handled:
            LOG.debug("handled activation at %.1f", timestamp)
            self._last_handled = timestamp
