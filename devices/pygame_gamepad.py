"""Gamepad source backed by pygame.joystick

Translates each pad's raw buttons, axes and hat into the 16-button /
4-axis universal layout using a `DeviceConfig`. Hot-plug events come from
pygame's event queue, so `pump` must run once per frame; register it as a
`LoopScheduler` pre-frame hook.
"""
import logging
from typing import Dict, Optional

try:
    import pygame
except Exception:
    pygame = None

from config import DeviceConfig
from core.gamepad import GAMEPAD_BUTTON_TO_INDEX, GamepadButtonType, NUM_AXES, NUM_BUTTONS
from core.reader import GamepadSource
from core.state import ButtonState, GamepadState

LOG = logging.getLogger("padnav.gamepad")

_DPAD_SLOTS = {
    "up": GAMEPAD_BUTTON_TO_INDEX[GamepadButtonType.UP],
    "down": GAMEPAD_BUTTON_TO_INDEX[GamepadButtonType.DOWN],
    "left": GAMEPAD_BUTTON_TO_INDEX[GamepadButtonType.LEFT],
    "right": GAMEPAD_BUTTON_TO_INDEX[GamepadButtonType.RIGHT],
}


def hat_to_dpad(hat) -> Dict[str, bool]:
    """pygame reports hats as (x, y) with y=+1 meaning up."""
    x, y = hat
    return {"up": y > 0, "down": y < 0, "left": x < 0, "right": x > 0}


def read_state(js, config: DeviceConfig) -> GamepadState:
    """Sample one pygame joystick into the universal layout."""
    num_buttons = js.get_numbuttons()
    buttons = []
    for slot in range(NUM_BUTTONS):
        src = config.button_map[slot] if slot < len(config.button_map) else None
        pressed = src is not None and src < num_buttons and bool(js.get_button(src))
        buttons.append(ButtonState(pressed=pressed, value=1.0 if pressed else 0.0))

    if config.hat_as_dpad and js.get_numhats() > 0:
        for direction, on in hat_to_dpad(js.get_hat(0)).items():
            if on:
                buttons[_DPAD_SLOTS[direction]] = ButtonState(pressed=True, value=1.0)

    num_axes = js.get_numaxes()
    axes = []
    for slot in range(NUM_AXES):
        src = config.axis_map[slot] if slot < len(config.axis_map) else None
        axes.append(float(js.get_axis(src)) if src is not None and src < num_axes else 0.0)
    return GamepadState(buttons=buttons, axes=axes)


class PygameGamepadSource(GamepadSource):
    def __init__(self, config: Optional[DeviceConfig] = None):
        self.config = config or DeviceConfig()
        self._joysticks = {}  # instance id -> pygame Joystick
        self._on_connected = None
        self._on_disconnected = None
        self._started = False

    def start(self) -> bool:
        if pygame is None:
            LOG.warning("pygame not available, gamepad input disabled")
            return False
        if not self._started:
            pygame.init()
            pygame.joystick.init()
            self._started = True
        return True

    def subscribe(self, on_connected, on_disconnected):
        self._on_connected = on_connected
        self._on_disconnected = on_disconnected
        self.start()

    def unsubscribe(self):
        self._on_connected = None
        self._on_disconnected = None

    def stop(self):
        self.unsubscribe()
        for js in self._joysticks.values():
            try:
                js.quit()
            except Exception:
                LOG.exception("error closing joystick")
        self._joysticks.clear()
        if self._started:
            pygame.joystick.quit()
            self._started = False

    def pump(self):
        """Handle hot-plug events queued since the last frame."""
        if not self._started:
            return
        for event in pygame.event.get((pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED)):
            if event.type == pygame.JOYDEVICEADDED:
                self._added(event.device_index)
            else:
                self._removed(event.instance_id)

    def _added(self, device_index: int):
        js = pygame.joystick.Joystick(device_index)
        js.init()
        iid = js.get_instance_id()
        self._joysticks[iid] = js
        LOG.info(f"Found gamepad: {js.get_name()} (id {iid}, axes={js.get_numaxes()}, "
                 f"buttons={js.get_numbuttons()}, hats={js.get_numhats()})")
        if self._on_connected:
            self._on_connected(iid)

    def _removed(self, instance_id: int):
        if self._joysticks.pop(instance_id, None) is None:
            return
        LOG.info("gamepad %s removed", instance_id)
        if self._on_disconnected:
            self._on_disconnected(instance_id)

    def names(self) -> Dict[int, str]:
        return {iid: js.get_name() for iid, js in self._joysticks.items()}

    def get_gamepads(self) -> Dict[int, GamepadState]:
        states = {}
        for iid, js in self._joysticks.items():
            states[iid] = read_state(js, self.config)
            LOG.debug("gamepad %s raw state -> %s", iid, states[iid])
        return states
