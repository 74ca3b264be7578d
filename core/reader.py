"""Base gamepad source abstraction"""
import abc
from typing import Dict

from core.state import GamepadState


class GamepadSource(abc.ABC):
    """Hardware seen by the monitor.

    Connect/disconnect notifications carry the controller index; the same
    index keys the mapping returned by `get_gamepads`.
    """

    @abc.abstractmethod
    def subscribe(self, on_connected, on_disconnected):
        raise NotImplementedError

    @abc.abstractmethod
    def unsubscribe(self):
        raise NotImplementedError

    @abc.abstractmethod
    def get_gamepads(self) -> Dict[int, GamepadState]:
        raise NotImplementedError
