"""Modal popups: bookkeeping for the help screen and the virtual keyboard

padnav never draws anything. A `ModalPresenter` supplied by the host turns
show/hide calls into pixels; without one the manager only tracks which
modal is open.
"""
import abc
import logging
from typing import Callable, Dict, Optional

LOG = logging.getLogger("padnav.modal")


class ModalPresenter(abc.ABC):
    @abc.abstractmethod
    def show(self, modal_id: str, content: str):
        raise NotImplementedError

    @abc.abstractmethod
    def hide(self, modal_id: str):
        raise NotImplementedError


class ModalManager:
    """At most one modal is open at a time."""

    def __init__(self, presenter: Optional[ModalPresenter] = None):
        self.presenter = presenter
        self._modals: Dict[str, Callable[[], str]] = {}
        self.current: Optional[str] = None

    def add_modal(self, modal_id: str, render: Callable[[], str]):
        if not modal_id:
            LOG.error("All modals must have an ID.")
            return
        self._modals[modal_id] = render

    def show_modal(self, modal_id: str) -> bool:
        if modal_id not in self._modals:
            LOG.error("Modal with ID %s is not managed by us.", modal_id)
            return False
        if self.current is not None and self.current != modal_id and self.presenter:
            self.presenter.hide(self.current)
        self.current = modal_id
        if self.presenter:
            self.presenter.show(modal_id, self._modals[modal_id]())
        return True

    def hide_modal(self, modal_id: str) -> bool:
        if modal_id != self.current:
            LOG.warning("Modal with ID %s is not currently open.", modal_id)
            return False
        if self.presenter:
            self.presenter.hide(modal_id)
        self.current = None
        return True

    def dispose(self):
        if self.current is not None:
            self.hide_modal(self.current)
        self._modals.clear()
