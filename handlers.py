"""Shortcut handlers for fields and the toolbox

Fields and toolboxes carry a `HandlerKind` tag. `handle_shortcut` looks the
tag up in `HANDLERS` and lets that handler consume previous/next/in/out
before the cursor moves.
"""
from core.constants import SHORTCUT_NAMES
from core.editor import HandlerKind

_COLOUR_MOVES = {
    SHORTCUT_NAMES.PREVIOUS: (0, -1),
    SHORTCUT_NAMES.NEXT: (0, 1),
    SHORTCUT_NAMES.OUT: (-1, 0),
    SHORTCUT_NAMES.IN: (1, 0),
}


def _plain_field(field, shortcut) -> bool:
    return False


def _colour_field(field, shortcut) -> bool:
    if not field.picker_open():
        return False
    move = _COLOUR_MOVES.get(shortcut.name)
    if move is None:
        return False
    field.move_highlight_by(*move)
    return True


def _dropdown_field(field, shortcut) -> bool:
    if not field.menu_open():
        return False
    if shortcut.name == SHORTCUT_NAMES.PREVIOUS:
        field.highlight_previous()
        return True
    if shortcut.name == SHORTCUT_NAMES.NEXT:
        field.highlight_next()
        return True
    return False


def _toolbox(toolbox, shortcut) -> bool:
    if toolbox.get_selected_item() is None:
        return False
    if shortcut.name == SHORTCUT_NAMES.PREVIOUS:
        return bool(toolbox.select_previous())
    if shortcut.name == SHORTCUT_NAMES.NEXT:
        return bool(toolbox.select_next())
    if shortcut.name == SHORTCUT_NAMES.OUT:
        return bool(toolbox.select_parent())
    if shortcut.name == SHORTCUT_NAMES.IN:
        return bool(toolbox.select_child())
    return False


HANDLERS = {
    HandlerKind.PLAIN_FIELD: _plain_field,
    HandlerKind.COLOUR_FIELD: _colour_field,
    HandlerKind.DROPDOWN_FIELD: _dropdown_field,
    HandlerKind.TOOLBOX: _toolbox,
}


def handle_shortcut(target, shortcut) -> bool:
    """Return True if ``target`` consumed ``shortcut``."""
    if target is None:
        return False
    handler = HANDLERS.get(getattr(target, "handler_kind", None))
    if handler is None:
        return False
    return handler(target, shortcut)
