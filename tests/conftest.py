"""In-memory editor, gamepad source and scheduler used across the suite"""
import itertools

import pytest

from config import PadnavConfig
from controller import ControllerOverrides, NavigationController
from core.editor import (
    Block,
    ColourField,
    Connection,
    ConnectionKind,
    Coordinate,
    Cursor,
    DropdownField,
    Field,
    Flyout,
    Toolbox,
    Workspace,
)
from core.reader import GamepadSource
from core.scheduler import FrameScheduler
from core.state import GamepadState

_COMPATIBLE = {
    (ConnectionKind.PREVIOUS, ConnectionKind.NEXT),
    (ConnectionKind.NEXT, ConnectionKind.PREVIOUS),
    (ConnectionKind.INPUT, ConnectionKind.OUTPUT),
    (ConnectionKind.OUTPUT, ConnectionKind.INPUT),
}


class FakeConnection(Connection):
    def __init__(self, block, kind):
        self._block = block
        self._kind = kind
        self._target = None

    @property
    def kind(self):
        return self._kind

    @property
    def source_block(self):
        return self._block

    @property
    def target_connection(self):
        return self._target

    def can_connect(self, other):
        if (self.kind, other.kind) not in _COMPATIBLE:
            return False
        if other.source_block is self.source_block:
            return False
        superior, inferior = (self, other) if self.is_superior() else (other, self)
        block = superior.source_block
        while block is not None:
            if block is inferior.source_block:
                return False
            block = block.parent
        return True

    def connect(self, other):
        superior, inferior = (self, other) if self.is_superior() else (other, self)
        inferior.disconnect()
        displaced = superior.target_connection
        superior.disconnect()
        superior._target = inferior
        inferior._target = superior
        if displaced is None:
            return
        # a displaced statement reattaches below the inserted stack
        if superior.kind == ConnectionKind.NEXT:
            last = inferior.source_block
            while last.next_connection is not None and last.next_connection.is_connected():
                last = last.next_connection.target_block()
            if last.next_connection is not None:
                last.next_connection._target = displaced
                displaced._target = last.next_connection

    def disconnect(self):
        if self._target is not None:
            self._target._target = None
            self._target = None

    def __repr__(self):
        return f"<{self._block.id}.{self._kind.value}>"


class FakeBlock(Block):
    def __init__(self, workspace, block_id, previous=True, next_=True, output=False, inputs=0,
                 x=0, y=0, shadow=False, deletable=True, movable=True, enabled=True, in_flyout=False):
        self._kwargs = dict(previous=previous, next_=next_, output=output, inputs=inputs,
                            shadow=shadow, deletable=deletable, movable=movable, enabled=enabled)
        self._id = block_id
        self._workspace = workspace
        self._previous = FakeConnection(self, ConnectionKind.PREVIOUS) if previous else None
        self._next = FakeConnection(self, ConnectionKind.NEXT) if next_ else None
        self._output = FakeConnection(self, ConnectionKind.OUTPUT) if output else None
        self._inputs = [FakeConnection(self, ConnectionKind.INPUT) for _ in range(inputs)]
        self._position = Coordinate(x, y)
        self._shadow = shadow
        self._deletable = deletable
        self._movable = movable
        self._enabled = enabled
        self._in_flyout = in_flyout
        self.fields = []

    @property
    def id(self):
        return self._id

    @property
    def workspace(self):
        return self._workspace

    @property
    def previous_connection(self):
        return self._previous

    @property
    def next_connection(self):
        return self._next

    @property
    def output_connection(self):
        return self._output

    @property
    def parent(self):
        inferior = self._previous or self._output
        if inferior is not None and inferior.is_connected():
            return inferior.target_block()
        return None

    @property
    def position(self):
        return self._position

    @property
    def is_in_flyout(self):
        return self._in_flyout

    def children(self):
        found = []
        for connection in self._inputs + [self._next]:
            if connection is not None and connection.is_connected():
                found.append(connection.target_block())
        return found

    def input_connections(self):
        return list(self._inputs)

    def is_deletable(self):
        return self._deletable

    def is_movable(self):
        return self._movable

    def is_shadow(self):
        return self._shadow

    def is_enabled(self):
        return self._enabled

    def move_to(self, coordinate):
        self._position = coordinate

    def unplug(self):
        inferior = self._previous or self._output
        if inferior is not None:
            inferior.disconnect()

    def __repr__(self):
        return f"<FakeBlock {self._id}>"


class FakeField(Field):
    def __init__(self, block, value=""):
        self._block = block
        self.value = value
        self.editor_shown = 0
        block.fields.append(self)

    @property
    def source_block(self):
        return self._block

    def get_value(self):
        return self.value

    def set_value(self, value):
        self.value = value

    def show_editor(self):
        self.editor_shown += 1


class FakeColourField(FakeField, ColourField):
    def __init__(self, block, picker_open=False):
        super().__init__(block, "#ff0000")
        self.open = picker_open
        self.moves = []

    def picker_open(self):
        return self.open

    def move_highlight_by(self, dx, dy):
        self.moves.append((dx, dy))


class FakeDropdownField(FakeField, DropdownField):
    def __init__(self, block, menu_open=False):
        super().__init__(block, "a")
        self.open = menu_open
        self.highlights = []

    def menu_open(self):
        return self.open

    def highlight_previous(self):
        self.highlights.append("previous")

    def highlight_next(self):
        self.highlights.append("next")


class FakeCursor(Cursor):
    def __init__(self):
        self.node = None
        self.moves = []

    def get_cur_node(self):
        return self.node

    def set_cur_node(self, node):
        self.node = node

    def move_prev(self):
        self.moves.append("prev")

    def move_next(self):
        self.moves.append("next")

    def move_in(self):
        self.moves.append("in")

    def move_out(self):
        self.moves.append("out")


class FakeToolboxItem:
    def __init__(self, name, selectable=True):
        self.name = name
        self.selectable = selectable

    def is_selectable(self):
        return self.selectable


class FakeToolbox(Toolbox):
    def __init__(self, items=None):
        self.items = items if items is not None else [
            FakeToolboxItem("separator", selectable=False),
            FakeToolboxItem("Logic"),
            FakeToolboxItem("Loops"),
        ]
        self.selected = None

    def get_items(self):
        return self.items

    def get_selected_item(self):
        return None if self.selected is None else self.items[self.selected]

    def select_item_by_position(self, position):
        self.selected = position

    def clear_selection(self):
        self.selected = None

    def select_previous(self):
        if self.selected is None or self.selected == 0:
            return False
        self.selected -= 1
        return True

    def select_next(self):
        if self.selected is None or self.selected >= len(self.items) - 1:
            return False
        self.selected += 1
        return True

    def select_parent(self):
        return False

    def select_child(self):
        return False


class FakeFlyout(Flyout):
    def __init__(self, workspace):
        self.workspace = workspace
        self.cursor = FakeCursor()
        self.templates = []
        self.visible = True
        self._ids = itertools.count(1)

    def add_template(self, block_id, **kwargs):
        block = FakeBlock(self.workspace, block_id, in_flyout=True, **kwargs)
        self.templates.append(block)
        return block

    def get_cursor(self):
        return self.cursor

    def get_top_blocks(self):
        return list(self.templates)

    def is_visible(self):
        return self.visible

    def hide(self):
        self.visible = False

    def create_block(self, template):
        return self.workspace.new_block(f"{template.id}_{next(self._ids)}", **template._kwargs)


class FakeWorkspace(Workspace):
    def __init__(self, ws_id="ws", read_only=False, toolbox=True, flyout=True):
        self._id = ws_id
        self._read_only = read_only
        self.cursor = FakeCursor()
        self.markers = {}
        self.toolbox = FakeToolbox() if toolbox else None
        self.flyout = FakeFlyout(self) if flyout else None
        self.blocks = []
        self._scroll = (0.0, 0.0)
        self.gesture = False
        self.clipboard = None
        self.chaff_hidden = 0
        self.deleted = []

    def new_block(self, block_id, **kwargs):
        block = FakeBlock(self, block_id, **kwargs)
        self.blocks.append(block)
        return block

    def stack(self, *ids):
        """Create statement blocks chained top to bottom."""
        blocks = [self.new_block(i) for i in ids]
        for upper, lower in zip(blocks, blocks[1:]):
            upper.next_connection.connect(lower.previous_connection)
        return blocks

    @property
    def id(self):
        return self._id

    @property
    def read_only(self):
        return self._read_only

    @property
    def scroll_x(self):
        return self._scroll[0]

    @property
    def scroll_y(self):
        return self._scroll[1]

    def scroll(self, x, y):
        self._scroll = (x, y)

    def get_cursor(self):
        return self.cursor

    def add_marker(self, name):
        self.markers[name] = FakeCursor()
        return self.markers[name]

    def get_marker(self, name):
        return self.markers.get(name)

    def remove_marker(self, name):
        self.markers.pop(name, None)

    def get_toolbox(self):
        return self.toolbox

    def get_flyout(self):
        return self.flyout

    def get_top_blocks(self):
        return [b for b in self.blocks if b.parent is None]

    def gesture_in_progress(self):
        return self.gesture

    def hide_chaff(self):
        self.chaff_hidden += 1

    def copy(self, block):
        self.clipboard = block

    def paste(self):
        if self.clipboard is None:
            return None
        return self.new_block(f"{self.clipboard.id}_paste", **self.clipboard._kwargs)

    def delete_block(self, block):
        parent_side = block.previous_connection.target_connection if block.previous_connection else None
        next_block = block.next_connection.target_block() if block.next_connection else None
        if next_block is not None:
            block.next_connection.disconnect()
        block.unplug()
        if parent_side is not None and next_block is not None:
            parent_side.connect(next_block.previous_connection)
        for gone in block.descendants():
            self.blocks.remove(gone)
            self.deleted.append(gone.id)


class FakeSource(GamepadSource):
    def __init__(self):
        self.pads = {}
        self.on_connected = None
        self.on_disconnected = None
        self.fail_reads = False

    def subscribe(self, on_connected, on_disconnected):
        self.on_connected = on_connected
        self.on_disconnected = on_disconnected

    def unsubscribe(self):
        self.on_connected = None
        self.on_disconnected = None

    def connect(self, index=0, state=None):
        self.pads[index] = state or GamepadState()
        if self.on_connected:
            self.on_connected(index)

    def disconnect(self, index=0):
        self.pads.pop(index, None)
        if self.on_disconnected:
            self.on_disconnected(index)

    def press(self, combination, index=0):
        self.pads[index] = combination.as_gamepad_state()

    def release(self, index=0):
        self.pads[index] = GamepadState()

    def get_gamepads(self):
        if self.fail_reads:
            raise IOError("device read failed")
        return dict(self.pads)


class ManualScheduler(FrameScheduler):
    def __init__(self):
        self.pending = []

    def request_frame(self, callback):
        self.pending.append(callback)

    def tick(self, timestamp):
        pending, self.pending = self.pending, []
        for callback in pending:
            callback(timestamp)


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def workspace():
    return FakeWorkspace()


@pytest.fixture
def controller(source, scheduler, workspace):
    ctrl = NavigationController(PadnavConfig(), ControllerOverrides(source=source, scheduler=scheduler))
    ctrl.init()
    ctrl.add_workspace(workspace)
    ctrl.enable(workspace)
    return ctrl
