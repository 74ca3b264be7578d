"""Interfaces of the block editor that padnav drives

The editor owns rendering, the block graph and the rules about which
connections are compatible. padnav only talks to it through the abstract
classes below. `Node` is the one concrete type: a focus location that the
cursor or the marker can rest on.
"""
import abc
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class ConnectionKind(str, Enum):
    PREVIOUS = "previous"
    NEXT = "next"
    INPUT = "input"
    OUTPUT = "output"


class NodeType(str, Enum):
    FIELD = "field"
    BLOCK = "block"
    INPUT = "input"
    OUTPUT = "output"
    NEXT = "next"
    PREVIOUS = "previous"
    STACK = "stack"
    WORKSPACE = "workspace"


class HandlerKind(str, Enum):
    """Which shortcut handler a field or toolbox gets."""
    PLAIN_FIELD = "plain_field"
    COLOUR_FIELD = "colour_field"
    DROPDOWN_FIELD = "dropdown_field"
    TOOLBOX = "toolbox"


CONNECTION_NODE_TYPES = {
    ConnectionKind.PREVIOUS: NodeType.PREVIOUS,
    ConnectionKind.NEXT: NodeType.NEXT,
    ConnectionKind.INPUT: NodeType.INPUT,
    ConnectionKind.OUTPUT: NodeType.OUTPUT,
}


@dataclass(frozen=True)
class Coordinate:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Node:
    type: NodeType
    location: Any
    ws_coordinate: Optional[Coordinate] = None

    def is_connection(self) -> bool:
        return self.type in (NodeType.INPUT, NodeType.OUTPUT, NodeType.NEXT, NodeType.PREVIOUS)

    def source_block(self):
        if self.type in (NodeType.BLOCK, NodeType.STACK):
            return self.location
        if self.type == NodeType.WORKSPACE:
            return None
        return self.location.source_block

    @classmethod
    def for_block(cls, block):
        return cls(NodeType.BLOCK, block)

    @classmethod
    def for_stack(cls, block):
        return cls(NodeType.STACK, block)

    @classmethod
    def for_field(cls, field):
        return cls(NodeType.FIELD, field)

    @classmethod
    def for_connection(cls, connection):
        if connection is None:
            return None
        return cls(CONNECTION_NODE_TYPES[connection.kind], connection)

    @classmethod
    def for_workspace(cls, workspace, coordinate: Coordinate):
        return cls(NodeType.WORKSPACE, workspace, coordinate)

    @classmethod
    def top(cls, block):
        """The first node of a top-level block: its previous/output connection
        when it has one, otherwise the block itself."""
        connection = block.previous_connection or block.output_connection
        if connection is not None:
            return cls.for_connection(connection)
        return cls.for_block(block)


class Connection(abc.ABC):
    @property
    @abc.abstractmethod
    def kind(self) -> ConnectionKind:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def source_block(self) -> "Block":
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def target_connection(self) -> Optional["Connection"]:
        raise NotImplementedError

    @abc.abstractmethod
    def can_connect(self, other: "Connection") -> bool:
        """Whether the editor allows connecting to ``other``.

        Must refuse type mismatches and anything that would make a block its
        own ancestor.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def connect(self, other: "Connection"):
        raise NotImplementedError

    @abc.abstractmethod
    def disconnect(self):
        raise NotImplementedError

    def is_superior(self) -> bool:
        return self.kind in (ConnectionKind.NEXT, ConnectionKind.INPUT)

    def is_connected(self) -> bool:
        return self.target_connection is not None

    def target_block(self):
        target = self.target_connection
        return target.source_block if target is not None else None


class Block(abc.ABC):
    @property
    @abc.abstractmethod
    def id(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def workspace(self) -> "Workspace":
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def previous_connection(self) -> Optional[Connection]:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def next_connection(self) -> Optional[Connection]:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def output_connection(self) -> Optional[Connection]:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def parent(self) -> Optional["Block"]:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def position(self) -> Coordinate:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def is_in_flyout(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def children(self) -> List["Block"]:
        raise NotImplementedError

    @abc.abstractmethod
    def input_connections(self) -> List[Connection]:
        raise NotImplementedError

    @abc.abstractmethod
    def is_deletable(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def is_movable(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def is_shadow(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def is_enabled(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def move_to(self, coordinate: Coordinate):
        raise NotImplementedError

    @abc.abstractmethod
    def unplug(self):
        raise NotImplementedError

    def root_block(self) -> "Block":
        block = self
        while block.parent is not None:
            block = block.parent
        return block

    def descendants(self) -> List["Block"]:
        """This block and everything below it."""
        found = [self]
        for child in self.children():
            found.extend(child.descendants())
        return found


class Field(abc.ABC):
    handler_kind = HandlerKind.PLAIN_FIELD

    @property
    @abc.abstractmethod
    def source_block(self) -> Block:
        raise NotImplementedError

    @abc.abstractmethod
    def get_value(self):
        raise NotImplementedError

    @abc.abstractmethod
    def set_value(self, value):
        raise NotImplementedError

    @abc.abstractmethod
    def show_editor(self):
        raise NotImplementedError


class ColourField(Field):
    handler_kind = HandlerKind.COLOUR_FIELD

    @abc.abstractmethod
    def picker_open(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def move_highlight_by(self, dx: int, dy: int):
        raise NotImplementedError


class DropdownField(Field):
    handler_kind = HandlerKind.DROPDOWN_FIELD

    @abc.abstractmethod
    def menu_open(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def highlight_previous(self):
        raise NotImplementedError

    @abc.abstractmethod
    def highlight_next(self):
        raise NotImplementedError


class Cursor(abc.ABC):
    """A movable focus location. Markers use the same interface."""

    @abc.abstractmethod
    def get_cur_node(self) -> Optional[Node]:
        raise NotImplementedError

    @abc.abstractmethod
    def set_cur_node(self, node: Optional[Node]):
        raise NotImplementedError

    @abc.abstractmethod
    def move_prev(self):
        raise NotImplementedError

    @abc.abstractmethod
    def move_next(self):
        raise NotImplementedError

    @abc.abstractmethod
    def move_in(self):
        raise NotImplementedError

    @abc.abstractmethod
    def move_out(self):
        raise NotImplementedError


class Toolbox(abc.ABC):
    """Category list. Items expose ``is_selectable()``."""
    handler_kind = HandlerKind.TOOLBOX

    @abc.abstractmethod
    def get_items(self) -> list:
        raise NotImplementedError

    @abc.abstractmethod
    def get_selected_item(self):
        raise NotImplementedError

    @abc.abstractmethod
    def select_item_by_position(self, position: int):
        raise NotImplementedError

    @abc.abstractmethod
    def clear_selection(self):
        raise NotImplementedError

    @abc.abstractmethod
    def select_previous(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def select_next(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def select_parent(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def select_child(self) -> bool:
        raise NotImplementedError


class Flyout(abc.ABC):
    """Palette of block templates shown next to the toolbox."""

    @abc.abstractmethod
    def get_cursor(self) -> Cursor:
        raise NotImplementedError

    @abc.abstractmethod
    def get_top_blocks(self) -> List[Block]:
        raise NotImplementedError

    @abc.abstractmethod
    def is_visible(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def hide(self):
        raise NotImplementedError

    @abc.abstractmethod
    def create_block(self, template: Block) -> Block:
        """Copy ``template`` onto the main workspace as a new top block."""
        raise NotImplementedError


class Workspace(abc.ABC):
    """One editor session."""

    @property
    @abc.abstractmethod
    def id(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def read_only(self) -> bool:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def scroll_x(self) -> float:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def scroll_y(self) -> float:
        raise NotImplementedError

    @abc.abstractmethod
    def scroll(self, x: float, y: float):
        raise NotImplementedError

    @abc.abstractmethod
    def get_cursor(self) -> Cursor:
        raise NotImplementedError

    @abc.abstractmethod
    def add_marker(self, name: str) -> Cursor:
        raise NotImplementedError

    @abc.abstractmethod
    def get_marker(self, name: str) -> Optional[Cursor]:
        raise NotImplementedError

    @abc.abstractmethod
    def remove_marker(self, name: str):
        raise NotImplementedError

    @abc.abstractmethod
    def get_toolbox(self) -> Optional[Toolbox]:
        raise NotImplementedError

    @abc.abstractmethod
    def get_flyout(self) -> Optional[Flyout]:
        raise NotImplementedError

    @abc.abstractmethod
    def get_top_blocks(self) -> List[Block]:
        raise NotImplementedError

    @abc.abstractmethod
    def gesture_in_progress(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def hide_chaff(self):
        raise NotImplementedError

    @abc.abstractmethod
    def copy(self, block: Block):
        raise NotImplementedError

    @abc.abstractmethod
    def paste(self) -> Optional[Block]:
        """Paste the clipboard as a new top block, or return None."""
        raise NotImplementedError

    @abc.abstractmethod
    def delete_block(self, block: Block):
        """Delete ``block``, reconnecting the blocks below it to its parent."""
        raise NotImplementedError
