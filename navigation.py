"""Navigation state machine

One `NavState` per tracked workspace says which part of the editor owns the
cursor. The methods here are the behaviours behind the shortcuts: moving
focus between workspace, toolbox and flyout, marking, connecting and
deleting blocks. Graph rules (what may connect to what) belong to the
editor; a refusal is logged and reported as False.
"""
import logging
from typing import Dict, Optional

from accessibility import AccessibilityStatus
from config import NavigationConfig
from core.editor import ConnectionKind, Coordinate, Node, NodeType
from core.state import NavState

LOG = logging.getLogger("padnav.navigation")


class Navigation:
    def __init__(self, accessibility_status: Optional[AccessibilityStatus] = None,
                 config: Optional[NavigationConfig] = None):
        self.accessibility_status = accessibility_status or AccessibilityStatus()
        self.config = config or NavigationConfig()
        self.marker_name = self.config.marker_name
        self._workspaces: Dict[str, object] = {}
        self._states: Dict[str, NavState] = {}

    # -- sessions ---------------------------------------------------------

    def add_workspace(self, workspace):
        if workspace.id in self._workspaces:
            return
        workspace.add_marker(self.marker_name)
        self._workspaces[workspace.id] = workspace
        self._states[workspace.id] = NavState.WORKSPACE

    def remove_workspace(self, workspace):
        if workspace.id not in self._workspaces:
            return
        workspace.remove_marker(self.marker_name)
        self.accessibility_status.disable(workspace)
        del self._workspaces[workspace.id]
        self._states.pop(workspace.id, None)

    def dispose(self):
        for workspace in list(self._workspaces.values()):
            self.remove_workspace(workspace)

    def get_state(self, workspace) -> Optional[NavState]:
        return self._states.get(workspace.id)

    def set_state(self, workspace, state: NavState):
        if workspace.id not in self._workspaces:
            LOG.warning("Workspace %s is not tracked; ignoring state %s", workspace.id, NavState(state).value)
            return
        self._states[workspace.id] = NavState(state)
        LOG.debug("%s -> %s", workspace.id, self._states[workspace.id].value)

    def enable_gamepad_accessibility(self, workspace):
        if workspace.id not in self._workspaces:
            LOG.warning("Cannot enable gamepad navigation on untracked workspace %s", workspace.id)
            return
        if self.accessibility_status.is_enabled(workspace):
            return
        self.accessibility_status.enable(workspace)
        LOG.info("gamepad navigation on for %s", workspace.id)
        self.focus_workspace(workspace)

    def disable_gamepad_accessibility(self, workspace):
        if not self.accessibility_status.is_enabled(workspace):
            return
        self.accessibility_status.disable(workspace)
        LOG.info("gamepad navigation off for %s", workspace.id)
        self.reset_flyout(workspace, hide=bool(workspace.get_toolbox()))

    # -- markers and cursors ----------------------------------------------

    def get_marker(self, workspace):
        return workspace.get_marker(self.marker_name)

    def get_flyout_cursor(self, workspace):
        flyout = workspace.get_flyout()
        return flyout.get_cursor() if flyout is not None else None

    def mark_at_cursor(self, workspace):
        self.get_marker(workspace).set_cur_node(workspace.get_cursor().get_cur_node())

    def remove_mark(self, workspace):
        self.get_marker(workspace).set_cur_node(None)

    def _marker_node(self, workspace) -> Optional[Node]:
        marker = self.get_marker(workspace)
        return marker.get_cur_node() if marker is not None else None

    # -- focus --------------------------------------------------------------

    def reset_flyout(self, workspace, hide: bool):
        cursor = self.get_flyout_cursor(workspace)
        if cursor is not None:
            cursor.set_cur_node(None)
        flyout = workspace.get_flyout()
        if hide and flyout is not None:
            flyout.hide()

    def focus_toolbox(self, workspace):
        toolbox = workspace.get_toolbox()
        if toolbox is None:
            return
        self.set_state(workspace, NavState.TOOLBOX)
        self.reset_flyout(workspace, hide=False)
        if self._marker_node(workspace) is None:
            self.mark_at_cursor(workspace)
        if toolbox.get_selected_item() is None:
            for position, item in enumerate(toolbox.get_items()):
                if item.is_selectable():
                    toolbox.select_item_by_position(position)
                    break

    def focus_flyout(self, workspace):
        self.set_state(workspace, NavState.FLYOUT)
        if self._marker_node(workspace) is None:
            self.mark_at_cursor(workspace)
        flyout = workspace.get_flyout()
        if flyout is None:
            return
        top_blocks = flyout.get_top_blocks()
        if top_blocks:
            flyout.get_cursor().set_cur_node(Node.for_stack(top_blocks[0]))

    def focus_workspace(self, workspace, keep_cursor: bool = True):
        workspace.hide_chaff()
        self.reset_flyout(workspace, hide=bool(workspace.get_toolbox()))
        self.set_state(workspace, NavState.WORKSPACE)
        cursor = workspace.get_cursor()
        if keep_cursor and cursor.get_cur_node() is not None:
            return
        top_blocks = workspace.get_top_blocks()
        if top_blocks:
            cursor.set_cur_node(Node.top(top_blocks[0]))
        else:
            x, y = self.config.default_ws_coordinate
            cursor.set_cur_node(Node.for_workspace(workspace, Coordinate(x, y)))

    # -- marking and inserting ----------------------------------------------

    def handle_enter_for_ws(self, workspace):
        cur_node = workspace.get_cursor().get_cur_node()
        if cur_node is None:
            return
        if cur_node.type == NodeType.FIELD:
            cur_node.location.show_editor()
        elif cur_node.is_connection() or cur_node.type == NodeType.WORKSPACE:
            self.mark_at_cursor(workspace)
        else:
            LOG.warning("Cannot mark a block.")

    def _create_new_block(self, workspace):
        flyout = workspace.get_flyout()
        if flyout is None or not flyout.is_visible():
            LOG.warning("Trying to insert from the flyout when the flyout does not exist or is closed.")
            return None
        cur_node = flyout.get_cursor().get_cur_node()
        template = cur_node.source_block() if cur_node is not None else None
        if template is None:
            return None
        if not template.is_enabled():
            LOG.warning("Can't insert a disabled block.")
            return None
        return flyout.create_block(template)

    def insert_from_flyout(self, workspace):
        new_block = self._create_new_block(workspace)
        if new_block is None:
            return
        marker_node = self._marker_node(workspace)
        if not self.try_to_connect_marker_and_cursor(workspace, marker_node, Node.for_block(new_block)):
            LOG.warning("Something went wrong while inserting a block from the flyout.")
        self.focus_workspace(workspace)
        workspace.get_cursor().set_cur_node(Node.top(new_block))
        self.remove_mark(workspace)

    def connect_marker_and_cursor(self, workspace) -> bool:
        marker_node = self._marker_node(workspace)
        cursor_node = workspace.get_cursor().get_cur_node()
        if self.try_to_connect_marker_and_cursor(workspace, marker_node, cursor_node):
            self.remove_mark(workspace)
            return True
        return False

    @staticmethod
    def _log_connection_warning(marker_node, cursor_node) -> bool:
        """Warn and return False when the two nodes can never be joined."""
        if marker_node is None:
            LOG.warning("Cannot insert with no marked node.")
            return False
        if cursor_node is None:
            LOG.warning("Cannot insert with no cursor node.")
            return False
        if cursor_node.type == NodeType.FIELD:
            LOG.warning("Cannot attach a field to anything else.")
            return False
        if cursor_node.type == NodeType.WORKSPACE:
            LOG.warning("Cannot attach a workspace to anything else.")
            return False
        if marker_node.type == NodeType.FIELD:
            LOG.warning("Cannot attach anything to a field.")
            return False
        if marker_node.type == NodeType.BLOCK:
            LOG.warning("Cannot attach anything to a block.")
            return False
        return True

    def try_to_connect_marker_and_cursor(self, workspace, marker_node, cursor_node) -> bool:
        if not self._log_connection_warning(marker_node, cursor_node):
            return False
        if marker_node.is_connection() and cursor_node.is_connection():
            return self.connect(cursor_node.location, marker_node.location)
        if marker_node.is_connection() and cursor_node.type in (NodeType.BLOCK, NodeType.STACK):
            return self.insert_block(cursor_node.location, marker_node.location)
        if marker_node.type == NodeType.WORKSPACE:
            return self._move_block_to_workspace(cursor_node.source_block(), marker_node)
        LOG.warning("Unexpected state in try_to_connect_marker_and_cursor.")
        return False

    @staticmethod
    def _move_block_to_workspace(block, ws_node) -> bool:
        if block is None:
            return False
        if block.is_shadow():
            LOG.warning("Cannot move a shadow block to the workspace.")
            return False
        if block.parent is not None:
            block.unplug()
        block.move_to(ws_node.ws_coordinate)
        return True

    # -- connections --------------------------------------------------------

    @staticmethod
    def _inferior(connection):
        if not connection.is_superior():
            return connection
        block = connection.source_block
        return block.previous_connection or block.output_connection

    @staticmethod
    def _superior(connection):
        if connection.is_superior():
            return connection
        return connection.target_connection

    @staticmethod
    def _move_and_connect(moving, dest) -> bool:
        if moving is None or dest is None:
            return False
        if dest.source_block.is_shadow() or not moving.can_connect(dest):
            return False
        dest.connect(moving)
        return True

    def connect(self, moving, dest) -> bool:
        """Join ``moving`` to ``dest``, trying the connection on each side
        of ``moving`` that can pair with ``dest``."""
        if moving is None or dest is None:
            return False
        moving_inferior = self._inferior(moving)
        dest_superior = self._superior(dest)
        moving_superior = self._superior(moving)
        dest_inferior = self._inferior(dest)
        if self._move_and_connect(moving_inferior, dest_superior):
            return True
        if self._move_and_connect(moving_superior, dest_inferior):
            return True
        if self._move_and_connect(moving, dest):
            return True
        LOG.warning("Connection not compatible: %s -> %s", moving.kind.value, dest.kind.value)
        return False

    def insert_block(self, block, dest) -> bool:
        if dest.kind == ConnectionKind.PREVIOUS:
            if self.connect(block.next_connection, dest):
                return True
        elif dest.kind == ConnectionKind.NEXT:
            if self.connect(block.previous_connection, dest):
                return True
        elif dest.kind == ConnectionKind.INPUT:
            if self.connect(block.output_connection, dest):
                return True
        elif dest.kind == ConnectionKind.OUTPUT:
            for connection in block.input_connections():
                if connection.kind == ConnectionKind.INPUT and self.connect(connection, dest):
                    return True
            if block.output_connection is not None and self.connect(block.output_connection, dest):
                return True
        LOG.warning("This block can not be inserted at the marked location.")
        return False

    def disconnect_blocks(self, workspace) -> bool:
        cursor = workspace.get_cursor()
        cur_node = cursor.get_cur_node()
        if cur_node is None or not cur_node.is_connection():
            LOG.info("Cannot disconnect blocks when the cursor is not on a connection")
            return False
        connection = cur_node.location
        if not connection.is_connected():
            LOG.info("Cannot disconnect unconnected connection")
            return False
        if connection.is_superior():
            superior, inferior = connection, connection.target_connection
        else:
            superior, inferior = connection.target_connection, connection
        if inferior.source_block.is_shadow():
            LOG.info("Cannot disconnect a shadow block")
            return False
        superior.disconnect()
        cursor.set_cur_node(Node.for_connection(superior))
        return True

    # -- deletion -----------------------------------------------------------

    def move_cursor_on_block_delete(self, workspace, deleted_block):
        """Move the cursor off ``deleted_block`` before it is removed.

        Order of preference: the block that follows it in its stack, the
        parent connection it hangs from, a workspace node where it sat.
        """
        cursor = workspace.get_cursor()
        if cursor is None:
            return
        cur_node = cursor.get_cur_node()
        block = cur_node.source_block() if cur_node is not None else None
        if block is None:
            return
        if block is deleted_block:
            next_connection = block.next_connection
            next_block = next_connection.target_block() if next_connection is not None else None
            if next_block is not None:
                cursor.set_cur_node(Node.for_connection(next_block.previous_connection))
                return
            inferior = block.previous_connection or block.output_connection
            if block.parent is not None and inferior is not None and inferior.is_connected():
                cursor.set_cur_node(Node.for_connection(inferior.target_connection))
                return
            cursor.set_cur_node(Node.for_workspace(workspace, block.position))
        elif block in deleted_block.descendants():
            cursor.set_cur_node(Node.for_workspace(workspace, block.position))

    def handle_blocks_deleted(self, workspace, deleted_ids):
        """A drag to the trash removed ``deleted_ids``; the editor has
        already deleted them."""
        cursor = workspace.get_cursor()
        cur_node = cursor.get_cur_node()
        block = cur_node.source_block() if cur_node is not None else None
        if block is not None and block.id in set(deleted_ids):
            cursor.set_cur_node(Node.for_workspace(workspace, block.position))

    def handle_toolbox_selection(self, workspace, new_item):
        if not self.accessibility_status.is_enabled(workspace):
            return
        if new_item is not None:
            self.focus_toolbox(workspace)
        elif self.get_state(workspace) in (NavState.TOOLBOX, NavState.FLYOUT):
            self.focus_workspace(workspace)

    # -- workspace movement -------------------------------------------------

    def move_ws_cursor(self, workspace, x_direction: int, y_direction: int) -> bool:
        cursor = workspace.get_cursor()
        cur_node = cursor.get_cur_node()
        if cur_node is None or cur_node.type != NodeType.WORKSPACE:
            return False
        coord = cur_node.ws_coordinate
        distance = self.config.ws_move_distance
        new_coord = Coordinate(coord.x + x_direction * distance, coord.y + y_direction * distance)
        cursor.set_cur_node(Node.for_workspace(workspace, new_coord))
        return True

    def scroll_ws(self, workspace, x_direction: int, y_direction: int) -> bool:
        distance = self.config.ws_scroll_distance
        workspace.scroll(workspace.scroll_x + x_direction * distance,
                         workspace.scroll_y + y_direction * distance)
        return True

    # -- clipboard ----------------------------------------------------------

    def _cursor_block(self, workspace):
        cur_node = workspace.get_cursor().get_cur_node()
        return cur_node.source_block() if cur_node is not None else None

    def copy(self, workspace) -> bool:
        block = self._cursor_block(workspace)
        if block is None:
            return False
        workspace.hide_chaff()
        workspace.copy(block)
        return True

    def paste(self, workspace) -> bool:
        return workspace.paste() is not None

    def cut(self, workspace) -> bool:
        block = self._cursor_block(workspace)
        if block is None:
            return False
        workspace.copy(block)
        self.move_cursor_on_block_delete(workspace, block)
        workspace.delete_block(block)
        return True

    def delete(self, workspace) -> bool:
        block = self._cursor_block(workspace)
        if block is None or workspace.gesture_in_progress():
            return False
        self.move_cursor_on_block_delete(workspace, block)
        workspace.delete_block(block)
        return True
