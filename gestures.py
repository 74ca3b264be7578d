"""Pointer gestures that move the gamepad cursor

The host calls these after its own click handling. Shift-clicking while
gamepad navigation is on parks the cursor at the click.
"""
from core.editor import Coordinate, Node


class GestureHandler:
    def __init__(self, accessibility_status):
        self.accessibility_status = accessibility_status

    def on_workspace_click(self, workspace, ws_coordinate: Coordinate, shift: bool = False) -> bool:
        if not shift or not self.accessibility_status.is_enabled(workspace):
            return False
        workspace.get_cursor().set_cur_node(Node.for_workspace(workspace, ws_coordinate))
        return True

    def on_block_click(self, block, shift: bool = False, creator_workspace=None) -> bool:
        """``creator_workspace`` is the workspace the gesture started on;
        defaults to the block's own."""
        if block.is_in_flyout or not shift:
            return False
        if not self.accessibility_status.is_enabled(block.workspace):
            return False
        workspace = creator_workspace or block.workspace
        workspace.get_cursor().set_cur_node(Node.top(block))
        return True
