"""Per-session gamepad accessibility flag"""


class AccessibilityStatus:
    """Tracks which workspaces have gamepad navigation switched on."""

    def __init__(self):
        self._enabled_ids = set()

    def is_enabled(self, workspace) -> bool:
        return workspace.id in self._enabled_ids

    def enable(self, workspace):
        self._enabled_ids.add(workspace.id)

    def disable(self, workspace):
        self._enabled_ids.discard(workspace.id)
