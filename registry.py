"""Shortcut registry: named shortcuts and the combinations bound to them"""
import copy
import logging
from typing import Dict, List

from core.errors import CollisionError, DuplicateNameError
from core.gamepad import GamepadCombination
from core.state import Shortcut

LOG = logging.getLogger("padnav.registry")


def _key(combination) -> str:
    """Accept a combination or its serialization and return the map key."""
    if isinstance(combination, GamepadCombination):
        return combination.serialize()
    # round trip so that unknown tokens raise and token order is canonical
    return GamepadCombination.deserialize(combination).serialize()


class GamepadShortcutRegistry:
    def __init__(self):
        self._registry: Dict[str, Shortcut] = {}
        self._combo_to_names: Dict[str, List[str]] = {}

    def register(self, shortcut: Shortcut, allow_override: bool = False):
        if shortcut.name in self._registry and not allow_override:
            raise DuplicateNameError(f"Shortcut with name {shortcut.name!r} already exists")
        self._registry[shortcut.name] = shortcut

    def unregister(self, name: str) -> bool:
        if name not in self._registry:
            LOG.warning("Gamepad shortcut with name %s not found", name)
            return False
        self.remove_all_combination_mappings(name)
        del self._registry[name]
        return True

    def add_combination_mapping(self, combination, name: str, allow_collision: bool = False):
        key = _key(combination)
        names = self._combo_to_names.get(key)
        if names is None:
            self._combo_to_names[key] = [name]
            return
        if name in names:
            return
        if not allow_collision:
            raise CollisionError(
                f"Shortcut {name!r} collides with shortcuts {names!r} on combination {key!r}")
        names.append(name)

    def remove_combination_mapping(self, combination, name: str, quiet: bool = False) -> bool:
        key = _key(combination)
        names = self._combo_to_names.get(key)
        if not names or name not in names:
            if not quiet:
                LOG.warning("No gamepad shortcut %s for combination %s", name, key)
            return False
        names.remove(name)
        if not names:
            del self._combo_to_names[key]
        return True

    def remove_all_combination_mappings(self, name: str):
        for key in list(self._combo_to_names):
            self.remove_combination_mapping(key, name, quiet=True)

    def set_combination_map(self, mapping: Dict[str, List[str]]):
        """Replace every binding at once. Keys may be in any token order."""
        new_map: Dict[str, List[str]] = {}
        for combination, names in mapping.items():
            bucket = new_map.setdefault(_key(combination), [])
            for name in names:
                if name not in bucket:
                    bucket.append(name)
        self._combo_to_names = {key: names for key, names in new_map.items() if names}

    def get_combination_map(self) -> Dict[str, List[str]]:
        return copy.deepcopy(self._combo_to_names)

    def get_registry(self) -> Dict[str, Shortcut]:
        return dict(self._registry)

    def get_names_for(self, combination) -> List[str]:
        return list(self._combo_to_names.get(_key(combination), []))

    def get_combinations_for(self, name: str) -> List[str]:
        return [key for key, names in self._combo_to_names.items() if name in names]

    def on_activate(self, session, combination: GamepadCombination) -> bool:
        """Run the first shortcut bound to ``combination`` that accepts it.

        Returns True when a callback reported the activation handled.
        """
        if combination.is_empty():
            return False
        names = self._combo_to_names.get(combination.serialize())
        if not names:
            return False
        for name in list(names):
            shortcut = self._registry.get(name)
            if shortcut is None:
                LOG.warning("Gamepad shortcut with name %s not found", name)
                continue
            if shortcut.precondition is not None and not shortcut.precondition(session):
                continue
            if shortcut.callback is not None and shortcut.callback(session, combination, shortcut):
                LOG.debug("%s handled by %s", combination.serialize(), name)
                return True
        return False
