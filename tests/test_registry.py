import logging
from unittest import mock

import pytest

from core.errors import CollisionError, DuplicateNameError, ParseError
from core.gamepad import GamepadCombination
from core.state import Shortcut
from registry import GamepadShortcutRegistry


def shortcut(name, result=True, precondition=None, calls=None):
    def callback(session, combination, sc):
        if calls is not None:
            calls.append(sc.name)
        return result
    return Shortcut(name=name, callback=callback, precondition=precondition)


def test_register_duplicate_raises():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("a"))
    with pytest.raises(DuplicateNameError):
        reg.register(shortcut("a"))


def test_register_override_replaces():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("a", result=False))
    reg.register(shortcut("a", result=True), allow_override=True)
    reg.add_combination_mapping(GamepadCombination.CROSS, "a")
    assert reg.on_activate("ws", GamepadCombination.CROSS) is True


def test_collision_requires_permission():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "disconnect")
    with pytest.raises(CollisionError):
        reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit")
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit", allow_collision=True)
    assert reg.get_names_for(GamepadCombination.CIRCLE) == ["disconnect", "exit"]


def test_adding_same_name_twice_is_a_noop():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit")
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit")
    assert reg.get_names_for(GamepadCombination.CIRCLE) == ["exit"]


def test_mapping_accepts_serialized_keys_in_any_order():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping("r1+l1", "toggle")
    assert reg.get_names_for(GamepadCombination.deserialize("l1+r1")) == ["toggle"]
    with pytest.raises(ParseError):
        reg.add_combination_mapping("r1+bogus", "toggle")


def test_on_activate_exact_match_only():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("toggle"))
    reg.add_combination_mapping(GamepadCombination.deserialize("l1+r1"), "toggle")
    assert reg.on_activate("ws", GamepadCombination.L1) is False
    assert reg.on_activate("ws", GamepadCombination.deserialize("l1+r1+cross")) is False
    assert reg.on_activate("ws", GamepadCombination.deserialize("l1+r1")) is True


def test_on_activate_empty_combination():
    reg = GamepadShortcutRegistry()
    callback = mock.Mock(return_value=True)
    reg.register(Shortcut("a", callback))
    assert reg.on_activate("ws", GamepadCombination()) is False
    callback.assert_not_called()


def test_first_truthy_callback_short_circuits():
    reg = GamepadShortcutRegistry()
    calls = []
    reg.register(shortcut("first", result=False, calls=calls))
    reg.register(shortcut("second", result=True, calls=calls))
    reg.register(shortcut("third", result=True, calls=calls))
    for name in ("first", "second", "third"):
        reg.add_combination_mapping(GamepadCombination.CROSS, name, allow_collision=True)
    assert reg.on_activate("ws", GamepadCombination.CROSS) is True
    assert calls == ["first", "second"]


def test_failing_precondition_skips_silently():
    reg = GamepadShortcutRegistry()
    calls = []
    reg.register(shortcut("guarded", precondition=lambda ws: False, calls=calls))
    reg.register(shortcut("open", calls=calls))
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "guarded")
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "open", allow_collision=True)
    assert reg.on_activate("ws", GamepadCombination.CIRCLE) is True
    assert calls == ["open"]


def test_precondition_receives_session():
    reg = GamepadShortcutRegistry()
    precondition = mock.Mock(return_value=False)
    reg.register(Shortcut("a", mock.Mock(return_value=True), precondition))
    reg.add_combination_mapping(GamepadCombination.CROSS, "a")
    assert reg.on_activate("session-1", GamepadCombination.CROSS) is False
    precondition.assert_called_once_with("session-1")


def test_no_callback_handles_returns_false():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("a", result=False))
    reg.add_combination_mapping(GamepadCombination.CROSS, "a")
    assert reg.on_activate("ws", GamepadCombination.CROSS) is False


def test_stale_name_is_skipped_with_warning(caplog):
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("live"))
    reg.set_combination_map({"cross": ["ghost", "live"]})
    with caplog.at_level(logging.WARNING, logger="padnav.registry"):
        assert reg.on_activate("ws", GamepadCombination.CROSS) is True
    assert "ghost" in caplog.text


def test_unregister_removes_every_mapping():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("exit"))
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit")
    reg.add_combination_mapping(GamepadCombination.SELECT, "exit")
    assert reg.unregister("exit") is True
    assert "exit" not in reg.get_registry()
    assert reg.get_combination_map() == {}


def test_unregister_unknown_warns(caplog):
    reg = GamepadShortcutRegistry()
    with caplog.at_level(logging.WARNING, logger="padnav.registry"):
        assert reg.unregister("missing") is False
    assert "missing" in caplog.text


def test_remove_mapping_prunes_and_warns(caplog):
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CROSS, "mark")
    assert reg.remove_combination_mapping(GamepadCombination.CROSS, "mark") is True
    assert reg.get_combination_map() == {}
    with caplog.at_level(logging.WARNING, logger="padnav.registry"):
        assert reg.remove_combination_mapping(GamepadCombination.CROSS, "mark") is False
    assert caplog.records
    caplog.clear()
    assert reg.remove_combination_mapping(GamepadCombination.CROSS, "mark", quiet=True) is False
    assert not caplog.records


def test_remove_mapping_keeps_other_names():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "disconnect")
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit", allow_collision=True)
    reg.remove_combination_mapping(GamepadCombination.CIRCLE, "disconnect")
    assert reg.get_names_for(GamepadCombination.CIRCLE) == ["exit"]


def test_get_combinations_for():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CIRCLE, "exit")
    reg.add_combination_mapping(GamepadCombination.SELECT, "exit")
    assert sorted(reg.get_combinations_for("exit")) == ["circle", "select"]


def test_returned_collections_are_copies():
    reg = GamepadShortcutRegistry()
    reg.register(shortcut("a"))
    reg.add_combination_mapping(GamepadCombination.CROSS, "a")
    reg.get_combination_map()["cross"].append("b")
    reg.get_registry().clear()
    reg.get_names_for(GamepadCombination.CROSS).append("c")
    assert reg.get_names_for(GamepadCombination.CROSS) == ["a"]
    assert "a" in reg.get_registry()


def test_set_combination_map_replaces_everything():
    reg = GamepadShortcutRegistry()
    reg.add_combination_mapping(GamepadCombination.CROSS, "mark")
    reg.set_combination_map({"r1+l1": ["toggle"], "select": ["help"]})
    assert reg.get_combination_map() == {"l1+r1": ["toggle"], "select": ["help"]}
    with pytest.raises(ParseError):
        reg.set_combination_map({"nope": ["x"]})


def test_mapping_changes_during_dispatch_apply_next_time():
    reg = GamepadShortcutRegistry()
    calls = []

    def rebinding(session, combination, sc):
        calls.append("first")
        reg.add_combination_mapping(GamepadCombination.CROSS, "late", allow_collision=True)
        return False

    reg.register(Shortcut("first", rebinding))
    reg.register(shortcut("late", calls=calls))
    reg.add_combination_mapping(GamepadCombination.CROSS, "first")
    assert reg.on_activate("ws", GamepadCombination.CROSS) is False
    assert calls == ["first"]
    assert reg.on_activate("ws", GamepadCombination.CROSS) is True


def test_unregister_during_dispatch_is_seen_immediately(caplog):
    reg = GamepadShortcutRegistry()
    calls = []

    def remover(session, combination, sc):
        calls.append("remover")
        reg.unregister("victim")
        return False

    reg.register(Shortcut("remover", remover))
    reg.register(shortcut("victim", calls=calls))
    reg.add_combination_mapping(GamepadCombination.CROSS, "remover")
    reg.add_combination_mapping(GamepadCombination.CROSS, "victim", allow_collision=True)
    with caplog.at_level(logging.WARNING, logger="padnav.registry"):
        assert reg.on_activate("ws", GamepadCombination.CROSS) is False
    assert calls == ["remover"]


def test_set_combination_map_drops_empty_entries():
    reg = GamepadShortcutRegistry()
    reg.set_combination_map({"cross": [], "circle": ["exit"]})
    assert reg.get_combination_map() == {"circle": ["exit"]}
    assert reg.get_names_for(GamepadCombination.CROSS) == []
