import dataclasses

import pytest

from pixelwin.constants import (
    BPP,
    DEFAULT_SETTINGS,
    Action,
    CursorType,
    Key,
    KeyData,
    ModifierKey,
    MouseKey,
    MouseMode,
    Setting,
)


def test_action_values():
    assert [a.value for a in Action] == [0, 1, 2]
    assert Action(1) is Action.PRESS


def test_modifier_flags_combine():
    combo = ModifierKey(0x0006)
    assert combo == ModifierKey.CONTROL | ModifierKey.ALT
    assert ModifierKey.CONTROL in combo
    assert ModifierKey.SHIFT not in combo
    assert int(combo) == 0x0006


def test_mouse_values():
    assert MouseKey(2) is MouseKey.MIDDLE
    assert MouseMode(0x00034001) is MouseMode.NORMAL
    assert MouseMode(0x00034003) is MouseMode.DISABLED


def test_cursor_types_are_consecutive():
    kinds = [CursorType(value) for value in range(0x00036001, 0x00036007)]
    assert kinds == list(CursorType)
    assert kinds[0] is CursorType.ARROW


@pytest.mark.parametrize(
    "key, code",
    [(Key.SPACE, 32), (Key.NUM_0, 48), (Key.A, 65), (Key.ESCAPE, 256), (Key.F25, 314), (Key.MENU, 348)],
)
def test_key_codes(key, code):
    assert key == code


def test_letter_keys_match_ascii():
    for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
        assert Key(ord(letter)) is Key[letter]


def test_settings_and_defaults():
    assert [Setting(value) for value in range(5)] == list(Setting)
    assert DEFAULT_SETTINGS[Setting(3)] is True
    assert DEFAULT_SETTINGS[Setting(1)] is False
    assert set(DEFAULT_SETTINGS) == set(Setting)
    assert BPP == 4


def test_key_data_is_frozen():
    data = KeyData(Key.W, Action.PRESS, 13, ModifierKey.SHIFT)
    assert data.key == Key.W
    assert data.modifier == ModifierKey.SHIFT
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.key = Key.S