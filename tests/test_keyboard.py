import pytest

from chipvm.keyboard import Keyboard


def test_new_keyboard_has_no_keys():
    kb = Keyboard()
    assert not kb.any_key_pressed()
    assert kb.first_pressed_key() is None
    assert all(not kb.is_key_pressed(k) for k in range(16))


@pytest.mark.parametrize("key", range(16))
def test_press_and_release(key):
    kb = Keyboard()
    kb.set_key(key, True)
    assert kb.is_key_pressed(key)
    assert kb.any_key_pressed()
    assert kb.first_pressed_key() == key
    kb.set_key(key, False)
    assert not kb.is_key_pressed(key)
    assert not kb.any_key_pressed()


def test_mask_bits():
    kb = Keyboard()
    kb.set_key(0, True)
    kb.set_key(3, True)
    assert kb.mask == 0b1001


def test_out_of_range_keys_ignored():
    kb = Keyboard()
    kb.set_key(16, True)
    kb.set_key(255, True)
    assert not kb.any_key_pressed()
    assert not kb.is_key_pressed(16)


def test_first_pressed_is_lowest():
    kb = Keyboard()
    kb.set_key(9, True)
    kb.set_key(4, True)
    kb.set_key(12, True)
    assert kb.first_pressed_key() == 4


def test_clear_all_keys():
    kb = Keyboard()
    for key in (1, 5, 15):
        kb.set_key(key, True)
    kb.clear_all_keys()
    assert kb.mask == 0
    assert kb.first_pressed_key() is None


def test_release_keeps_other_keys():
    kb = Keyboard()
    kb.set_key(2, True)
    kb.set_key(7, True)
    kb.set_key(2, False)
    assert kb.is_key_pressed(7)
    assert not kb.is_key_pressed(2)