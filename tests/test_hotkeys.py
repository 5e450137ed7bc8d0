"""
Tests for global hotkey registration.

pynput is replaced by a mock so these run headless.

Run with:  pytest tests/test_hotkeys.py -v
"""

from unittest.mock import MagicMock

import pytest

from snapsolve.desktop import hotkeys as hotkeys_module
from snapsolve.desktop.hotkeys import HotkeyManager, build_hotkeys, modifier_label


@pytest.fixture
def fake_keyboard(monkeypatch):
    keyboard = MagicMock()
    monkeypatch.setattr(hotkeys_module, "keyboard", keyboard)
    monkeypatch.setattr(hotkeys_module, "PYNPUT_AVAILABLE", True)
    return keyboard


def noop():
    pass


ALL_ACTIONS = {"capture_and_solve": noop, "add_to_session": noop, "reset": noop, "quit": noop}


class TestBindings:

    def test_ctrl_on_linux_and_windows(self):
        for platform in ("linux", "win32"):
            assert build_hotkeys(platform) == {
                "capture_and_solve": "<ctrl>+<shift>+s",
                "add_to_session": "<ctrl>+<shift>+a",
                "reset": "<ctrl>+<shift>+r",
                "quit": "<ctrl>+<shift>+q",
            }
            assert modifier_label(platform) == "Ctrl"

    def test_cmd_on_macos(self):
        assert build_hotkeys("darwin")["capture_and_solve"] == "<cmd>+<shift>+s"
        assert modifier_label("darwin") == "Cmd"

    def test_unknown_action_rejected(self):
        with pytest.raises(ValueError):
            HotkeyManager({"screenshot": noop})


class TestHotkeyManager:

    def test_register_starts_listener(self, fake_keyboard):
        manager = HotkeyManager(ALL_ACTIONS, platform="linux")

        assert manager.register() is True

        bindings = fake_keyboard.GlobalHotKeys.call_args.args[0]
        assert set(bindings) == {
            "<ctrl>+<shift>+s", "<ctrl>+<shift>+a", "<ctrl>+<shift>+r", "<ctrl>+<shift>+q",
        }
        fake_keyboard.GlobalHotKeys.return_value.start.assert_called_once()
        assert manager.registered

    def test_register_twice_keeps_one_listener(self, fake_keyboard):
        manager = HotkeyManager(ALL_ACTIONS)
        manager.register()
        manager.register()
        assert fake_keyboard.GlobalHotKeys.call_count == 1

    def test_unregister_all_stops_listener(self, fake_keyboard):
        manager = HotkeyManager(ALL_ACTIONS)
        manager.register()
        manager.unregister_all()
        manager.unregister_all()

        fake_keyboard.GlobalHotKeys.return_value.stop.assert_called_once()
        assert not manager.registered

    def test_binding_invokes_handler(self, fake_keyboard):
        calls = []
        manager = HotkeyManager({"reset": lambda: calls.append("reset")}, platform="linux")

        manager.bindings["<ctrl>+<shift>+r"]()

        assert calls == ["reset"]

    def test_handler_errors_do_not_kill_listener(self, caplog):
        def broken():
            raise RuntimeError("loop closed")
        manager = HotkeyManager({"quit": broken}, platform="linux")

        manager.bindings["<ctrl>+<shift>+q"]()

        assert "Hotkey error (quit)" in caplog.text

    def test_without_pynput(self, monkeypatch):
        monkeypatch.setattr(hotkeys_module, "PYNPUT_AVAILABLE", False)
        manager = HotkeyManager(ALL_ACTIONS)
        assert manager.register() is False
        assert not manager.registered
