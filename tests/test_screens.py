import pytest

from csopesy.screens import ProcessScreen, ScreenManager, ScreenNotFoundError


def test_render_layout():
    screen = ProcessScreen("alpha")
    lines = screen.render(40).split("\n")
    assert lines[0] == "=" * 40
    assert lines[1] == "Process Screen: alpha"
    assert lines[2].startswith("Created: ")
    assert lines[3] == "=" * 40
    assert lines[4:] == ["", ""]


def test_render_uses_creation_time():
    screen = ProcessScreen("beta")
    expected = screen.created.strftime("%m/%d/%Y, %I:%M:%S %p")
    assert f"Created: {expected}\n" in screen.render(10)


def test_new_screen_defaults():
    screen = ProcessScreen("gamma")
    assert screen.current_line == 0
    assert screen.total_lines == 1000


def test_create_screen_is_idempotent():
    manager = ScreenManager()
    first = manager.create_screen("p1")
    second = manager.create_screen("p1")
    assert first is second
    assert manager.screen_exists("p1")
    assert not manager.screen_exists("p2")


def test_attach_and_detach():
    manager = ScreenManager()
    created = manager.create_screen("p1")
    assert manager.screen_active() is False
    attached = manager.attach_screen("p1")
    assert attached is created
    assert manager.screen_active() is True
    manager.detach_screen()
    assert manager.screen_active() is False


def test_attach_unknown_raises():
    manager = ScreenManager()
    with pytest.raises(ScreenNotFoundError):
        manager.attach_screen("nope")
    assert manager.screen_active() is False