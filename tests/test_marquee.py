import io

import pytest

from csopesy.marquee import (
    DEFAULT_TEXT,
    HEADER_ART,
    START_Y,
    MarqueeConsole,
    MarqueeState,
    center_lines,
)


@pytest.fixture
def console():
    return MarqueeConsole(io.StringIO())


def test_center_lines_pads_both_sides():
    assert center_lines(["ab"], 6) == ["  ab  "]


def test_center_lines_truncates_long_lines():
    assert center_lines(["abcdef"], 3) == ["abc"]


def test_center_lines_every_line_fills_width():
    result = center_lines(HEADER_ART, 200)
    assert all(len(line) == 200 for line in result)
    assert [line.strip() for line in result] == [line.strip() for line in HEADER_ART]


def test_step_moves_diagonally():
    state = MarqueeState(text="hi")
    assert state.step(80, 30) == (1, START_Y + 1)


def test_step_bounces_off_right_edge():
    state = MarqueeState(text="abcd", x=6, y=START_Y + 2)
    x, _ = state.step(10, 30)
    assert x == 6
    assert state.dx == -1


def test_step_bounces_off_bottom():
    state = MarqueeState(text="a", y=20)
    _, y = state.step(80, 20)
    assert y == 20
    assert state.dy == -1


def test_step_stays_in_bounds():
    state = MarqueeState(text="hello")
    for _ in range(500):
        x, y = state.step(40, 20)
        assert 0 <= x <= 40 - len("hello")
        assert START_Y <= y <= 20


def test_step_resets_position_above_start():
    state = MarqueeState(text="a", y=0, dy=-1)
    state.step(80, 30)
    assert state.y == START_Y + 1
    assert state.dy == 1


def test_speed_command(console):
    assert console.process_command("speed 20") == "Changed speed to 20"
    assert console.state.sleep_duration == 20


def test_speed_command_is_case_insensitive(console):
    assert console.process_command("SPEED 7") == "Changed speed to 7"


@pytest.mark.parametrize("cmd", ["speed 0", "speed -3", "speed", "speed fast"])
def test_invalid_speed(console, cmd):
    assert console.process_command(cmd) == "Invalid speed value!"
    assert console.state.sleep_duration == 50


def test_text_command(console):
    assert console.process_command("text Hi there") == "Text changed to 'Hi there'"
    assert console.state.text == "Hi there"


def test_text_command_without_text(console):
    message = console.process_command("text")
    assert message == "Error: Please provide text after 'text' command :)"
    assert console.state.text == DEFAULT_TEXT


def test_pollrate_command(console):
    assert console.process_command("pollrate 5") == "Polling interval set to 5 ms"
    assert console.state.polling_interval == 5


@pytest.mark.parametrize("cmd", ["pollrate 0", "pollrate 1001", "pollrate x"])
def test_invalid_pollrate(console, cmd):
    assert console.process_command(cmd) == "Invalid pollrate value (1 - 1000 ms allowed)"
    assert console.state.polling_interval == 10


def test_quit_command(console):
    assert console.process_command("quit") == "Goodbye, Have a Nice Day :)"
    assert console.running is False


def test_unknown_command(console):
    assert console.process_command("jump") == "Unknown command: jump"


def test_handle_key_buffers_and_runs(console):
    for ch in "speed 9":
        assert console.handle_key(ch) is None
    assert console.state.input_buffer == "speed 9"
    assert console.handle_key("\r") == "Changed speed to 9"
    assert console.state.input_buffer == ""


def test_handle_key_backspace(console):
    for ch in "abc\b":
        console.handle_key(ch)
    assert console.state.input_buffer == "ab"


def test_handle_key_ignores_unprintable(console):
    console.handle_key("\x01")
    assert console.state.input_buffer == ""


def test_enter_on_empty_buffer_runs_nothing(console):
    assert console.handle_key("\r") is None
    assert console.state.output_msg == ""


def test_run_until_quit(console):
    chars = iter("quit\r")
    console.keys = lambda: next(chars, None)
    console.run()
    assert console.running is False
    assert "Goodbye, Have a Nice Day :)" in console.stream.getvalue()