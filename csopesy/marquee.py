"""A bouncing marquee text shown in the terminal, with a small command line."""

from __future__ import annotations

import argparse
import re
import select
import shutil
import sys
import threading
import time
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TextIO

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

HEADER_ART = (
    r".___  ___.      ___      .______        ______      __    __   _______  _______      ______   ______   .__   __.      _______.  ______    __       _______ ",
    r"|   \/   |     /   \     |   _  \      /  __  \    |  |  |  | |   ____||   ____|    /      | /  __  \  |  \ |  |     /       | /  __  \  |  |     |   ____|",
    r"|  \  /  |    /  ^  \    |  |_)  |    |  |  |  |   |  |  |  | |  |__   |  |__      |  ,----'|  |  |  | |   \|  |    |   (----`|  |  |  | |  |     |  |__   ",
    r"|  |\/|  |   /  /_\  \   |      /     |  |  |  |   |  |  |  | |   __|  |   __|     |  |     |  |  |  | |  . `  |     \   \    |  |  |  | |  |     |   __|  ",
    r"|  |  |  |  /  _____  \  |  |\  \----.|  `--'  '--.|  `--'  | |  |____ |  |____    |  `----.|  `--'  | |  |\   | .----)   |   |  `--'  | |  `----.|  |____ ",
    r"|__|  |__| /__/     \__\ | _| `._____| \_____\_____\\______/  |_______||_______|    \______| \______/  |__| \__| |_______/     \______/  |_______||_______|",
)
HEADER_LINES = len(HEADER_ART)
RESERVED_LINES = 3
START_Y = HEADER_LINES + 1
DEFAULT_TEXT = "Hello World, I am a Marquee Text Implemented with Multithreading :)"

_REFRESH_RATE = 60
_FRAME_DELAY = (1000 // _REFRESH_RATE) / 1000
_RENDER_DELAY = 0.02
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_ESC = "\x1b["
_HIDE_CURSOR = _ESC + "?25l"
_SHOW_CURSOR = _ESC + "?25h"
_CLEAR_ALL = _ESC + "2J"
_CLEAR_BELOW = _ESC + "J"

KeySource = Callable[[], Optional[str]]


def center_lines(lines: Iterable[str], width: int) -> list[str]:
    """Centre each line in ``width`` columns, cutting lines that are too long."""
    result = []
    for line in lines:
        shown = line[: max(0, width)]
        padding = max(0, int((width - len(line)) / 2))
        fill = max(0, width - padding - len(shown))
        result.append(" " * padding + shown + " " * fill)
    return result


def _read_int(text: str) -> int | None:
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


@dataclass
class MarqueeState:
    """Position, direction, text and UI buffers of the marquee."""

    text: str = DEFAULT_TEXT
    sleep_duration: int = 50
    x: int = 0
    y: int = START_Y
    dx: int = 1
    dy: int = 1
    last_update: float = 0.0
    input_buffer: str = ""
    output_msg: str = ""
    polling_interval: int = 10

    def step(self, max_x: int, max_y: int) -> tuple[int, int]:
        """Advance one cell diagonally, bouncing off the edges.

        ``max_x`` is the rightmost column and ``max_y`` the lowest row the
        text may use. Returns the new position.
        """
        if self.y < START_Y:
            self.y = START_Y
            self.dy = -self.dy
        self.x += self.dx
        self.y += self.dy
        x_bound = max(0, max_x - len(self.text))
        y_bound = max(START_Y + 1, max_y)
        if self.x < 0 or self.x > x_bound:
            self.dx = -self.dx
        if self.y < START_Y or self.y > y_bound:
            self.dy = -self.dy
        self.x = min(max(self.x, 0), x_bound)
        self.y = min(max(self.y, START_Y), y_bound)
        return self.x, self.y


class _TerminalKeys:
    """Non-blocking single-key reader for the controlling terminal."""

    def __init__(self) -> None:
        self._saved = None
        self._fd: int | None = None

    def __enter__(self) -> "_TerminalKeys":
        if msvcrt is None and termios is not None and sys.stdin.isatty():
            self._fd = sys.stdin.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved is not None and self._fd is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def __call__(self) -> str | None:
        if msvcrt is not None:
            return msvcrt.getwch() if msvcrt.kbhit() else None
        try:
            ready, _, _ = select.select([sys.stdin], [], [], 0)
        except (OSError, ValueError):
            return None
        if not ready:
            return None
        return sys.stdin.read(1) or None


class MarqueeConsole:
    """Interactive marquee: a bouncing text, an input line and a message line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.state = MarqueeState()
        self.running = True
        self.keys: KeySource | None = None
        self._lock = threading.RLock()
        self._prev = (0, START_Y)
        self._last_width = 0

    # -- terminal output ----------------------------------------------------

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _move(self, x: int, y: int) -> None:
        self._write(f"{_ESC}{y + 1};{x + 1}H")

    @staticmethod
    def _window() -> tuple[int, int]:
        size = shutil.get_terminal_size()
        return size.columns, size.lines

    def _print_header(self) -> None:
        width, _ = self._window()
        self._last_width = width
        self._move(0, 0)
        self._write("".join(line + "\n" for line in center_lines(HEADER_ART, width)))

    def _clear_screen(self, with_header: bool = False) -> None:
        if with_header:
            self._move(0, 0)
            self._write(_CLEAR_ALL)
            self._print_header()
        else:
            self._move(0, HEADER_LINES)
            self._write(_CLEAR_BELOW)

    def _clear_position(self, x: int, y: int, length: int) -> None:
        if y >= HEADER_LINES:
            self._move(x, y)
            self._write(" " * length)

    def _handle_resize(self) -> None:
        width, _ = self._window()
        if width != self._last_width:
            with self._lock:
                self._clear_screen(with_header=True)

    # -- commands -----------------------------------------------------------

    def process_command(self, cmd: str) -> str:
        """Run one command line and return the message it produces."""
        with self._lock:
            parts = cmd.split(maxsplit=1)
            action = parts[0].lower() if parts else ""
            rest = cmd.lstrip()[len(parts[0]):] if parts else ""
            state = self.state

            if action == "speed":
                value = _read_int(rest)
                if value is not None and value > 0:
                    state.sleep_duration = value
                    state.output_msg = f"Changed speed to {value}"
                else:
                    state.output_msg = "Invalid speed value!"
            elif action == "text":
                pos = cmd.find(" ")
                if pos != -1 and pos + 1 < len(cmd):
                    new_text = cmd[pos + 1:]
                    self._clear_position(*self._prev, len(state.text))
                    state.text = new_text
                    state.output_msg = f"Text changed to '{new_text}'"
                else:
                    state.output_msg = "Error: Please provide text after 'text' command :)"
            elif action == "pollrate":
                value = _read_int(rest)
                if value is not None and 1 <= value <= 1000:
                    state.polling_interval = value
                    state.output_msg = f"Polling interval set to {value} ms"
                else:
                    state.output_msg = "Invalid pollrate value (1 - 1000 ms allowed)"
            elif action == "clear":
                self._move(0, 0)
                self._write(_CLEAR_ALL)
                self._print_header()
                state.output_msg = "Terminal cleared."
            elif action == "quit":
                self.running = False
                state.output_msg = "Goodbye, Have a Nice Day :)"
            else:
                state.output_msg = f"Unknown command: {cmd}"
            return state.output_msg

    def handle_key(self, ch: str) -> str | None:
        """Feed one keystroke; on Enter run the buffered command.

        Returns the command's message when a command ran, otherwise None.
        """
        command = ""
        with self._lock:
            buffer = self.state.input_buffer
            if ch in ("\r", "\n"):
                command = buffer
                self.state.input_buffer = ""
            elif ch in ("\b", "\x7f"):
                if buffer:
                    self.state.input_buffer = buffer[:-1]
            elif len(ch) == 1 and " " <= ch <= "~":
                self.state.input_buffer = buffer + ch
        if command:
            return self.process_command(command)
        return None

    # -- loops --------------------------------------------------------------

    def _update_loop(self) -> None:
        while self.running:
            self._handle_resize()
            now = time.monotonic() * 1000
            with self._lock:
                state = self.state
                if now - state.last_update >= state.sleep_duration:
                    columns, lines = self._window()
                    self._clear_position(*self._prev, len(state.text))
                    self._prev = state.step(columns - 1, lines - 1 - RESERVED_LINES)
                    state.last_update = now
                    self._move(*self._prev)
                    self._write(state.text)
            time.sleep(_FRAME_DELAY)

    def _input_loop(self, keys: KeySource) -> None:
        while self.running:
            ch = keys()
            if ch:
                self.handle_key(ch)
            time.sleep(_FRAME_DELAY + self.state.polling_interval / 1000)

    def _render_ui(self) -> None:
        columns, lines = self._window()
        max_x = columns - 1
        max_y = lines - 1 - RESERVED_LINES
        self._move(0, max_y + 1)
        self._write("Input Command: " + self.state.input_buffer.ljust(max_x - 15))
        self._write_message(max_x, max_y)

    def _write_message(self, max_x: int, max_y: int) -> None:
        self._move(0, max_y + 2)
        self._write(self.state.output_msg[: max(0, max_x)].ljust(max_x))

    def _render_loop(self) -> None:
        while self.running:
            self._handle_resize()
            if self._lock.acquire(blocking=False):
                try:
                    self._render_ui()
                finally:
                    self._lock.release()
            time.sleep(_RENDER_DELAY)

    def run(self) -> None:
        """Run the marquee until the ``quit`` command is entered."""
        self.running = True
        with ExitStack() as stack:
            keys = self.keys if self.keys is not None else stack.enter_context(_TerminalKeys())
            self._write(_HIDE_CURSOR)
            self._clear_screen(with_header=True)
            threads = [
                threading.Thread(target=self._update_loop, daemon=True),
                threading.Thread(target=self._input_loop, args=(keys,), daemon=True),
            ]
            for thread in threads:
                thread.start()
            try:
                self._render_loop()
            finally:
                self.running = False
                for thread in threads:
                    thread.join()
                with self._lock:
                    columns, lines = self._window()
                    self._write_message(columns - 1, lines - 1 - RESERVED_LINES)
                    self._move(0, lines - 1)
                    self._write("\n")
                self._write(_SHOW_CURSOR)


def main(argv: list[str] | None = None) -> int:
    """Start the interactive marquee console."""
    parser = argparse.ArgumentParser(
        prog="marquee",
        description="Bouncing marquee text. Commands: speed N, text T, pollrate N, clear, quit.",
    )
    parser.parse_args(argv)
    try:
        MarqueeConsole(sys.stdout).run()
    except Exception as exc:  # report any failure the way the console does
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0