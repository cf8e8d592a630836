"""Interactive command shell for the process scheduling emulator."""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import TextIO

from .config import Config, ConfigError, load_config
from .marquee import MarqueeConsole
from .scheduler import Policy, Scheduler
from .screens import ScreenManager

HEADER_ART = (
    r"________/\\\\\\\\\_____/\\\\\\\\\\\_________/\\\\\_______/\\\\\\\\\\\\\____/\\\\\\\\\\\\\\\_____/\\\\\\\\\\\____/\\\________/\\\_",
    r" _____/\\\////////____/\\\/////////\\\_____/\\\///\\\____\/\\\/////////\\\_\/\\\///////////____/\\\/////////\\\_\///\\\____/\\\/__",
    r"  ___/\\\/____________\//\\\______\///____/\\\/__\///\\\__\/\\\_______\/\\\_\/\\\______________\//\\\______\///____\///\\\/\\\/____",
    r"   __/\\\_______________\////\\\__________/\\\______\//\\\_\/\\\\\\\\\\\\\/__\/\\\\\\\\\\\_______\////\\\_____________\///\\\/______",
    r"    _\/\\\__________________\////\\\______\/\\\_______\/\\\_\/\\\/////////____\/\\\///////___________\////\\\____________\/\\\_______",
    r"     _\//\\\____________________\////\\\___\//\\\______/\\\__\/\\\_____________\/\\\_____________________\////\\\_________\/\\\_______",
    r"      __\///\\\___________/\\\______\//\\\___\///\\\__/\\\____\/\\\_____________\/\\\______________/\\\______\//\\\________\/\\\_______",
    r"       ____\////\\\\\\\\\_\///\\\\\\\\\\\/______\///\\\\\/_____\/\\\_____________\/\\\\\\\\\\\\\\\_\///\\\\\\\\\\\/_________\/\\\_______",
    r"        _______\/////////____\///////////__________\/////_______\///______________\///////////////____\///////////___________\///________",
)

VALID_COMMANDS = (
    "initialize",
    "screen",
    "scheduler-start",
    "marquee",
    "scheduler-stop",
    "report-util",
    "clear",
    "exit",
)

NOT_INITIALIZED = "use the 'initialize' command before using other commands"
WELCOME = "Hello, Welcome to CSOPESY Command Line Interface!"
INSTRUCTIONS = "Type 'exit' to quit, 'clear' to clear the terminal"

_LIGHT_GREEN = "\x1b[92m"
_LIGHT_YELLOW = "\x1b[93m"
_RESET = "\x1b[0m"
_CLEAR = "\x1b[2J\x1b[H"


def tokenize(text: str) -> list[str]:
    """Split a command line into whitespace-separated tokens."""
    return text.split()


def render_header(width: int) -> str:
    """Return the banner framed by rules, centred in at least 80 columns."""
    width = max(width, 80)
    rule = "=" * width
    lines = [rule]
    for line in HEADER_ART:
        padding = max(0, (width - len(line)) // 2)
        lines.append(" " * padding + line)
    lines.append(rule)
    return "\n".join(lines) + "\n"


def _console_width() -> int:
    return shutil.get_terminal_size().columns


class Shell:
    """Command interpreter holding configuration, screens and scheduler."""

    def __init__(self, config_path: str | Path = "config.txt", stream: TextIO | None = None) -> None:
        self.config_path = config_path
        self.stream = stream if stream is not None else sys.stdout
        self.config = Config()
        self.initialized = False
        self.scheduler: Scheduler | None = None
        self.screens = ScreenManager()
        self.report_path: str | Path = "csopesy-log.txt"

    # -- output -----------------------------------------------------------

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear_screen(self) -> None:
        """Clear the terminal and show the banner and welcome lines."""
        self._write(_CLEAR)
        self._write(render_header(_console_width()))
        self._write(f"{_LIGHT_GREEN}{WELCOME}{_RESET}\n")
        self._write(f"{_LIGHT_YELLOW}{INSTRUCTIONS}{_RESET}\n")

    # -- state ------------------------------------------------------------

    def _generating(self) -> bool:
        return self.scheduler is not None and self.scheduler.generating

    def _initialize(self) -> str:
        try:
            self.config = load_config(self.config_path)
        except ConfigError:
            return "initialization failed, please try again"
        if self.config.scheduler in {policy.value for policy in Policy}:
            self.scheduler = Scheduler(self.config)
        self.initialized = True
        return "initialization finished"

    def _start_scheduler(self) -> str:
        if self.scheduler is None:
            return "error: cannot define scheduler"
        if self.scheduler.running:
            self.scheduler.generating = True
        else:
            self.scheduler.start()
        label = "FCFS" if self.scheduler.policy is Policy.FCFS else "RR"
        return f"running {label} scheduler"

    # -- commands ---------------------------------------------------------

    def _screen_command(self, tokens: list[str]) -> str | None:
        flag = tokens[1] if len(tokens) > 1 else ""
        if flag == "-s" and len(tokens) > 2:
            name = tokens[2]
            if not self._generating():
                return "scheduler has not been started yet!"
            if not self.screens.screen_exists(name):
                self._write(f"Create Screen: {name}\n")
            self.screens.create_screen(name)
            self.scheduler.create_process(name)
            return f"Created screen: {name}"
        if flag == "-r" and len(tokens) > 2:
            name = tokens[2]
            if not self.screens.screen_exists(name):
                return f"Screen not found: {name}"
            screen = self.screens.attach_screen(name)
            self._write(_CLEAR)
            self._write(screen.render(_console_width()))
            if self.scheduler is not None:
                self._write(self.scheduler.search_log(name))
            return ""
        if flag == "-ls":
            if self.scheduler is not None:
                self._write(self.scheduler.render_status())
            return ""
        return None

    def process_command(self, cmd: str) -> str:
        """Run one command line and return the message to show.

        An empty message means the command wrote its own output. The
        ``exit`` command raises :class:`SystemExit`.
        """
        tokens = tokenize(cmd)
        known = cmd in VALID_COMMANDS

        if known and not self.initialized:
            if cmd == "initialize":
                return self._initialize()
            if cmd == "exit":
                raise SystemExit(0)
            return NOT_INITIALIZED

        if tokens and tokens[0] == "screen":
            if not self.initialized:
                return NOT_INITIALIZED
            reply = self._screen_command(tokens)
            if reply is not None:
                return reply

        if self.screens.screen_active() and tokens and tokens[0] in ("quit", "exit"):
            self.screens.detach_screen()
            self.clear_screen()
            return "Returned to main menu"

        if known:
            if cmd == "clear":
                self.clear_screen()
                return "SCREEN CLEARED"
            if cmd == "marquee":
                MarqueeConsole(self.stream).run()
                self.clear_screen()
                return "marquee console finished"
            if cmd == "scheduler-start":
                return self._start_scheduler()
            if cmd == "scheduler-stop":
                if self.scheduler is not None:
                    self.scheduler.stop_generation()
                return "scheduler stopped"
            if cmd == "initialize":
                return "initialize has already been used"
            if cmd == "report-util" and self.scheduler is not None:
                self.scheduler.write_report(self.report_path)
            if cmd == "exit":
                raise SystemExit(0)

        return f"Unknown command: {cmd}"

    def close(self) -> None:
        """Stop any background scheduler threads."""
        if self.scheduler is not None and self.scheduler.running:
            self.scheduler.shutdown()


def main(argv: list[str] | None = None) -> int:
    """Run the interactive shell until ``exit`` or end of input."""
    parser = argparse.ArgumentParser(prog="csopesy", description="Process scheduling emulator shell.")
    parser.add_argument("--config", default="config.txt", help="configuration file to initialize from")
    args = parser.parse_args(argv)

    shell = Shell(args.config, sys.stdout)
    shell.clear_screen()
    try:
        while True:
            if shell.screens.screen_active():
                prompt = "Screen active (type 'quit' to return): "
            else:
                prompt = "Enter a command: "
            sys.stdout.write(prompt)
            sys.stdout.flush()
            line = sys.stdin.readline()
            if not line:
                return 0
            output = shell.process_command(line.rstrip("\r\n").lower())
            if output:
                sys.stdout.write(output + "\n")
                sys.stdout.flush()
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    finally:
        shell.close()