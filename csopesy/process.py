"""Processes, their instructions, and the machine that executes them."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

_WORD_MASK = 0xFFFF
_SIMPLE_COMMANDS = ("declare", "add", "sub", "sleep", "for")


class ProcessState(Enum):
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


def format_time(moment: datetime) -> str:
    """Format a timestamp the way process listings and logs show it."""
    return moment.strftime("%m/%d/%Y %I:%M:%S%p")


@dataclass(eq=False)
class Process:
    """A process: its instruction list and execution progress."""

    pid: int
    name: str
    commands: list[str]
    program_counter: int = 0
    state: ProcessState = ProcessState.READY
    start_time: datetime = field(default_factory=datetime.now)
    finish_time: datetime | None = None
    assigned_core: int = -1
    quantum_used: int = 0
    log: list[str] = field(default_factory=list)

    def finished(self) -> bool:
        """True once every instruction has been executed."""
        return self.program_counter >= len(self.commands)


class Machine:
    """Shared machine state: three 16-bit variables and a clock counter."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.variable_a = 0
        self.variable_b = 0
        self.variable_c = 0
        self.cpu_clocks = 1
        self._lock = threading.Lock()

    def new_process(self, name: str | None, min_ins: int, max_ins: int) -> Process:
        """Generate a process with a random instruction list.

        The process id is the clock value at creation. Without a name the
        process is called ``process<id>``. Each generated instruction
        advances the clock by one.
        """
        with self._lock:
            pid = self.cpu_clocks
            commands: list[str] = []
            for _ in range(self.rng.randint(min_ins, max_ins)):
                kind = self.rng.randint(0, 5)
                if kind == 0:
                    if name is None:
                        commands.append(f"Hello world from process p{self.cpu_clocks}!")
                    else:
                        commands.append(f"Hello world from process {name}!")
                else:
                    commands.append(_SIMPLE_COMMANDS[kind - 1])
                self.cpu_clocks += 1
        return Process(
            pid=pid,
            name=name if name is not None else f"process{pid}",
            commands=commands,
        )

    def _add(self) -> None:
        self.variable_a = (self.variable_b + self.variable_c) & _WORD_MASK

    def execute(self, process: Process, core_id: int) -> str | None:
        """Run the process's next instruction on ``core_id``.

        Returns the instruction executed, or None if the process has
        nothing left to run. Print instructions are appended to the
        process log with a timestamp and the core number.
        """
        if process.finished():
            return None
        command = process.commands[process.program_counter]
        now = datetime.now()
        with self._lock:
            if command == "declare":
                choice = self.rng.randint(0, 2)
                if choice == 0:
                    self.variable_a = 1
                elif choice == 1:
                    self.variable_b = 1
                else:
                    self.variable_c = 1
            elif command == "add":
                self._add()
            elif command == "sub":
                self.variable_a = (self.variable_b - self.variable_c) & _WORD_MASK
            elif command == "sleep":
                self.cpu_clocks += 10
            elif command == "for":
                for _ in range(5):
                    self._add()
            else:
                process.log.append(f'({format_time(now)}) Core:{core_id} "{command}"\n')
        process.program_counter += 1
        return command