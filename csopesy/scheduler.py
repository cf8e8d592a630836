"""Multi-core process scheduling with first-come-first-served or round-robin."""

from __future__ import annotations

import threading
import time
from collections import deque
from datetime import datetime
from enum import Enum
from pathlib import Path

from .config import Config
from .process import Machine, Process, ProcessState, format_time

_RULE = "-------------------------------------------------------------"


class Policy(Enum):
    FCFS = "fcfs"
    RR = "rr"


def _label(process: Process) -> str:
    pad = "0" if process.pid < 10 else ""
    return f"process{pad}{process.pid}"


class Scheduler:
    """Ready queue, per-core slots and finished list, driven by worker threads.

    The single-step methods (:meth:`dispatch`, :meth:`step_core`) do the
    work; :meth:`start` runs them continuously in background threads.
    """

    def __init__(self, config: Config, machine: Machine | None = None) -> None:
        self.config = config
        self.policy = Policy(config.scheduler)
        self.machine = machine if machine is not None else Machine()
        self.ready_queue: deque[Process] = deque()
        self.cores: list[Process | None] = [None] * config.num_cpu
        self.finished: list[Process] = []
        self.generating = False
        self.running = False
        self.instruction_delay = 0.01
        self.idle_delay = 0.05
        self.generation_delay = 0.01
        self._cond = threading.Condition(threading.RLock())
        self._threads: list[threading.Thread] = []

    # -- process creation -------------------------------------------------

    def _enqueue(self, name: str | None) -> Process:
        process = self.machine.new_process(name, self.config.min_ins, self.config.max_ins)
        with self._cond:
            self.ready_queue.append(process)
            self._cond.notify_all()
        return process

    def create_process(self, name: str) -> Process:
        """Create a named process and put it at the back of the ready queue."""
        return self._enqueue(name)

    # -- scheduling steps -------------------------------------------------

    def dispatch(self) -> list[Process]:
        """Move ready processes onto free cores, lowest core first."""
        placed: list[Process] = []
        with self._cond:
            for core_id, current in enumerate(self.cores):
                if not self.ready_queue:
                    break
                if current is None:
                    process = self.ready_queue.popleft()
                    process.state = ProcessState.RUNNING
                    process.assigned_core = core_id
                    process.quantum_used = 0
                    self.cores[core_id] = process
                    placed.append(process)
        return placed

    def step_core(self, core_id: int) -> str | None:
        """Execute one instruction on a core, then preempt or retire its process.

        Returns the instruction executed, or None if the core was idle or
        its process had nothing left to run.
        """
        with self._cond:
            process = self.cores[core_id]
        if process is None:
            return None
        command = self.machine.execute(process, core_id)
        if command is not None:
            process.quantum_used += 1
        with self._cond:
            if (
                self.policy is Policy.RR
                and process.quantum_used >= self.config.quantum_cycles
                and not process.finished()
            ):
                process.state = ProcessState.READY
                self.ready_queue.append(process)
                self.cores[core_id] = None
                self._cond.notify_all()
            elif process.finished():
                process.state = ProcessState.FINISHED
                process.finish_time = datetime.now()
                self.finished.append(process)
                self.cores[core_id] = None
                self._cond.notify_all()
        return command

    # -- background threads -----------------------------------------------

    def _can_dispatch(self) -> bool:
        if not self.running:
            return True
        return any(p is None for p in self.cores) and bool(self.ready_queue)

    def _scheduler_loop(self) -> None:
        while self.running:
            with self._cond:
                self._cond.wait_for(self._can_dispatch)
                if not self.running:
                    break
                self.dispatch()

    def _core_loop(self, core_id: int) -> None:
        while self.running:
            command = self.step_core(core_id)
            if command is not None:
                time.sleep(self.instruction_delay)
            else:
                with self._cond:
                    idle = self.cores[core_id] is None
                if idle:
                    time.sleep(self.idle_delay)

    def _generator_loop(self) -> None:
        while self.running:
            if self.generating:
                self._enqueue(None)
            time.sleep(self.generation_delay)

    def start(self) -> None:
        """Start the scheduler, one worker per core, and the process generator."""
        if self.running:
            raise RuntimeError("scheduler already started")
        self.running = True
        self.generating = True
        targets = [(self._scheduler_loop, ())]
        targets += [(self._core_loop, (core_id,)) for core_id in range(len(self.cores))]
        targets.append((self._generator_loop, ()))
        self._threads = [
            threading.Thread(target=target, args=args, daemon=True) for target, args in targets
        ]
        for thread in self._threads:
            thread.start()

    def stop_generation(self) -> None:
        """Stop creating new processes; queued and running ones carry on."""
        self.generating = False

    def shutdown(self) -> None:
        """Stop every background thread and wait for them to end."""
        with self._cond:
            self.running = False
            self.generating = False
            self._cond.notify_all()
        for thread in self._threads:
            thread.join()
        self._threads = []

    # -- reporting --------------------------------------------------------

    def _render(self, blank_before_running: bool) -> str:
        with self._cond:
            lines = [f"\n{_RULE}\n"]
            busy = self.cores and self.cores[0] is not None
            lines.append(f"CPU Utilization: {'100' if busy else '0'}%\n")
            lines.append("\nRunning processes:\n" if blank_before_running else "Running processes:\n")
            for p in self.cores:
                if p is not None:
                    lines.append(
                        f"{_label(p)} ({format_time(p.start_time)})\tCore: {p.assigned_core}"
                        f"\t{p.program_counter} / {len(p.commands)}\n"
                    )
            lines.append("\nFinished processes:\n")
            for p in self.finished:
                stamp = format_time(p.finish_time) if p.finish_time else ""
                lines.append(
                    f"{_label(p)} ({stamp})\tFinished\t{p.program_counter} / {len(p.commands)}\n"
                )
            lines.append(f"{_RULE}\n\n")
        return "".join(lines)

    def render_status(self) -> str:
        """Return the listing of running and finished processes."""
        return self._render(blank_before_running=self.policy is Policy.RR)

    def write_report(self, path: str | Path = "csopesy-log.txt") -> None:
        """Append the process listing to the report file at ``path``."""
        report = self._render(blank_before_running=True)
        with open(path, "a") as handle:
            handle.write(report)

    def search_log(self, name: str) -> str:
        """Return the logs of ready processes whose name or id label matches."""
        with self._cond:
            lines = [f"\n{_RULE}\n"]
            for p in self.ready_queue:
                if name == p.name or name == f"process{p.pid}":
                    lines.extend(f"{entry}\n" for entry in p.log)
            lines.append(f"{_RULE}\n\n")
        lines.append(name)
        return "".join(lines)